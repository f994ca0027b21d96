"""
Named-function registry.

Metric functions are registered under their own name together with the names
of their parameters, so callers can list them and invoke them by name.
"""

import inspect
from typing import Any, Callable

_REGISTRY: dict[str, tuple[Callable[..., Any], tuple[str, ...]]] = {}


def register_function(*parameter_names: str):
  def decorator(function: Callable[..., Any]) -> Callable[..., Any]:
    name = function.__name__
    if name in _REGISTRY:
      raise ValueError(f"Function already registered: '{name}'")
    positional_names = tuple(
      parameter.name
      for parameter in inspect.signature(function).parameters.values()
      if parameter.kind
      in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD)
    )
    if positional_names != tuple(parameter_names):
      raise ValueError(
        f"Declared parameters {tuple(parameter_names)} do not match the "
        f"signature of '{name}': {positional_names}"
      )
    _REGISTRY[name] = (function, tuple(parameter_names))
    return function

  return decorator


def list_functions() -> list[str]:
  return list(_REGISTRY)


def get_function(name: str) -> Callable[..., Any]:
  if name not in _REGISTRY:
    raise KeyError(
      f"Unknown function: '{name}'. Registered functions: {list_functions()}"
    )
  return _REGISTRY[name][0]


def function_parameters(name: str) -> tuple[str, ...]:
  get_function(name)
  return _REGISTRY[name][1]


def call_function(name: str, *args, **kwargs) -> Any:
  return get_function(name)(*args, **kwargs)
