"""
Binary classification metrics for a single positive label.

∘ true_positive        –   Σᵢ [yᵢ==L ∧ ŷᵢ==L]                                  ─ O(N)
∘ false_positive       –   Σᵢ [yᵢ≠L ∧ ŷᵢ==L]                                  ─ O(N)
∘ true_negative        –   Σᵢ [yᵢ≠L ∧ ŷᵢ≠L]                                   ─ O(N)
∘ false_negative       –   Σᵢ [yᵢ==L ∧ ŷᵢ≠L]                                  ─ O(N)
∘ precision_score      –   TP/(TP+FP)                                          ─ O(N)
∘ recall_score         –   TP/(TP+FN)                                          ─ O(N)
∘ f1_score             –   2·P·R/(P+R)                                         ─ O(N)

L = positive label, y = actual, ŷ = predicted.
Labels are compared with value equality only. Every call recomputes its counts.
"""

from typing import Any, Iterable, NamedTuple

import numpy as np

from .registry import register_function

PARAMETER_NAMES = ("actual", "predicted", "pos_label")


class LengthMismatch(ValueError):
  def __init__(self, operation: str, actual_length: int, predicted_length: int):
    self.operation = operation
    self.actual_length = actual_length
    self.predicted_length = predicted_length
    super().__init__(
      f"Cannot calculate {operation}. Input arrays of different size "
      f"({actual_length} != {predicted_length})"
    )


class ConfusionCounts(NamedTuple):
  true_positive: int
  false_positive: int
  true_negative: int
  false_negative: int

  @property
  def total(self) -> int:
    return sum(self)


def _as_label_array(labels: Iterable[Any]) -> np.ndarray:
  if isinstance(labels, np.ndarray):
    if labels.ndim != 1:
      raise ValueError(
        f"Expected a one-dimensional sequence of labels, got shape {labels.shape}"
      )
    return labels.astype(object)
  if not hasattr(labels, "__len__"):
    labels = list(labels)
  # fromiter keeps tuple labels as single elements
  return np.fromiter(labels, dtype=object, count=len(labels))


def _matches(label, pos_label) -> bool:
  equal = label == pos_label
  # missing values such as pandas.NA compare to neither class
  if isinstance(equal, (bool, np.bool_)):
    return bool(equal)
  return False


def _positive_masks(actual, predicted, pos_label, operation: str):
  """
  Validate lengths and return boolean masks (actual == L, predicted == L).
  Raises `LengthMismatch` before any comparison is made.
  """
  actual = _as_label_array(actual)
  predicted = _as_label_array(predicted)
  if len(actual) != len(predicted):
    raise LengthMismatch(operation, len(actual), len(predicted))
  actual_positive = np.fromiter(
    (_matches(label, pos_label) for label in actual), dtype=bool, count=len(actual)
  )
  predicted_positive = np.fromiter(
    (_matches(label, pos_label) for label in predicted),
    dtype=bool,
    count=len(predicted),
  )
  return actual_positive, predicted_positive


def _divide(numerator: float, denominator: float, zero_division: float) -> float:
  return float(numerator / denominator) if denominator != 0 else float(zero_division)


def _harmonic_mean(precision: float, recall: float, zero_division: float) -> float:
  denominator = precision + recall
  # NaN only reaches here when zero_division is NaN
  if np.isnan(denominator):
    return float(zero_division)
  return _divide(2 * precision * recall, denominator, zero_division)


@register_function(*PARAMETER_NAMES)
def true_positive(actual, predicted, pos_label) -> int:
  actual_positive, predicted_positive = _positive_masks(
    actual, predicted, pos_label, "True-Positive"
  )
  return int(np.sum(actual_positive & predicted_positive))


@register_function(*PARAMETER_NAMES)
def false_positive(actual, predicted, pos_label) -> int:
  actual_positive, predicted_positive = _positive_masks(
    actual, predicted, pos_label, "False-Positive"
  )
  return int(np.sum(predicted_positive & ~actual_positive))


@register_function(*PARAMETER_NAMES)
def true_negative(actual, predicted, pos_label) -> int:
  actual_positive, predicted_positive = _positive_masks(
    actual, predicted, pos_label, "True-Negative"
  )
  return int(np.sum(~predicted_positive & ~actual_positive))


@register_function(*PARAMETER_NAMES)
def false_negative(actual, predicted, pos_label) -> int:
  actual_positive, predicted_positive = _positive_masks(
    actual, predicted, pos_label, "False-Negative"
  )
  return int(np.sum(~predicted_positive & actual_positive))


@register_function(*PARAMETER_NAMES)
def precision_score(actual, predicted, pos_label, *, zero_division: float = 0.0) -> float:
  """
  Fraction of predicted positives that are actually positive.
  Returns `zero_division` when nothing was predicted positive; pass
  `float("nan")` to get the raw 0/0 result instead of 0.
  """
  t_p = true_positive(actual, predicted, pos_label)
  f_p = false_positive(actual, predicted, pos_label)
  return _divide(t_p, t_p + f_p, zero_division)


@register_function(*PARAMETER_NAMES)
def recall_score(actual, predicted, pos_label, *, zero_division: float = 0.0) -> float:
  """
  Fraction of actual positives that were predicted positive.
  Returns `zero_division` when there are no actual positives.
  """
  t_p = true_positive(actual, predicted, pos_label)
  f_n = false_negative(actual, predicted, pos_label)
  return _divide(t_p, t_p + f_n, zero_division)


@register_function(*PARAMETER_NAMES)
def f1_score(actual, predicted, pos_label, *, zero_division: float = 0.0) -> float:
  """
  Harmonic mean of precision and recall.
  Returns `zero_division` when precision + recall is 0 (or NaN).
  """
  recall = recall_score(actual, predicted, pos_label, zero_division=zero_division)
  precision = precision_score(actual, predicted, pos_label, zero_division=zero_division)
  return _harmonic_mean(precision, recall, zero_division)


def confusion_counts(actual, predicted, pos_label) -> ConfusionCounts:
  actual_positive, predicted_positive = _positive_masks(
    actual, predicted, pos_label, "Confusion-Counts"
  )
  return ConfusionCounts(
    true_positive=int(np.sum(actual_positive & predicted_positive)),
    false_positive=int(np.sum(predicted_positive & ~actual_positive)),
    true_negative=int(np.sum(~predicted_positive & ~actual_positive)),
    false_negative=int(np.sum(~predicted_positive & actual_positive)),
  )


def classification_report(
  actual, predicted, pos_label, zero_division: float = 0.0
) -> dict[str, float]:
  counts = confusion_counts(actual, predicted, pos_label)
  precision = _divide(
    counts.true_positive,
    counts.true_positive + counts.false_positive,
    zero_division,
  )
  recall = _divide(
    counts.true_positive,
    counts.true_positive + counts.false_negative,
    zero_division,
  )
  return {
    **counts._asdict(),
    "precision_score": precision,
    "recall_score": recall,
    "f1_score": _harmonic_mean(precision, recall, zero_division),
  }
