import argparse
import copy
import json
import re
import time
from pathlib import Path

DEFAULT_CONFIG = {
  "metrics": {
    "zero_division": 0.0,
    "names": [],
    "pos_label": None,
  },
  "paths": {
    "console_log_file": None,
  },
}

LOG_LEVELS = {"INFO", "ERROR", "DEBUG"}
START_TIME = time.time()


def load_config(config_path: str | Path = "config.jsonc") -> dict:
  config_path = Path(config_path)
  config = copy.deepcopy(DEFAULT_CONFIG)
  if not config_path.exists():
    return config
  raw_text = config_path.read_text()
  cleaned_text = re.sub(r"//.*?\n|/\*.*?\*/", "", raw_text, flags=re.S)
  for section, values in json.loads(cleaned_text).items():
    config.setdefault(section, {}).update(values)
  return config


def parse_zero_division(value: float | int | str) -> float:
  if isinstance(value, str) and value.strip().lower() == "nan":
    return float("nan")
  return float(value)


def log_message(
  message: str,
  level: str = "INFO",
  indent: int = 0,
  console_log_file: str | Path | None = None,
) -> str:
  if level not in LOG_LEVELS:
    raise ValueError(f"Invalid log level: '{level}'. Must be one of {LOG_LEVELS}")
  elapsed_time_seconds = time.time() - START_TIME
  time_string = time.strftime("%H:%M:%S", time.gmtime(elapsed_time_seconds))
  indentation = " " * (indent * 2)
  formatted_log_message = f"{indentation}○ [{level}] {time_string} ∘ {message}"
  print(formatted_log_message)
  if console_log_file:
    with open(console_log_file, "a") as file_handle:
      file_handle.write(formatted_log_message + "\n")
  return formatted_log_message


def add_path_arguments(
  parser: argparse.ArgumentParser, config: dict | None = None
) -> argparse.ArgumentParser:
  config = config or load_config()
  path_section = config.get("paths", {})
  parser.add_argument(
    "--console-log-file",
    type=str,
    default=path_section.get("console_log_file"),
  )
  return parser
