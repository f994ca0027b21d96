import argparse
import json
import math
import sys
from pathlib import Path

import pandas

from binmetrics.core.metrics import LengthMismatch
from binmetrics.core.registry import call_function, list_functions
from binmetrics.utils.common import (
  add_path_arguments,
  load_config,
  log_message,
  parse_zero_division,
)

ZERO_DIVISION_METRICS = {"precision_score", "recall_score", "f1_score"}


def read_label_columns(
  csv_path: str | Path, actual_column: str, predicted_column: str
) -> tuple[list[str], list[str]]:
  csv_path = Path(csv_path)
  if not csv_path.exists():
    raise FileNotFoundError(f"Could not find the labels file at {csv_path}")
  dataframe = pandas.read_csv(csv_path, dtype=str, keep_default_na=False)
  for column in (actual_column, predicted_column):
    if column not in dataframe.columns:
      raise KeyError(
        f"Column '{column}' not found in {csv_path}. "
        f"Available columns: {dataframe.columns.tolist()}"
      )
  return dataframe[actual_column].tolist(), dataframe[predicted_column].tolist()


def split_labels(text: str) -> list[str]:
  return [label.strip() for label in text.split(",")] if text else []


def compute_metrics(
  actual, predicted, pos_label, metric_names: list[str], zero_division: float
) -> dict:
  results = {}
  for name in metric_names:
    if name in ZERO_DIVISION_METRICS:
      results[name] = call_function(
        name,
        actual=actual,
        predicted=predicted,
        pos_label=pos_label,
        zero_division=zero_division,
      )
    else:
      results[name] = call_function(
        name, actual=actual, predicted=predicted, pos_label=pos_label
      )
  return results


def format_results(results: dict, output_format: str) -> str:
  if output_format == "json":
    # NaN scores become null to keep the output strict JSON
    json_results = {
      name: None if isinstance(value, float) and math.isnan(value) else value
      for name, value in results.items()
    }
    return json.dumps(json_results, indent=2, allow_nan=False)
  width = max((len(name) for name in results), default=0)
  lines = []
  for name, value in results.items():
    formatted_value = f"{value:.4f}" if isinstance(value, float) else str(value)
    lines.append(f"{name:<{width}} : {formatted_value}")
  return "\n".join(lines)


def build_parser(config: dict) -> argparse.ArgumentParser:
  metrics_config = config.get("metrics", {})
  parser = argparse.ArgumentParser(
    description="Compute binary classification metrics for a positive label."
  )
  parser.add_argument(
    "--config", type=str, default="config.jsonc", help="Path to a JSONC config file."
  )
  source_group = parser.add_mutually_exclusive_group(required=True)
  source_group.add_argument(
    "--labels-file", type=str, help="CSV file holding actual and predicted labels."
  )
  source_group.add_argument(
    "--actual", type=str, help="Comma-separated actual labels, e.g. '1,1,0,0,0'."
  )
  parser.add_argument(
    "--predicted",
    type=str,
    help="Comma-separated predicted labels, used together with --actual.",
  )
  parser.add_argument("--actual-column", type=str, default="actual")
  parser.add_argument("--predicted-column", type=str, default="predicted")
  pos_label_default = metrics_config.get("pos_label")
  parser.add_argument(
    "--pos-label",
    type=str,
    default=None if pos_label_default is None else str(pos_label_default),
    required=pos_label_default is None,
    help="Label of the positive class.",
  )
  parser.add_argument(
    "--metrics",
    nargs="+",
    default=metrics_config.get("names") or list_functions(),
    help=f"Metrics to compute. Choices: {', '.join(list_functions())}",
  )
  parser.add_argument(
    "--zero-division",
    type=str,
    default=str(metrics_config.get("zero_division", 0.0)),
    help="Value returned when a score denominator is zero (a number or 'nan').",
  )
  parser.add_argument("--output", choices=["table", "json"], default="table")
  return add_path_arguments(parser, config)


def main(argv: list[str] | None = None) -> int:
  config_parser = argparse.ArgumentParser(add_help=False)
  config_parser.add_argument("--config", type=str, default="config.jsonc")
  known_args, _ = config_parser.parse_known_args(argv)
  config = load_config(known_args.config)

  parser = build_parser(config)
  args = parser.parse_args(argv)
  console_log_file = args.console_log_file

  unknown_metrics = [name for name in args.metrics if name not in list_functions()]
  if unknown_metrics:
    parser.error(
      f"Unknown metrics: {unknown_metrics}. Choices: {', '.join(list_functions())}"
    )
  if args.actual is not None and args.predicted is None:
    parser.error("--predicted is required when --actual is given")

  try:
    zero_division = parse_zero_division(args.zero_division)
  except ValueError:
    parser.error(f"Invalid --zero-division value: '{args.zero_division}'")

  if args.labels_file:
    log_message(f"Loading labels from {args.labels_file}", console_log_file=console_log_file)
    actual, predicted = read_label_columns(
      args.labels_file, args.actual_column, args.predicted_column
    )
  else:
    actual, predicted = split_labels(args.actual), split_labels(args.predicted)
  log_message(
    f"Computing {len(args.metrics)} metrics over {len(actual)} observations "
    f"(positive label '{args.pos_label}')",
    console_log_file=console_log_file,
  )

  try:
    results = compute_metrics(
      actual, predicted, args.pos_label, args.metrics, zero_division
    )
  except LengthMismatch as error:
    log_message(str(error), "ERROR", console_log_file=console_log_file)
    return 1

  print(format_results(results, args.output))
  return 0


if __name__ == "__main__":
  sys.exit(main())
