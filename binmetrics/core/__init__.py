from .metrics import (
    ConfusionCounts,
    LengthMismatch,
    classification_report,
    confusion_counts,
    f1_score,
    false_negative,
    false_positive,
    precision_score,
    recall_score,
    true_negative,
    true_positive,
)
from .registry import call_function, function_parameters, get_function, list_functions

__all__ = [
    "ConfusionCounts",
    "LengthMismatch",
    "classification_report",
    "confusion_counts",
    "f1_score",
    "false_negative",
    "false_positive",
    "precision_score",
    "recall_score",
    "true_negative",
    "true_positive",
    "call_function",
    "function_parameters",
    "get_function",
    "list_functions",
]
