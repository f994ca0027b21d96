import math

import numpy as np
import pandas
import pytest

from binmetrics.core.metrics import (
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

COUNTERS = [true_positive, false_positive, true_negative, false_negative]


@pytest.mark.parametrize(
  "actual,predicted,pos_label,expected",
  [
    ([1, 1, 0, 0, 0], [0, 1, 0, 0, 1], 1, (1, 1, 2, 1)),
    (["a", "b", "a", "a", "a", "b"], ["a", "a", "b", "b", "b", "a"], "a", (1, 2, 0, 3)),
    ([0, 0, 0], [0, 0, 0], 1, (0, 0, 3, 0)),  # L absent from both
    ([], [], 1, (0, 0, 0, 0)),
  ],
)
def test_counts(actual, predicted, pos_label, expected):
  computed = tuple(counter(actual, predicted, pos_label) for counter in COUNTERS)
  assert computed == expected
  assert confusion_counts(actual, predicted, pos_label) == ConfusionCounts(*expected)


@pytest.mark.parametrize("counter", COUNTERS + [confusion_counts])
def test_length_mismatch(counter):
  with pytest.raises(LengthMismatch) as error_info:
    counter([1, 1, 0, 0, 0], [0, 1, 0, 0], 1)
  assert error_info.value.actual_length == 5
  assert error_info.value.predicted_length == 4
  assert "different size" in str(error_info.value)


def test_length_mismatch_names_operation():
  with pytest.raises(LengthMismatch, match="False-Negative") as error_info:
    false_negative([1, 0], [1], 1)
  assert error_info.value.operation == "False-Negative"
  assert isinstance(error_info.value, ValueError)


@pytest.mark.parametrize("score", [precision_score, recall_score, f1_score])
def test_derived_scores_propagate_length_mismatch(score):
  with pytest.raises(LengthMismatch):
    score([1, 0, 1], [1, 0], 1)


def test_named_parameters():
  assert true_positive(actual=[1, 1, 0], predicted=[1, 0, 0], pos_label=1) == 1
  assert precision_score(predicted=[1, 1, 0], actual=[1, 0, 0], pos_label=1) == 0.5


def test_value_equality_not_identity():
  actual = ["".join(["p", "os"]) for _ in range(3)]
  predicted = ["pos", "neg", "pos"]
  assert true_positive(actual, predicted, "pos") == 2
  assert true_positive(np.array([1, 2, 1]), [1.0, 1.0, 1.0], 1) == 2


def test_accepts_arrays_series_and_iterables():
  actual = np.array([1, 1, 0, 0, 0])
  predicted = pandas.Series([0, 1, 0, 0, 1])
  assert true_negative(actual, predicted, 1) == 2
  assert false_positive(iter([1, 1, 0, 0, 0]), (x for x in [0, 1, 0, 0, 1]), 1) == 1


def test_rejects_multidimensional_input():
  with pytest.raises(ValueError, match="one-dimensional"):
    true_positive(np.zeros((2, 2)), np.zeros((2, 2)), 1)


def test_scores_from_counts():
  actual = [1, 1, 0, 0, 0]
  predicted = [0, 1, 0, 0, 1]
  precision = precision_score(actual, predicted, 1)
  recall = recall_score(actual, predicted, 1)
  assert np.isclose(precision, 0.5)
  assert np.isclose(recall, 0.5)
  assert np.isclose(f1_score(actual, predicted, 1), 2 * precision * recall / (precision + recall))
  assert np.isclose(f1_score(actual, predicted, 1), 0.5)
  assert isinstance(precision, float)


def test_perfect_predictions():
  labels = ["cat", "dog", "cat", "cat"]
  assert precision_score(labels, labels, "cat") == 1.0
  assert recall_score(labels, labels, "cat") == 1.0
  assert f1_score(labels, labels, "cat") == 1.0


def test_f1_zero_when_precision_and_recall_zero():
  actual = [1, 1, 0, 0]
  predicted = [0, 0, 1, 1]
  assert precision_score(actual, predicted, 1) == 0.0
  assert recall_score(actual, predicted, 1) == 0.0
  assert f1_score(actual, predicted, 1) == 0.0


@pytest.mark.parametrize("score", [precision_score, recall_score, f1_score])
def test_zero_denominator_defaults_to_zero(score):
  assert score([0, 0, 0], [0, 0, 0], 1) == 0.0


@pytest.mark.parametrize("score", [precision_score, recall_score, f1_score])
def test_zero_denominator_nan(score):
  assert math.isnan(score([0, 0, 0], [0, 0, 0], 1, zero_division=float("nan")))


def test_zero_division_only_applies_to_empty_denominator():
  # No predicted positives, but one actual positive
  actual = [1, 0, 0]
  predicted = [0, 0, 0]
  assert precision_score(actual, predicted, 1, zero_division=1.0) == 1.0
  assert recall_score(actual, predicted, 1, zero_division=1.0) == 0.0
  assert math.isnan(f1_score(actual, predicted, 1, zero_division=float("nan")))


def test_counts_sum_to_length():
  rng = np.random.default_rng(0)
  for n in [1, 7, 50, 200]:
    actual = rng.choice(["x", "y", "z"], size=n)
    predicted = rng.choice(["x", "y", "z"], size=n)
    counts = confusion_counts(actual, predicted, "x")
    assert counts.total == n
    assert sum(counter(actual, predicted, "x") for counter in COUNTERS) == n


def test_scores_bounded():
  for _ in range(20):
    actual = np.random.randint(0, 2, size=30)
    predicted = np.random.randint(0, 2, size=30)
    for score in (precision_score, recall_score, f1_score):
      assert 0.0 <= score(actual, predicted, 1) <= 1.0


def test_classification_report_matches_functions():
  actual = ["a", "b", "a", "a", "a", "b"]
  predicted = ["a", "a", "b", "b", "b", "a"]
  report = classification_report(actual, predicted, "a")
  assert report["true_positive"] == 1
  assert report["false_positive"] == 2
  assert report["true_negative"] == 0
  assert report["false_negative"] == 3
  assert np.isclose(report["precision_score"], precision_score(actual, predicted, "a"))
  assert np.isclose(report["recall_score"], recall_score(actual, predicted, "a"))
  assert np.isclose(report["f1_score"], f1_score(actual, predicted, "a"))


def test_classification_report_zero_division():
  report = classification_report([0, 0], [0, 0], 1, zero_division=float("nan"))
  assert math.isnan(report["precision_score"])
  assert math.isnan(report["f1_score"])
  with pytest.raises(LengthMismatch, match="Confusion-Counts"):
    classification_report([0, 0], [0], 1)


def test_tuple_labels():
  actual = [("a", 1), ("b", 2), ("a", 1)]
  predicted = [("a", 1), ("a", 1), ("b", 2)]
  assert confusion_counts(actual, predicted, ("a", 1)) == ConfusionCounts(1, 1, 0, 1)
  with pytest.raises(LengthMismatch):
    false_negative([(1, 2), (3, 4)], [(1, 2), (3, 4), (5, 6)], (1, 2))


def test_missing_values_count_as_negative():
  actual = pandas.Series([1, None, 0], dtype="Int64")
  predicted = pandas.Series([1, 1, None], dtype="Int64")
  assert confusion_counts(actual, predicted, 1) == ConfusionCounts(1, 1, 1, 0)
  assert true_positive(actual, predicted, 1) == 1
