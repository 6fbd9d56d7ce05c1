import numpy as np
import pandas as pd
import pytest
from wle_ml.common.errors import SchemaMismatch
from wle_ml.evaluation.metrics import EvaluationResult, accuracy_from_matrix, confusion_matrix_frame, evaluate
from wle_ml.evaluation.reports import accuracy_summary, save_evaluation_report, select_best_model
from wle_ml.models import BaggedTreeClassifier
from wle_ml.training.trainer import partition_table


def _result(name, accuracy, table="holdout"):
    return EvaluationResult(name, table, pd.DataFrame([[1]]), accuracy)


def test_confusion_matrix_frame_orientation():
    y_true = ["A", "A", "B", "C", "C"]
    y_pred = ["A", "B", "B", "C", "A"]
    cm = confusion_matrix_frame(y_true, y_pred)
    assert list(cm.index) == ["A", "B", "C"]
    assert list(cm.columns) == ["A", "B", "C"]
    assert cm.loc["A", "B"] == 1
    assert cm.loc["C", "A"] == 1
    assert cm.to_numpy().sum() == 5


def test_confusion_matrix_includes_unpredicted_labels():
    cm = confusion_matrix_frame(["A", "B"], ["A", "A"], labels=["A", "B", "E"])
    assert cm.shape == (3, 3)
    assert cm.loc["E"].sum() == 0


@pytest.mark.parametrize("seed", range(5))
def test_accuracy_is_trace_over_total(seed):
    rng = np.random.default_rng(seed)
    matrix = rng.integers(0, 50, size=(5, 5))
    matrix[0, 0] += 1
    assert accuracy_from_matrix(matrix) == np.trace(matrix) / matrix.sum()


def test_accuracy_rejects_empty_or_non_square():
    with pytest.raises(ValueError):
        accuracy_from_matrix(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        accuracy_from_matrix(np.ones((2, 3)))


def test_evaluate_in_and_out_of_sample(filtered_table, sensor_columns):
    fit, holdout = partition_table(filtered_table, "classe", 0.7, seed=5)
    model = BaggedTreeClassifier(n_trees=50, seed=5, n_jobs=1).fit(fit, sensor_columns, "classe")

    in_sample = evaluate(model, fit, "classe", "fit")
    out_of_sample = evaluate(model, holdout, "classe", "holdout")

    assert in_sample.confusion_matrix.shape == (5, 5)
    assert in_sample.confusion_matrix.to_numpy().sum() == len(fit)
    assert out_of_sample.confusion_matrix.to_numpy().sum() == len(holdout)
    assert in_sample.accuracy == accuracy_from_matrix(in_sample.confusion_matrix)
    assert in_sample.accuracy >= out_of_sample.accuracy
    assert "A" in in_sample.class_report


def test_evaluate_requires_model_columns(filtered_table, sensor_columns):
    model = BaggedTreeClassifier(n_trees=5, n_jobs=1).fit(filtered_table, sensor_columns, "classe")
    with pytest.raises(SchemaMismatch):
        evaluate(model, filtered_table.drop(columns=[sensor_columns[-1]]), "classe")


def test_evaluate_requires_label(filtered_table, sensor_columns):
    model = BaggedTreeClassifier(n_trees=5, n_jobs=1).fit(filtered_table, sensor_columns, "classe")
    with pytest.raises(SchemaMismatch, match="classe"):
        evaluate(model, filtered_table.drop(columns=["classe"]), "classe")


def test_select_best_model():
    results = [_result("random_forest", 0.91), _result("gradient_boosting", 0.95), _result("random_forest_top20", 0.9)]
    assert select_best_model(results) == "gradient_boosting"


def test_select_best_model_tie_goes_to_first():
    results = [_result("random_forest", 0.95), _result("gradient_boosting", 0.95)]
    assert select_best_model(results) == "random_forest"


def test_select_best_model_empty():
    with pytest.raises(ValueError):
        select_best_model([])


def test_accuracy_summary_and_report(tmp_path):
    summary = accuracy_summary([_result("rf", 1.0, "fit")], [_result("rf", 0.9)])
    assert summary == {"rf": {"in_sample": 1.0, "out_of_sample": 0.9}}

    path = tmp_path / "reports" / "evaluation.json"
    save_evaluation_report({"accuracy": summary}, path)
    assert path.exists()
    assert '"out_of_sample": 0.9' in path.read_text()
