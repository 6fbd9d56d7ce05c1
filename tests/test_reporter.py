import pandas as pd
import pytest
from wle_ml.models import BaggedTreeClassifier
from wle_ml.prediction.reporter import compare, predict_all, write_predictions_table, write_results
from wle_ml.preprocessing.transforms import fit_column_filter

PREDICTIONS = list("BABAAEDBAABCBAEEABBB")


def test_compare_identical():
    result = compare(PREDICTIONS, list(PREDICTIONS))
    assert result.agreement is True
    assert result.differences == set()


def test_compare_one_row_differs():
    other = list(PREDICTIONS)
    other[3] = "C"
    result = compare(PREDICTIONS, other)
    assert result.agreement is False
    assert result.differences == {"A", "C"}


def test_compare_length_mismatch():
    with pytest.raises(ValueError):
        compare(["A"], ["A", "B"])


def test_write_results(tmp_path):
    paths = write_results(PREDICTIONS, tmp_path / "predictions")
    assert len(paths) == 20
    assert paths[0].name == "problem_id_1.txt"
    assert paths[-1].name == "problem_id_20.txt"
    assert (tmp_path / "predictions" / "problem_id_4.txt").read_text() == "A"


def test_write_results_empty(tmp_path):
    out = tmp_path / "predictions"
    assert write_results([], out) == []
    assert not out.exists() or not any(out.iterdir())


def test_write_predictions_table(tmp_path):
    path = write_predictions_table(["A", "E"], tmp_path / "predictions.csv", row_ids=[7, 8])
    df = pd.read_csv(path)
    assert list(df.columns) == ["problem_id", "prediction"]
    assert df["problem_id"].tolist() == [7, 8]
    assert df["prediction"].tolist() == ["A", "E"]


def test_write_predictions_table_id_mismatch(tmp_path):
    with pytest.raises(ValueError):
        write_predictions_table(["A"], tmp_path / "p.csv", row_ids=[1, 2])


def test_predict_all_preserves_row_order(labeled_table, unlabeled_table):
    filtered, column_filter = fit_column_filter(labeled_table)
    features = [c for c in filtered.columns if c != "classe"]
    model = BaggedTreeClassifier(n_trees=30, seed=2, n_jobs=1).fit(filtered, features, "classe")
    unlabeled = column_filter.transform(unlabeled_table)

    forward = predict_all(model, unlabeled)
    backward = predict_all(model, unlabeled.iloc[::-1])
    assert len(forward) == 20
    assert forward == backward[::-1]
