import pandas as pd
import pytest
from wle_ml.features.selection import select_top_features


def test_descending_order():
    scores = pd.Series({"roll_belt": 0.1, "yaw_belt": 0.5, "pitch_forearm": 0.3})
    assert select_top_features(scores, 2) == ["yaw_belt", "pitch_forearm"]


def test_ties_keep_column_order():
    scores = pd.Series({"a": 0.2, "b": 0.4, "c": 0.2, "d": 0.4, "e": 0.1})
    assert select_top_features(scores, 4) == ["b", "d", "a", "c"]


def test_accepts_dict():
    assert select_top_features({"x": 1.0, "y": 2.0}, 1) == ["y"]


@pytest.mark.parametrize("k", [0, 4])
def test_k_out_of_range(k):
    with pytest.raises(ValueError):
        select_top_features({"a": 1.0, "b": 2.0, "c": 3.0}, k)
