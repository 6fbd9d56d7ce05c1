import numpy as np
import pandas as pd
import pytest

LEADING = ["Unnamed: 0", "user_name", "raw_timestamp_part_1", "raw_timestamp_part_2",
           "cvtd_timestamp", "new_window", "num_window"]
CLASSES = ["A", "B", "C", "D", "E"]


def make_labeled_table(n_rows=100, n_sensors=18, n_empty=2, seed=0):
    """Leading id columns, separable sensor columns, fully-missing columns and ``classe``."""
    rng = np.random.default_rng(seed)
    labels = np.array([CLASSES[i % len(CLASSES)] for i in range(n_rows)])
    codes = np.array([CLASSES.index(c) for c in labels])

    df = pd.DataFrame({
        "Unnamed: 0": np.arange(1, n_rows + 1),
        "user_name": rng.choice(["adelmo", "carlitos", "pedro"], n_rows),
        "raw_timestamp_part_1": rng.integers(1_322_000_000, 1_323_000_000, n_rows),
        "raw_timestamp_part_2": rng.integers(0, 999_999, n_rows),
        "cvtd_timestamp": "05/12/2011 11:23",
        "new_window": "no",
        "num_window": rng.integers(1, 800, n_rows),
    })
    for i in range(n_sensors):
        if i % 3 == 0:
            df[f"sensor_{i}"] = codes * 10.0 + rng.normal(0, 1, n_rows)
        else:
            df[f"sensor_{i}"] = rng.normal(0, 1, n_rows)
    for i in range(n_empty):
        df[f"empty_{i}"] = np.nan
    df["classe"] = labels
    return df


def make_unlabeled_table(labeled, n_rows=20, seed=1):
    rng = np.random.default_rng(seed)
    df = labeled.drop(columns=["classe"]).sample(n=n_rows, random_state=seed).reset_index(drop=True)
    sensors = [c for c in df.columns if c.startswith("sensor_")]
    df[sensors] = df[sensors] + rng.normal(0, 0.1, (n_rows, len(sensors)))
    df["problem_id"] = np.arange(1, n_rows + 1)
    return df


@pytest.fixture
def labeled_table():
    return make_labeled_table()


@pytest.fixture
def unlabeled_table(labeled_table):
    return make_unlabeled_table(labeled_table)


@pytest.fixture
def filtered_table(labeled_table):
    return labeled_table.iloc[:, 7:].drop(columns=["empty_0", "empty_1"])


@pytest.fixture
def sensor_columns(filtered_table):
    return [c for c in filtered_table.columns if c != "classe"]
