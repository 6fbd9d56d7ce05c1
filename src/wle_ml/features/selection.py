import pandas as pd


def select_top_features(importances: pd.Series | dict, k: int) -> list[str]:
    """
    Names of the ``k`` most important features.

    Scores are ranked strictly descending; equal scores keep the original
    column order.
    """
    scores = pd.Series(importances, dtype=float)
    if not 1 <= k <= len(scores):
        raise ValueError(f"k must be between 1 and {len(scores)}, got {k}")

    return list(scores.sort_values(ascending=False, kind="stable").index[:k])
