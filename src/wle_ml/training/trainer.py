import logging
import math

import pandas as pd
from sklearn.model_selection import train_test_split

from wle_ml.common.errors import DegenerateLabel, InsufficientData, InvalidSplitFraction
from wle_ml.validation.schema import validate_dataframe_schema

logger = logging.getLogger(__name__)


def check_label(labels: pd.Series, n_classes: int | None = None) -> int:
    """
    Return the number of classes, rejecting labels that cannot be learned.

    ``n_classes`` is the size of the full label set when ``labels`` is a
    subset of a larger table.
    """
    observed = labels.nunique(dropna=True)
    if observed < 2:
        raise DegenerateLabel(f"Label '{labels.name}' has {observed} distinct value(s), need at least 2")
    n_classes = max(n_classes or 0, observed)
    if len(labels) < n_classes:
        raise InsufficientData(f"{len(labels)} rows cannot cover {n_classes} classes")
    return n_classes


def partition_table(
    df: pd.DataFrame, label_column: str, fraction: float = 0.70, seed: int = 42
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Stratified split into a fit subset of floor(fraction * n) rows and a hold-out subset."""
    if not 0 < fraction < 1:
        raise InvalidSplitFraction(f"Split fraction must be in (0, 1), got {fraction}")
    validate_dataframe_schema(df, [label_column])

    labels = df[label_column]
    if labels.isna().any():
        raise InsufficientData(f"Label '{label_column}' has {int(labels.isna().sum())} missing values")
    n_classes = check_label(labels)

    smallest = labels.value_counts().min()
    if smallest < 2:
        raise InsufficientData(f"Every class needs at least 2 rows to stratify, smallest has {smallest}")

    n_fit = math.floor(round(fraction * len(df), 6))
    n_holdout = len(df) - n_fit
    if min(n_fit, n_holdout) < n_classes:
        raise InsufficientData(
            f"Split of {len(df)} rows into {n_fit}/{n_holdout} cannot hold all {n_classes} classes"
        )

    fit, holdout = train_test_split(df, train_size=n_fit, random_state=seed, stratify=labels)
    logger.info(f"Partitioned {len(df)} rows into {len(fit)} fit / {len(holdout)} hold-out")
    return fit, holdout
