"""
Column filtering for the sensor tables.

The filter is fitted once on the labeled table. The unlabeled table is
filtered with the recorded column names, never with its own statistics.
"""

import logging
from dataclasses import dataclass, field

import pandas as pd

from wle_ml.common.errors import SchemaMismatch
from wle_ml.validation.quality import missing_value_ratios

logger = logging.getLogger(__name__)


@dataclass
class ColumnFilter:
    """Columns removed from the labeled table, reusable on other tables."""
    leading_columns: list[str]
    dropped_columns: list[str]
    missing_ratios: pd.Series = field(repr=False)
    kept_columns: list[str] = field(default_factory=list)
    max_missing_ratio: float = 0.95

    @property
    def removed_columns(self) -> list[str]:
        return self.leading_columns + self.dropped_columns

    def transform(self, df: pd.DataFrame, extra_columns: list[str] | None = None) -> pd.DataFrame:
        """
        Drop the recorded leading and sparse columns from ``df``.

        A table whose columns are all among the kept columns and
        ``extra_columns`` is already filtered and is returned as is.

        Raises:
            SchemaMismatch: If the leading columns differ from the recorded
                ones or a recorded sparse column is absent
        """
        allowed = set(self.kept_columns) | set(extra_columns or [])
        if set(df.columns) <= allowed:
            return df.copy()

        n_leading = len(self.leading_columns)
        leading = list(df.columns[:n_leading])
        if leading != self.leading_columns:
            raise SchemaMismatch(
                f"Leading columns {leading} do not match the filtered table's {self.leading_columns}"
            )

        missing = [c for c in self.dropped_columns if c not in df.columns]
        if missing:
            raise SchemaMismatch(f"Columns to drop are absent from the table: {missing}")

        return df.iloc[:, n_leading:].drop(columns=self.dropped_columns)


def fit_column_filter(
    df: pd.DataFrame, n_leading: int = 7, max_missing_ratio: float = 0.95
) -> tuple[pd.DataFrame, ColumnFilter]:
    if df.shape[1] < n_leading:
        raise SchemaMismatch(f"Expected at least {n_leading} columns, found {df.shape[1]}")

    leading = list(df.columns[:n_leading])
    remaining = df.iloc[:, n_leading:]
    ratios = missing_value_ratios(remaining)
    dropped = [c for c, ratio in ratios.items() if ratio > max_missing_ratio]

    logger.info(f"Dropping {len(leading)} identifier columns and {len(dropped)} sparse columns")
    logger.debug(f"Sparse columns: {dropped}")

    column_filter = ColumnFilter(
        leading_columns=leading,
        dropped_columns=dropped,
        missing_ratios=ratios,
        kept_columns=[c for c in remaining.columns if c not in dropped],
        max_missing_ratio=max_missing_ratio,
    )
    return remaining.drop(columns=dropped), column_filter


def feature_columns(df: pd.DataFrame, label_column: str, exclude: list[str] | None = None) -> list[str]:
    exclude = set(exclude or [])
    exclude.add(label_column)
    return [c for c in df.columns if c not in exclude]
