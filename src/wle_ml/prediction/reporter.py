"""
Prediction of the unlabeled table and the submission artifacts.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from wle_ml.models.base import FittedModel

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    agreement: bool
    differences: set = field(default_factory=set)


def predict_all(model: FittedModel, df: pd.DataFrame) -> list:
    """One predicted label per row of ``df``, in row order."""
    predictions = model.predict(df)
    logger.info(f"{model.name} predicted {len(predictions)} rows")
    return predictions


def compare(labels_a: list, labels_b: list) -> ComparisonResult:
    """
    Compare two prediction sequences row by row.

    ``differences`` holds the distinct labels found on rows where the two
    sequences disagree.
    """
    if len(labels_a) != len(labels_b):
        raise ValueError(f"Cannot compare {len(labels_a)} predictions with {len(labels_b)}")
    differences = set()
    for a, b in zip(labels_a, labels_b):
        if a != b:
            differences.update((a, b))
    return ComparisonResult(agreement=not differences, differences=differences)


def write_results(labels: list, output_dir: str | Path, prefix: str = "problem_id_") -> list[Path]:
    output_dir = Path(output_dir)
    if labels:
        output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, label in enumerate(labels, start=1):
        path = output_dir / f"{prefix}{i}.txt"
        path.write_text(str(label))
        paths.append(path)
    logger.info(f"Wrote {len(paths)} prediction files to {output_dir}")
    return paths


def write_predictions_table(labels: list, output_path: str | Path, row_ids: list | None = None,
                            id_column: str = "problem_id") -> Path:
    if row_ids is None:
        row_ids = list(range(1, len(labels) + 1))
    if len(row_ids) != len(labels):
        raise ValueError(f"{len(row_ids)} row ids for {len(labels)} predictions")
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame({id_column: row_ids, "prediction": labels}).to_csv(output_path, index=False)
    return output_path
