import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from sklearn.metrics import classification_report, confusion_matrix

from wle_ml.models.base import FittedModel
from wle_ml.validation.schema import validate_dataframe_schema

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    model_name: str
    table_name: str
    confusion_matrix: pd.DataFrame
    accuracy: float
    class_report: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return {
            "model": self.model_name,
            "table": self.table_name,
            "accuracy": self.accuracy,
            "labels": [str(c) for c in self.confusion_matrix.index],
            "confusion_matrix": self.confusion_matrix.to_numpy().tolist(),
            "class_report": self.class_report,
        }


def confusion_matrix_frame(y_true, y_pred, labels=None) -> pd.DataFrame:
    """Square matrix with true classes as rows and predicted classes as columns."""
    if labels is None:
        labels = sorted(set(y_true) | set(y_pred))
    cm = confusion_matrix(y_true, y_pred, labels=labels)
    index = pd.Index(labels, name="true")
    return pd.DataFrame(cm, index=index, columns=pd.Index(labels, name="predicted"))


def accuracy_from_matrix(matrix) -> float:
    cm = np.asarray(matrix)
    if cm.ndim != 2 or cm.shape[0] != cm.shape[1]:
        raise ValueError(f"Confusion matrix must be square, got shape {cm.shape}")
    total = cm.sum()
    if total == 0:
        raise ValueError("Confusion matrix is empty")
    return float(np.trace(cm) / total)


def evaluate(model: FittedModel, df: pd.DataFrame, label_column: str, table_name: str = "table") -> EvaluationResult:
    validate_dataframe_schema(df, model.feature_columns + [label_column])
    y_true = list(df[label_column])
    y_pred = model.predict(df)

    labels = sorted(set(model.classes) | set(y_true))
    cm = confusion_matrix_frame(y_true, y_pred, labels=labels)
    accuracy = accuracy_from_matrix(cm)
    report = classification_report(y_true, y_pred, labels=labels, output_dict=True, zero_division=0)

    logger.info(f"{model.name} accuracy on {table_name}: {accuracy:.4f}")
    return EvaluationResult(model.name, table_name, cm, accuracy, report)
