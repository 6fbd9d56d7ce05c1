from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import pandas as pd
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline

from wle_ml.training.trainer import check_label
from wle_ml.validation.schema import validate_dataframe_schema, validate_numeric_columns


@dataclass
class FittedModel:
    """A fitted estimator bound to the ordered feature columns it was fit on."""
    name: str
    estimator: object = field(repr=False)
    feature_columns: list[str]
    classes: list
    importances: pd.Series = field(repr=False)
    params: dict = field(default_factory=dict)

    def features_of(self, df: pd.DataFrame) -> pd.DataFrame:
        validate_dataframe_schema(df, self.feature_columns)
        return df[self.feature_columns]

    def predict(self, df: pd.DataFrame) -> list:
        return list(self.estimator.predict(self.features_of(df)))


def with_imputer(model) -> Pipeline:
    """Median-impute missing sensor values before ``model``; empty columns become 0."""
    return Pipeline([
        ("impute", SimpleImputer(strategy="median", keep_empty_features=True)),
        ("model", model),
    ])


class TrainableClassifier(ABC):
    name: str = "classifier"

    def fit(self, df: pd.DataFrame, feature_columns: list[str], label_column: str,
            n_classes: int | None = None) -> FittedModel:
        """
        Fit on ``feature_columns`` of ``df``.

        Feature columns may hold missing values (the column filter keeps
        columns up to its missing-ratio threshold); they are median-imputed
        with statistics from ``df`` and the same values are reused when
        predicting.
        """
        validate_dataframe_schema(df, list(feature_columns) + [label_column])
        validate_numeric_columns(df, list(feature_columns))
        check_label(df[label_column], n_classes)
        return self._fit(df[list(feature_columns)], df[label_column])

    @abstractmethod
    def _fit(self, X: pd.DataFrame, y: pd.Series) -> FittedModel:
        pass
