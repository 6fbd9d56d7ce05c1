import logging

import pandas as pd
from sklearn.ensemble import RandomForestClassifier

from wle_ml.models.base import FittedModel, TrainableClassifier, with_imputer

logger = logging.getLogger(__name__)


class BaggedTreeClassifier(TrainableClassifier):
    """Random forest: bootstrap-resampled trees with a random column subset per split."""

    def __init__(self, n_trees: int = 500, max_features="sqrt", seed: int = 42, n_jobs: int = -1,
                 name: str = "random_forest"):
        self.n_trees = n_trees
        self.max_features = max_features
        self.seed = seed
        self.n_jobs = n_jobs
        self.name = name

    def _fit(self, X: pd.DataFrame, y: pd.Series) -> FittedModel:
        logger.info(f"Training {self.name} ({self.n_trees} trees) on {X.shape[0]} rows x {X.shape[1]} features")
        pipeline = with_imputer(RandomForestClassifier(
            n_estimators=self.n_trees,
            max_features=self.max_features,
            bootstrap=True,
            random_state=self.seed,
            n_jobs=self.n_jobs,
        ))
        pipeline.fit(X, y)
        forest = pipeline.named_steps["model"]
        return FittedModel(
            name=self.name,
            estimator=pipeline,
            feature_columns=list(X.columns),
            classes=list(forest.classes_),
            importances=pd.Series(forest.feature_importances_, index=X.columns, name="importance"),
            params={"n_trees": self.n_trees, "max_features": self.max_features},
        )


def fit_bagged_ensemble(df: pd.DataFrame, feature_columns: list[str], label_column: str, seed: int = 42,
                        **kwargs) -> FittedModel:
    return BaggedTreeClassifier(seed=seed, **kwargs).fit(df, feature_columns, label_column)
