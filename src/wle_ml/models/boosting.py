import logging

import pandas as pd
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from wle_ml.models.base import FittedModel, TrainableClassifier, with_imputer

logger = logging.getLogger(__name__)


class BoostedTreeClassifier(TrainableClassifier):
    """Gradient-boosted shallow trees, depth and stage count tuned by stratified k-fold CV."""

    def __init__(
        self,
        max_depth: list[int] = (1, 2, 3),
        n_estimators: list[int] = (50, 100, 150),
        learning_rate: float = 0.1,
        min_samples_leaf: int = 10,
        cv_folds: int = 5,
        seed: int = 42,
        n_jobs: int = -1,
        name: str = "gradient_boosting",
    ):
        self.param_grid = {"max_depth": list(max_depth), "n_estimators": list(n_estimators)}
        self.learning_rate = learning_rate
        self.min_samples_leaf = min_samples_leaf
        self.cv_folds = cv_folds
        self.seed = seed
        self.n_jobs = n_jobs
        self.name = name

    def _fit(self, X: pd.DataFrame, y: pd.Series) -> FittedModel:
        # folds cannot outnumber the rarest class
        n_splits = max(2, min(self.cv_folds, int(y.value_counts().min())))
        logger.info(f"Tuning {self.name} over {self.param_grid} with {n_splits}-fold CV")

        search = GridSearchCV(
            estimator=with_imputer(GradientBoostingClassifier(
                learning_rate=self.learning_rate,
                min_samples_leaf=self.min_samples_leaf,
                random_state=self.seed,
            )),
            param_grid={f"model__{k}": v for k, v in self.param_grid.items()},
            cv=StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=self.seed),
            scoring="accuracy",
            n_jobs=self.n_jobs,
        )
        search.fit(X, y)
        best = search.best_estimator_.named_steps["model"]
        best_params = {k.removeprefix("model__"): v for k, v in search.best_params_.items()}
        logger.info(f"Best {self.name} params: {best_params} (CV accuracy {search.best_score_:.4f})")

        return FittedModel(
            name=self.name,
            estimator=search.best_estimator_,
            feature_columns=list(X.columns),
            classes=list(best.classes_),
            importances=pd.Series(best.feature_importances_, index=X.columns, name="importance"),
            params={**best_params, "cv_accuracy": float(search.best_score_)},
        )


def fit_boosted_ensemble(df: pd.DataFrame, feature_columns: list[str], label_column: str, seed: int = 42,
                         **kwargs) -> FittedModel:
    return BoostedTreeClassifier(seed=seed, **kwargs).fit(df, feature_columns, label_column)
