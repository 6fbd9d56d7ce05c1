from .base import FittedModel, TrainableClassifier
from .boosting import BoostedTreeClassifier, fit_boosted_ensemble
from .forest import BaggedTreeClassifier, fit_bagged_ensemble

__all__ = [
    "FittedModel",
    "TrainableClassifier",
    "BaggedTreeClassifier",
    "BoostedTreeClassifier",
    "fit_bagged_ensemble",
    "fit_boosted_ensemble",
]
