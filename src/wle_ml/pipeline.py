"""
End-to-end run: load, filter, partition, train, evaluate, predict, report.

Every stage receives its inputs as arguments and returns its outputs;
the ``PipelineResult`` collects them for the caller.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from wle_ml.common.config import PipelineConfig
from wle_ml.common.errors import PipelineError
from wle_ml.dataio.readers import load_table
from wle_ml.domain.exercises import describe_label
from wle_ml.evaluation.metrics import EvaluationResult, evaluate
from wle_ml.evaluation.reports import accuracy_summary, save_evaluation_report, select_best_model
from wle_ml.features.selection import select_top_features
from wle_ml.models.base import FittedModel
from wle_ml.models.boosting import BoostedTreeClassifier
from wle_ml.models.forest import BaggedTreeClassifier
from wle_ml.prediction.reporter import (
    ComparisonResult,
    compare,
    predict_all,
    write_predictions_table,
    write_results,
)
from wle_ml.preprocessing.transforms import ColumnFilter, feature_columns, fit_column_filter
from wle_ml.training.trainer import partition_table
from wle_ml.validation.quality import check_data_quality

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    column_filter: ColumnFilter
    feature_columns: list[str]
    fit_table: pd.DataFrame = field(repr=False)
    holdout_table: pd.DataFrame = field(repr=False)
    models: dict[str, FittedModel] = field(repr=False)
    in_sample: list[EvaluationResult] = field(repr=False)
    out_of_sample: list[EvaluationResult] = field(repr=False)
    selected_model: str
    predictions: dict[str, list]
    comparison: ComparisonResult
    output_files: list[Path] = field(default_factory=list)


@contextmanager
def stage(name: str):
    try:
        yield
    except PipelineError as e:
        e.stage = name
        logger.error(f"Stage '{name}' failed: {e}")
        raise


class Pipeline:
    def __init__(self, config: PipelineConfig):
        self.config = config

    def load(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        cfg = self.config
        with stage("load"):
            labeled = load_table(cfg.training_source, timeout=cfg.download_timeout)
            unlabeled = load_table(cfg.evaluation_source, timeout=cfg.download_timeout)
        return labeled, unlabeled

    def filter(self, labeled: pd.DataFrame, unlabeled: pd.DataFrame):
        cfg = self.config
        with stage("filter"):
            filtered, column_filter = fit_column_filter(labeled, cfg.n_leading_columns, cfg.max_missing_ratio)
            filtered_unlabeled = column_filter.transform(unlabeled, extra_columns=[cfg.row_id_column])
            features = feature_columns(filtered, cfg.label_column, exclude=[cfg.row_id_column])
        quality = check_data_quality(filtered[features])
        logger.info(
            f"{len(features)} features kept, {quality['complete_columns']} without missing values"
        )
        return filtered, filtered_unlabeled, column_filter, features

    def partition(self, filtered: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
        cfg = self.config
        with stage("partition"):
            return partition_table(filtered, cfg.label_column, cfg.train_fraction, cfg.seed)

    def train(self, fit: pd.DataFrame, features: list[str], n_classes: int | None = None) -> dict[str, FittedModel]:
        cfg = self.config
        with stage("train"):
            forest = BaggedTreeClassifier(cfg.n_trees, cfg.max_features, cfg.seed, cfg.n_jobs).fit(
                fit, features, cfg.label_column, n_classes
            )
            boosted = BoostedTreeClassifier(
                max_depth=cfg.boosting_max_depth,
                n_estimators=cfg.boosting_n_estimators,
                learning_rate=cfg.boosting_learning_rate,
                min_samples_leaf=cfg.boosting_min_samples_leaf,
                cv_folds=cfg.cv_folds,
                seed=cfg.seed,
                n_jobs=cfg.n_jobs,
            ).fit(fit, features, cfg.label_column, n_classes)
            models = {forest.name: forest, boosted.name: boosted}

            k = min(cfg.top_k_features, len(features))
            if k < len(features):
                top = select_top_features(forest.importances, k)
                logger.info(f"Refitting forest on top {k} features: {top}")
                reduced = BaggedTreeClassifier(
                    cfg.n_trees, cfg.max_features, cfg.seed, cfg.n_jobs, name=f"random_forest_top{k}"
                ).fit(fit, top, cfg.label_column, n_classes)
                models[reduced.name] = reduced
        return models

    def evaluate(self, models: dict[str, FittedModel], fit: pd.DataFrame, holdout: pd.DataFrame):
        label = self.config.label_column
        with stage("evaluate"):
            in_sample = [evaluate(m, fit, label, "fit") for m in models.values()]
            out_of_sample = [evaluate(m, holdout, label, "holdout") for m in models.values()]
        return in_sample, out_of_sample

    def predict(self, models: dict[str, FittedModel], unlabeled: pd.DataFrame) -> dict[str, list]:
        with stage("predict"):
            return {name: predict_all(model, unlabeled) for name, model in models.items()}

    def report(self, result: PipelineResult, unlabeled: pd.DataFrame) -> list[Path]:
        cfg = self.config
        out = Path(cfg.output_dir)
        selected = result.predictions[result.selected_model]
        row_ids = list(unlabeled[cfg.row_id_column]) if cfg.row_id_column in unlabeled.columns else None

        files = write_results(selected, out / "predictions")
        if selected:
            files.append(write_predictions_table(selected, out / "predictions" / "predictions.csv", row_ids,
                                                 cfg.row_id_column))

        report_path = out / "reports" / "evaluation.json"
        save_evaluation_report(
            {
                "config": cfg.to_dict(),
                "dropped_columns": result.column_filter.removed_columns,
                "feature_columns": result.feature_columns,
                "rows": {"fit": len(result.fit_table), "holdout": len(result.holdout_table)},
                "accuracy": accuracy_summary(result.in_sample, result.out_of_sample),
                "evaluations": [r.to_dict() for r in result.in_sample + result.out_of_sample],
                "selected_model": result.selected_model,
                "models": {name: m.params for name, m in result.models.items()},
                "agreement": result.comparison.agreement,
                "differences": sorted(str(d) for d in result.comparison.differences),
                "predictions": [str(p) for p in selected],
            },
            report_path,
        )
        files.append(report_path)

        if cfg.save_plots:
            from wle_ml.evaluation.plots import save_confusion_matrix_plot, save_feature_importance_plot

            best = next(r for r in result.out_of_sample if r.model_name == result.selected_model)
            files.append(save_confusion_matrix_plot(
                best.confusion_matrix, out / "figures" / "confusion_matrix.png",
                title=f"{best.model_name} (hold-out)",
            ))
            files.append(save_feature_importance_plot(
                result.models[result.selected_model].importances, out / "figures" / "feature_importance.png"
            ))
        return files

    def run(self) -> PipelineResult:
        logger.info("=" * 60)
        logger.info("Starting Weight Lifting Exercises pipeline")
        logger.info("=" * 60)

        logger.info("[1/6] Loading data...")
        labeled, unlabeled = self.load()

        logger.info("[2/6] Filtering columns...")
        filtered, filtered_unlabeled, column_filter, features = self.filter(labeled, unlabeled)

        logger.info("[3/6] Partitioning...")
        fit, holdout = self.partition(filtered)

        logger.info("[4/6] Training models...")
        models = self.train(fit, features, filtered[self.config.label_column].nunique())

        logger.info("[5/6] Evaluating...")
        in_sample, out_of_sample = self.evaluate(models, fit, holdout)
        selected = select_best_model(out_of_sample)
        logger.info(f"Selected model: {selected}")

        logger.info("[6/6] Predicting and reporting...")
        predictions = self.predict(models, filtered_unlabeled)
        names = list(models)
        comparison = compare(predictions[names[0]], predictions[names[1]])
        logger.info(f"{names[0]} and {names[1]} agree: {comparison.agreement}")
        if not comparison.agreement:
            logger.info(f"Disputed labels: {sorted(comparison.differences)}")
        for label in sorted(set(predictions[selected])):
            logger.debug(f"{label}: {describe_label(str(label))}")

        result = PipelineResult(
            column_filter=column_filter,
            feature_columns=features,
            fit_table=fit,
            holdout_table=holdout,
            models=models,
            in_sample=in_sample,
            out_of_sample=out_of_sample,
            selected_model=selected,
            predictions=predictions,
            comparison=comparison,
        )
        with stage("report"):
            result.output_files = self.report(result, filtered_unlabeled)

        logger.info(f"Pipeline complete. Results in {self.config.output_dir}")
        return result


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    return Pipeline(config).run()
