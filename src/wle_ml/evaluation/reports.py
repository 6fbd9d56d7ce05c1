import json
from pathlib import Path

from wle_ml.evaluation.metrics import EvaluationResult


def select_best_model(evaluations: list[EvaluationResult]) -> str:
    """Name of the model with the highest accuracy; ties go to the earliest entry."""
    if not evaluations:
        raise ValueError("No evaluations to select from")
    best = evaluations[0]
    for result in evaluations[1:]:
        if result.accuracy > best.accuracy:
            best = result
    return best.model_name


def accuracy_summary(in_sample: list[EvaluationResult], out_of_sample: list[EvaluationResult]) -> dict:
    summary = {r.model_name: {"in_sample": r.accuracy} for r in in_sample}
    for r in out_of_sample:
        summary.setdefault(r.model_name, {})["out_of_sample"] = r.accuracy
    return summary


def save_evaluation_report(metrics: dict, output_path: str | Path):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(metrics, f, indent=2, default=str)
