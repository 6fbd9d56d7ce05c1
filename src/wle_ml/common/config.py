from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import yaml

TRAINING_URL = "https://d396qusza40orc.cloudfront.net/predmachlearn/pml-training.csv"
EVALUATION_URL = "https://d396qusza40orc.cloudfront.net/predmachlearn/pml-testing.csv"


@dataclass
class PipelineConfig:
    """Constants for one end-to-end run."""
    training_source: str = TRAINING_URL
    evaluation_source: str = EVALUATION_URL
    download_timeout: float = 60.0
    label_column: str = "classe"
    row_id_column: str = "problem_id"
    n_leading_columns: int = 7
    max_missing_ratio: float = 0.95
    train_fraction: float = 0.70
    seed: int = 12345
    n_trees: int = 500
    max_features: str | int | float = "sqrt"
    top_k_features: int = 20
    boosting_max_depth: list[int] = field(default_factory=lambda: [1, 2, 3])
    boosting_n_estimators: list[int] = field(default_factory=lambda: [50, 100, 150])
    boosting_learning_rate: float = 0.1
    boosting_min_samples_leaf: int = 10
    cv_folds: int = 5
    n_jobs: int = -1
    output_dir: Path = Path("artifacts")
    save_plots: bool = True

    def to_dict(self) -> dict:
        data = asdict(self)
        data["output_dir"] = str(self.output_dir)
        return data


def load_config(config_path: str | Path) -> dict:
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def build_config(overrides: dict | None = None) -> PipelineConfig:
    overrides = dict(overrides or {})
    known = {f.name for f in fields(PipelineConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    if "output_dir" in overrides:
        overrides["output_dir"] = Path(overrides["output_dir"])
    return PipelineConfig(**overrides)


def load_pipeline_config(config_path: str | Path | None = None) -> PipelineConfig:
    if config_path is None:
        return PipelineConfig()
    return build_config(load_config(config_path))
