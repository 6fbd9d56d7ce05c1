import json

import click

from wle_ml import __version__
from wle_ml.common.config import load_pipeline_config
from wle_ml.common.errors import PipelineError
from wle_ml.common.logging import setup_logger
from wle_ml.pipeline import run_pipeline


@click.group()
@click.version_option(version=__version__)
def main():
    """Weight Lifting Exercises classification pipeline"""
    pass


@main.command()
@click.option("--config", type=click.Path(exists=True), help="Config YAML path")
@click.option("--output-dir", type=click.Path(), help="Output directory (overrides config)")
@click.option("--log-level", default="INFO", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]))
def run(config, output_dir, log_level):
    """Download, train, evaluate and write predictions"""
    setup_logger("wle_ml", log_level)
    cfg = load_pipeline_config(config)
    if output_dir:
        cfg.output_dir = output_dir
    try:
        result = run_pipeline(cfg)
    except PipelineError as e:
        raise click.ClickException(f"Stage '{e.stage}' failed: {e}") from e

    for evaluation in result.out_of_sample:
        click.echo(f"{evaluation.model_name}: hold-out accuracy {evaluation.accuracy:.4f}")
    click.echo(f"Selected model: {result.selected_model}")
    click.echo(f"Predictions: {' '.join(str(p) for p in result.predictions[result.selected_model])}")


@main.command("show-config")
@click.option("--config", type=click.Path(exists=True), help="Config YAML path")
def show_config(config):
    """Print the effective configuration"""
    click.echo(json.dumps(load_pipeline_config(config).to_dict(), indent=2))


if __name__ == "__main__":
    main()
