#!/usr/bin/env python
import json


def generate_markdown_report(metrics_path: str, output_path: str):
    with open(metrics_path) as f:
        metrics = json.load(f)

    report = "# Model Evaluation Report\n\n"
    report += "## Accuracy\n\n"
    report += "| Model | In-sample | Out-of-sample |\n|---|---|---|\n"
    for model, acc in metrics["accuracy"].items():
        report += f"| {model} | {acc.get('in_sample', float('nan')):.4f} | {acc.get('out_of_sample', float('nan')):.4f} |\n"

    report += f"\n**Selected model**: {metrics['selected_model']}\n"
    report += f"\n**Models agree on evaluation set**: {metrics['agreement']}\n"
    report += f"\n## Dropped columns ({len(metrics['dropped_columns'])})\n\n"
    report += ", ".join(metrics["dropped_columns"]) + "\n"
    report += "\n## Predictions\n\n"
    for i, label in enumerate(metrics["predictions"], start=1):
        report += f"- {i}: {label}\n"

    with open(output_path, "w") as f:
        f.write(report)

    print(f"✓ Report generated: {output_path}")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        print("Usage: python generate_report.py <evaluation.json> <output.md>")
        sys.exit(1)

    generate_markdown_report(sys.argv[1], sys.argv[2])
