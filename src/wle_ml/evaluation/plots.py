from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns


def save_confusion_matrix_plot(cm: pd.DataFrame, output_path: str | Path, title: str = "Confusion Matrix") -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(6, 5))
    sns.heatmap(cm, annot=True, fmt="d", cmap="Blues", ax=ax)
    ax.set_title(title)
    ax.set_xlabel("Predicted")
    ax.set_ylabel("True")
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    return output_path


def save_feature_importance_plot(importances: pd.Series, output_path: str | Path, top_n: int = 20) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    top = importances.sort_values(ascending=False).head(top_n)
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(x=top.values, y=[str(i) for i in top.index], hue=[str(i) for i in top.index],
                palette="viridis", legend=False, ax=ax)
    ax.set_title("Top Feature Importances")
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
