import pandas as pd


def missing_value_ratios(df: pd.DataFrame) -> pd.Series:
    """Fraction of missing cells per column, in column order."""
    if len(df) == 0:
        return pd.Series(0.0, index=df.columns)
    return df.isna().mean()


def check_data_quality(df: pd.DataFrame) -> dict:
    ratios = missing_value_ratios(df)
    return {
        "total_rows": len(df),
        "total_columns": df.shape[1],
        "missing_values": df.isnull().sum().astype(int).to_dict(),
        "fully_missing_columns": [c for c, r in ratios.items() if r == 1.0],
        "complete_columns": int((ratios == 0.0).sum()),
    }
