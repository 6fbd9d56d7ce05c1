import pandas as pd

from wle_ml.common.errors import SchemaMismatch


def validate_dataframe_schema(df: pd.DataFrame, required_columns: list[str]) -> bool:
    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise SchemaMismatch(f"Missing required columns: {missing}")
    return True


def validate_numeric_columns(df: pd.DataFrame, columns: list[str]) -> bool:
    non_numeric = [c for c in columns if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise SchemaMismatch(f"Non-numeric feature columns: {non_numeric}")
    return True
