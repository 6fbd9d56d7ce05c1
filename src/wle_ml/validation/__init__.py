from .schema import validate_dataframe_schema, validate_numeric_columns
from .quality import check_data_quality, missing_value_ratios

__all__ = ["validate_dataframe_schema", "validate_numeric_columns", "check_data_quality", "missing_value_ratios"]
