from .reporter import ComparisonResult, compare, predict_all, write_predictions_table, write_results

__all__ = ["ComparisonResult", "compare", "predict_all", "write_predictions_table", "write_results"]
