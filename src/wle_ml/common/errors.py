class PipelineError(Exception):
    """Base class for failures that abort a pipeline run."""

    stage: str | None = None


class SourceUnavailable(PipelineError):
    """Raised when a data source cannot be retrieved."""


class ParseError(PipelineError):
    """Raised when retrieved content is not a rectangular table."""


class SchemaMismatch(PipelineError):
    """Raised when a table does not carry the columns a filter or model expects."""


class InvalidSplitFraction(PipelineError):
    """Raised when the fit fraction is outside (0, 1)."""


class InsufficientData(PipelineError):
    """Raised when there are too few rows to split or fit for every class."""


class DegenerateLabel(PipelineError):
    """Raised when the label column has fewer than two distinct values."""
