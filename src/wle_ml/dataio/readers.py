"""
Loading of the raw observation tables.

Sources are either ``http(s)`` URLs, fetched once with ``requests``, or
local CSV paths. Only the empty string and ``"NA"`` mark missing values.
"""

import csv
import logging
from io import StringIO
from pathlib import Path
from urllib.parse import urlparse

import pandas as pd
import requests

from wle_ml.common.errors import ParseError, SourceUnavailable

logger = logging.getLogger(__name__)

MISSING_TOKENS = ["", "NA"]


def is_remote(source: str | Path) -> bool:
    return urlparse(str(source)).scheme in ("http", "https")


def fetch_text(url: str, timeout: float = 60.0) -> str:
    """Download ``url`` and return its body as text.

    Raises:
        SourceUnavailable: On connection errors, timeouts or non-2xx status.
    """
    logger.info(f"Downloading {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceUnavailable(f"Could not download {url}: {e}") from e
    return response.text


def read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text()
    except OSError as e:
        raise SourceUnavailable(f"Could not read {path}: {e}") from e


def check_rectangular(text: str, source: str = "<memory>"):
    """Raise ParseError unless every non-blank record has as many fields as the header."""
    rows = (row for row in csv.reader(StringIO(text)) if row)
    try:
        header = next(rows, None)
    except csv.Error as e:
        raise ParseError(f"{source} is not valid CSV: {e}") from e
    if header is None:
        raise ParseError(f"{source} is empty")
    try:
        for line_no, row in enumerate(rows, start=2):
            if len(row) != len(header):
                raise ParseError(
                    f"{source} is not a rectangular table: record {line_no} has {len(row)} fields, expected {len(header)}"
                )
    except csv.Error as e:
        raise ParseError(f"{source} is not valid CSV: {e}") from e


def parse_csv_text(text: str, source: str = "<memory>") -> pd.DataFrame:
    """
    Parse CSV text into a DataFrame.

    Args:
        text: Raw CSV content
        source: Name used in error messages

    Returns:
        Parsed DataFrame with ``""`` and ``"NA"`` read as NaN

    Raises:
        ParseError: If the content is empty or has ragged rows
    """
    check_rectangular(text, source)
    try:
        df = pd.read_csv(StringIO(text), na_values=MISSING_TOKENS, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"{source} is empty") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"{source} is not a rectangular table: {e}") from e

    if df.columns.empty:
        raise ParseError(f"{source} has no columns")
    return df


def load_table(source: str | Path, timeout: float = 60.0) -> pd.DataFrame:
    text = fetch_text(str(source), timeout=timeout) if is_remote(source) else read_text(source)
    df = parse_csv_text(text, source=str(source))
    logger.info(f"Loaded {source}: {df.shape[0]} rows x {df.shape[1]} columns")
    return df


def load_datasets(
    training_source: str | Path, evaluation_source: str | Path, timeout: float = 60.0
) -> tuple[pd.DataFrame, pd.DataFrame]:
    return load_table(training_source, timeout), load_table(evaluation_source, timeout)
