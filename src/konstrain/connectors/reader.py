# src/konstrain/connectors/reader.py
"""
Materialize tables into Polars DataFrames.

Profiling and validation both work on a fully loaded DataFrame; this module
is the only place that touches raw data files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Union

import polars as pl

from konstrain.errors import InvalidDataError, PersistenceError, UnsupportedFormatError
from konstrain.logging import get_logger

_logger = get_logger(__name__)


def _read_csv(path: str, try_parse_dates: bool) -> pl.DataFrame:
    return pl.read_csv(path, try_parse_dates=try_parse_dates)


def _read_tsv(path: str, try_parse_dates: bool) -> pl.DataFrame:
    return pl.read_csv(path, separator="\t", try_parse_dates=try_parse_dates)


def _read_parquet(path: str, try_parse_dates: bool) -> pl.DataFrame:
    return pl.read_parquet(path)


def _read_json(path: str, try_parse_dates: bool) -> pl.DataFrame:
    return pl.read_json(path)


def _read_ndjson(path: str, try_parse_dates: bool) -> pl.DataFrame:
    return pl.read_ndjson(path)


# suffix -> reader(path, try_parse_dates)
_READERS: Dict[str, Callable[[str, bool], pl.DataFrame]] = {
    ".csv": _read_csv,
    ".tsv": _read_tsv,
    ".parquet": _read_parquet,
    ".json": _read_json,
    ".ndjson": _read_ndjson,
    ".jsonl": _read_ndjson,
}


def supported_formats() -> list:
    return sorted(_READERS)


def read_table(path: Union[str, Path], *, try_parse_dates: bool = True) -> pl.DataFrame:
    """
    Read a data file into a DataFrame, choosing the reader by file suffix.

    Raises:
        UnsupportedFormatError: Unknown suffix.
        PersistenceError: The file is missing or unreadable.
    """
    p = Path(path)
    reader = _READERS.get(p.suffix.lower())
    if reader is None:
        raise UnsupportedFormatError(str(p), supported_formats())
    if p.is_dir():
        raise PersistenceError(str(p), "Path is a directory, not a file")
    if not p.exists():
        raise PersistenceError(str(p), "File not found")

    try:
        df = reader(str(p), try_parse_dates)
    except OSError as e:
        raise PersistenceError(str(p), str(e)) from e
    except pl.exceptions.PolarsError as e:
        raise PersistenceError(str(p), f"Failed to read table: {e}") from e

    _logger.debug("Read %s: %d rows x %d columns", p, df.height, df.width)
    return df


def _is_pandas_dataframe(obj: Any) -> bool:
    """Check if object is a pandas DataFrame without importing pandas."""
    return type(obj).__module__.startswith("pandas") and type(obj).__name__ == "DataFrame"


def coerce_table(data: Any) -> pl.DataFrame:
    """
    Turn supported in-memory inputs into a Polars DataFrame.

    Accepts a Polars DataFrame (returned as-is), a pandas DataFrame, a list of
    record dicts, or a dict of column lists.
    """
    if isinstance(data, pl.DataFrame):
        return data
    if data is None:
        raise InvalidDataError("NoneType", detail="Table cannot be None")
    if isinstance(data, pl.LazyFrame):
        return data.collect()
    if _is_pandas_dataframe(data):
        return pl.from_pandas(data)
    if isinstance(data, list):
        return pl.DataFrame(data) if data else pl.DataFrame()
    if isinstance(data, dict):
        return pl.DataFrame(data)
    raise InvalidDataError(type(data).__name__)
