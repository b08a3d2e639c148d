"""
core.table_loader
-----------------
Turn an uploaded delimited-text file into a list of records.

A record is a plain dict of header name -> cell text. Every value stays a
string; nothing is coerced to numbers or NA.
"""

from __future__ import annotations

import io
import logging
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from core.deck import Record

logger = logging.getLogger(__name__)

DELIMITERS = (",", ";", "\t", "|")


class TableLoadError(ValueError):
    """Raised when a file cannot be parsed as a delimited table."""


@dataclass
class TableLoadResult:
    name: str
    records: List[Record] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise TableLoadError(f"File is not valid UTF-8 text: {exc}") from exc


def detect_delimiter(text: str) -> str:
    """Pick the most frequent candidate delimiter on the header line."""
    header = next((line for line in text.splitlines() if line.strip()), "")
    counts = {d: header.count(d) for d in DELIMITERS}
    best = max(DELIMITERS, key=lambda d: counts[d])
    return best if counts[best] > 0 else ","


def normalise_header(names: List[str]) -> List[str]:
    """
    Make header cells usable as unique record keys.
    Example:
        normalise_header(["a", "", "a"]) -> ["a", "column 2", "a_2"]
    """
    out: List[str] = []
    counts: Dict[str, int] = {}
    for i, raw in enumerate(names, start=1):
        base = raw if raw.strip() else f"column {i}"
        n = counts.get(base, 0) + 1
        name = base if n == 1 else f"{base}_{n}"
        while name in out:
            n += 1
            name = f"{base}_{n}"
        counts[base] = n
        out.append(name)
    return out


def parse_table(data: bytes) -> List[Record]:
    """Parse raw file bytes into records, raising TableLoadError on failure."""
    text = _decode(data)
    if not text.strip():
        return []

    # The header is read as an ordinary row so its width fixes the field
    # count; longer rows then fail instead of becoming an index column.
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                sep=detect_delimiter(text),
                header=None,
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, pd.errors.ParserWarning, ValueError) as exc:
        raise TableLoadError(str(exc)) from exc

    df = df.fillna("")
    columns = normalise_header([str(c) for c in df.iloc[0]])
    body = df.iloc[1:]
    # rows made only of delimiters
    body = body[(body != "").any(axis=1)]

    return [dict(zip(columns, (str(v) for v in row))) for row in body.itertuples(index=False, name=None)]


def load_table(name: str, data: bytes) -> TableLoadResult:
    """Parse one uploaded file, reporting failure on the result instead of raising."""
    try:
        records = parse_table(data)
    except TableLoadError as exc:
        logger.warning("Failed to parse %s: %s", name, exc)
        return TableLoadResult(name=name, error=str(exc))
    logger.debug("Parsed %s: %d rows", name, len(records))
    return TableLoadResult(name=name, records=records)
