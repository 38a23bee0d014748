"""Source for delimited text exports (CSV and friends)."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pandas as pd

from basketlens.errors import InvalidInputError
from basketlens.models import Record
from basketlens.sources.base import RecordSource

logger = logging.getLogger(__name__)


class DelimitedTextSource(RecordSource):
    """Read a delimited text table into string-valued records.

    The header row names the fields. Every cell is kept as a string, empty and
    missing cells become ``""`` and blank lines are skipped.
    """

    name = "delimited_text"

    def __init__(
        self,
        *,
        path: str | Path | None = None,
        text: str | None = None,
        delimiter: str = ",",
        encoding: str = "utf-8",
    ) -> None:
        if (path is None) == (text is None):
            raise ValueError("Provide exactly one of path or text")
        self.path = Path(path) if path is not None else None
        self.text = text
        self.delimiter = delimiter
        self.encoding = encoding

    @classmethod
    def from_text(cls, text: str, *, delimiter: str = ",") -> "DelimitedTextSource":
        return cls(text=text, delimiter=delimiter)

    def read(self) -> list[Record]:
        buffer = io.StringIO(self.text) if self.text is not None else self.path
        try:
            frame = pd.read_csv(
                buffer,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding=self.encoding,
            )
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as exc:
            raise InvalidInputError(f"Could not parse delimited text: {exc}") from exc

        frame.columns = [str(column).strip() for column in frame.columns]
        frame = frame.fillna("")

        records: list[Record] = frame.to_dict(orient="records")
        logger.debug("Read %d records with %d fields from %s", len(records), len(frame.columns), self._label())
        return records

    def _label(self) -> str:
        return str(self.path) if self.path is not None else "<text>"
