import csv
import logging
from collections import deque
from pathlib import Path
from typing import Deque, List, Optional, TextIO, Tuple

import pandas as pd

from .errors import SourceExhaustedError, SourceOpenError

logger = logging.getLogger(__name__)


class RecordStream:
    """
    Forward-only reader over a delimited text file with a header line.

    The header is read once, as raw strings, so duplicate names survive.
    Data rows are tokenized with csv and buffered `chunksize` rows at a time,
    then handed out one at a time as tuples of raw string fields. Rows
    shorter than the header are padded with None; extra trailing fields are
    dropped. Quote characters have no special meaning, so a stray quote
    stays inside its field and is left for the decoder to reject.

    Rows are numbered by their physical line in the file (the header is
    line 1); blank lines are skipped but still counted.
    """

    def __init__(
        self,
        filepath: str | Path,
        sep: str = ';',
        chunksize: int = 1000,
    ):
        self.filepath = Path(filepath)
        self.sep = sep
        self.chunksize = chunksize

        if not self.filepath.is_file():
            raise SourceOpenError(self.filepath, "file not found")

        self.header: List[str] = self._read_header()
        self._file: Optional[TextIO] = None
        self._reader = None
        self._buffer: Deque[Tuple[int, tuple]] = deque()
        self._row_number = 0
        self._open()

    def _read_header(self) -> List[str]:
        try:
            frame = pd.read_csv(
                self.filepath,
                sep=self.sep,
                header=None,
                nrows=1,
                dtype=str,
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
            )
        except pd.errors.EmptyDataError:
            raise SourceOpenError(self.filepath, "file is empty, no header line")
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise SourceOpenError(self.filepath, str(e)) from e

        if frame.empty:
            raise SourceOpenError(self.filepath, "file is empty, no header line")
        return [str(name) for name in frame.iloc[0].tolist()]

    def _open(self):
        self._buffer.clear()
        self._row_number = 0
        self._file = open(self.filepath, mode="r", newline="", encoding="utf-8")
        self._reader = csv.reader(self._file, delimiter=self.sep, quoting=csv.QUOTE_NONE)
        # header
        next(self._reader, None)

    def _fit(self, fields: List[str]) -> tuple:
        width = len(self.header)
        if len(fields) > width:
            logger.debug(
                "Dropping %d extra field(s) on line %d of %s",
                len(fields) - width, self._reader.line_num, self.filepath,
            )
            return tuple(fields[:width])
        return tuple(fields) + (None,) * (width - len(fields))

    @property
    def row_number(self) -> int:
        """Line number of the last row handed out (0 before the first)."""
        return self._row_number

    def has_next(self) -> bool:
        if not self._buffer and self._reader is not None:
            self._fill()
        return bool(self._buffer)

    def _fill(self):
        for fields in self._reader:
            if not fields:
                continue
            self._buffer.append((self._reader.line_num, self._fit(fields)))
            if len(self._buffer) >= self.chunksize:
                return
        # end of file; the handle stays open until close()
        self._reader = None

    def next_row(self) -> Tuple[int, tuple]:
        """
        Returns (line_number, fields) for the next data row.
        """
        if not self.has_next():
            raise SourceExhaustedError(f"No more records in {self.filepath}")
        self._row_number, fields = self._buffer.popleft()
        return self._row_number, fields

    def reset(self):
        """Rewinds to the first data row, skipping the header again."""
        logger.debug("Rewinding %s", self.filepath)
        self._close_reader()
        self._open()

    def close(self):
        self._close_reader()
        self._buffer.clear()

    def _close_reader(self):
        if self._file is not None:
            self._file.close()
        self._file = None
        self._reader = None
