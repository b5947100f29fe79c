"""
Streaming CSV reader.

Rows are decoded lazily from a binary stream so that peak memory stays
independent of file size.
"""

import csv
import io
from collections.abc import Iterator
from typing import BinaryIO

from influencer_insights.core.errors import StreamDecodeError


class CSVReader:
    """
    Decodes a binary CSV stream into dictionaries keyed by header name.
    """

    def __init__(self, encoding: str = "utf-8-sig", delimiter: str = ","):
        """
        Initialize CSV reader.

        Args:
            encoding: Text encoding of the source (utf-8-sig strips a BOM)
            delimiter: Field delimiter
        """
        self.encoding = encoding
        self.delimiter = delimiter

    def read(self, source: BinaryIO) -> Iterator[dict[str, str | None]]:
        """
        Yield one dictionary per data row.

        Header names are stripped of surrounding whitespace. Short rows
        have None for missing columns; surplus values are collected under
        the None key by csv.DictReader. An empty source yields nothing.
        The source stream is left open; the caller owns it.

        Args:
            source: Readable binary stream positioned at the header

        Yields:
            Raw row mappings

        Raises:
            StreamDecodeError: If the stream cannot be read or decoded as CSV
        """
        text = None
        reader = None
        try:
            text = io.TextIOWrapper(source, encoding=self.encoding, newline="")
            reader = csv.DictReader(text, delimiter=self.delimiter)
            if reader.fieldnames is None:
                return
            reader.fieldnames = [name.strip() for name in reader.fieldnames]
            for row in reader:
                yield row
        except csv.Error as e:
            raise StreamDecodeError(f"Malformed CSV near line {reader.line_num if reader else 0}: {e}") from e
        except UnicodeDecodeError as e:
            raise StreamDecodeError(f"Source is not valid {self.encoding} text: {e}") from e
        except (OSError, ValueError) as e:
            raise StreamDecodeError(f"Cannot read source stream: {e}") from e
        finally:
            # Release the wrapper without closing the caller's stream
            if text is not None and not source.closed:
                text.detach()
