"""CSV codec."""

from __future__ import annotations

import io
import logging

import pandas as pd

from tableflow.data.spec import DataFormat
from tableflow.data.table import Table
from tableflow.errors import DecodeError, EncodeError, InvalidArgumentError
from tableflow.formats.base import Codec

logger = logging.getLogger(__name__)


class CsvCodec(Codec):
    """
    Comma-separated values with a header row.

    Parameters
    ----------
    sep : str
        Field delimiter
    encoding : str
        Text encoding of the bytes
    """

    format = DataFormat.CSV
    extensions = (".csv",)

    def __init__(self, sep: str = ",", encoding: str = "utf-8"):
        self.sep = sep
        self.encoding = encoding

    def decode(self, data: bytes) -> Table:
        try:
            df = pd.read_csv(io.BytesIO(data), sep=self.sep, encoding=self.encoding)
        except pd.errors.EmptyDataError as e:
            raise DecodeError(f"CSV input is empty: {e}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DecodeError(f"Failed to parse CSV: {e}") from e

        logger.debug(f"Decoded CSV: {len(df)} rows, {len(df.columns)} columns")

        try:
            return Table(df)
        except InvalidArgumentError as e:
            raise DecodeError(f"CSV header is not a valid table header: {e}") from e

    def encode(self, table: Table) -> bytes:
        try:
            text = table.to_pandas().to_csv(index=False, sep=self.sep)
            return text.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise EncodeError(f"Failed to encode CSV as {self.encoding}: {e}") from e
