"""Parquet (columnar) codec backed by pyarrow."""

from __future__ import annotations

import logging
from typing import Optional

import pyarrow as pa
import pyarrow.parquet as pq

from tableflow.data.spec import DataFormat
from tableflow.data.table import Table
from tableflow.errors import DecodeError, EncodeError, InvalidArgumentError
from tableflow.formats.base import Codec

logger = logging.getLogger(__name__)


class ParquetCodec(Codec):
    """
    Apache Parquet files.

    Parameters
    ----------
    compression : str, optional
        Codec passed to :func:`pyarrow.parquet.write_table` (``None`` for none)
    """

    format = DataFormat.PARQUET
    extensions = (".parquet", ".pq")

    def __init__(self, compression: Optional[str] = "snappy"):
        self.compression = compression

    def decode(self, data: bytes) -> Table:
        try:
            arrow_table = pq.read_table(pa.BufferReader(data))
        except (pa.ArrowInvalid, OSError) as e:
            raise DecodeError(f"Failed to read Parquet data: {e}") from e

        logger.debug(
            f"Decoded Parquet: {arrow_table.num_rows} rows, {arrow_table.num_columns} columns"
        )

        try:
            return Table(arrow_table.to_pandas())
        except InvalidArgumentError as e:
            raise DecodeError(f"Parquet schema is not a valid table header: {e}") from e

    def encode(self, table: Table) -> bytes:
        try:
            arrow_table = pa.Table.from_pandas(table.to_pandas(), preserve_index=False)
        except (pa.ArrowInvalid, pa.ArrowTypeError, pa.ArrowNotImplementedError) as e:
            raise EncodeError(f"Failed to convert table to Arrow: {e}") from e

        sink = pa.BufferOutputStream()
        pq.write_table(arrow_table, sink, compression=self.compression)
        return sink.getvalue().to_pybytes()
