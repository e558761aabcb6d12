"""
File format codecs for tableflow.

Each supported :class:`~tableflow.data.spec.DataFormat` has one registered
codec that decodes raw bytes into a :class:`~tableflow.data.table.Table`
and encodes a table back to bytes.

Usage
-----
>>> from tableflow.formats import get_codec
>>> codec = get_codec("parquet")
>>> table = codec.decode(path.read_bytes())
"""

from __future__ import annotations

import logging
from typing import Dict, List, Union

from tableflow.data.spec import DataFormat
from tableflow.errors import InvalidArgumentError
from tableflow.formats.base import Codec
from tableflow.formats.csv_codec import CsvCodec
from tableflow.formats.json_codec import JsonCodec
from tableflow.formats.parquet_codec import ParquetCodec
from tableflow.formats.records import SECURITY_COLUMNS, SecurityRecord

__all__ = [
    "Codec",
    "CsvCodec",
    "JsonCodec",
    "ParquetCodec",
    "SecurityRecord",
    "SECURITY_COLUMNS",
    "available_formats",
    "get_codec",
    "register_codec",
]

logger = logging.getLogger(__name__)

_CODECS: Dict[DataFormat, Codec] = {
    DataFormat.CSV: CsvCodec(),
    DataFormat.JSON: JsonCodec(),
    DataFormat.PARQUET: ParquetCodec(),
}


def register_codec(codec: Codec) -> None:
    """
    Register ``codec`` as the handler for its format.

    Replaces any codec already registered for the same format.
    """
    if not isinstance(codec, Codec):
        raise InvalidArgumentError(f"Expected a Codec instance, got {type(codec).__name__}")
    previous = _CODECS.get(codec.format)
    _CODECS[codec.format] = codec
    if previous is not None:
        logger.debug(f"Replaced {previous!r} with {codec!r}")


def get_codec(fmt: Union[str, DataFormat]) -> Codec:
    """
    Get the codec for a format.

    Parameters
    ----------
    fmt : str or DataFormat
        Format tag, e.g. ``"csv"``, ``"json"``, ``"parquet"`` or ``"columnar"``

    Returns
    -------
    Codec

    Raises
    ------
    InvalidArgumentError
        If the tag is unknown or no codec is registered for it
    """
    data_format = DataFormat.parse(fmt)
    try:
        return _CODECS[data_format]
    except KeyError:
        raise InvalidArgumentError(f"No codec registered for format: {data_format.value}") from None


def available_formats() -> List[str]:
    """Format tags with a registered codec."""
    return [f.value for f in DataFormat if f in _CODECS]
