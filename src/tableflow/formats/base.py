"""Base class for table codecs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from tableflow.data.spec import DataFormat
from tableflow.data.table import Table


class Codec(ABC):
    """
    Abstract base class for format codecs.

    A codec turns the raw bytes of one file format into a :class:`Table`
    and back. Codecs hold no per-call state, so one instance may be
    reused for any number of tables.

    Usage
    -----
    >>> codec = get_codec("csv")
    >>> table = codec.decode(b"a,b\\n1,2\\n")
    >>> codec.encode(table)
    b'a,b\\n1,2\\n'
    """

    format: DataFormat
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def decode(self, data: bytes) -> Table:
        """
        Decode raw bytes into a table.

        Parameters
        ----------
        data : bytes
            File contents

        Returns
        -------
        Table

        Raises
        ------
        DecodeError
            If the bytes are not valid for this format
        """
        pass

    @abstractmethod
    def encode(self, table: Table) -> bytes:
        """
        Encode a table to raw bytes.

        Raises
        ------
        EncodeError
            If the table cannot be represented in this format
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(format={self.format.value!r})"
