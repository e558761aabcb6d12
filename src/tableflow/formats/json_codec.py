"""JSON record-set codec."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from tableflow.data.spec import DataFormat
from tableflow.data.table import Table
from tableflow.errors import DecodeError, EncodeError, InvalidArgumentError
from tableflow.formats.base import Codec
from tableflow.formats.records import SecurityRecord, model_columns, record_to_row

logger = logging.getLogger(__name__)


class JsonCodec(Codec):
    """
    A JSON array of objects, one object per row.

    Records are validated against ``record_model`` (a pydantic model) and
    the resulting columns follow the model's field order. With
    ``record_model=None`` any array of flat objects is accepted and the
    columns are the union of the object keys.

    Parameters
    ----------
    record_model : type of BaseModel, optional
        Schema for each record; defaults to :class:`SecurityRecord`
    """

    format = DataFormat.JSON
    extensions = (".json",)

    def __init__(self, record_model: Optional[Type[BaseModel]] = SecurityRecord):
        self.record_model = record_model
        self._adapter = TypeAdapter(List[record_model]) if record_model is not None else None

    def _parse(self, data: bytes) -> List[Any]:
        try:
            payload = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Failed to parse JSON: {e}") from e

        # {"records": [...]} is accepted as well as a bare array
        if isinstance(payload, dict) and isinstance(payload.get("records"), list):
            payload = payload["records"]
        if not isinstance(payload, list):
            raise DecodeError(
                f"Expected a JSON array of records, got {type(payload).__name__}"
            )
        return payload

    def decode(self, data: bytes) -> Table:
        payload = self._parse(data)

        if self._adapter is None:
            non_objects = [i for i, item in enumerate(payload) if not isinstance(item, dict)]
            if non_objects:
                raise DecodeError(f"Records must be JSON objects; bad entries at {non_objects[:5]}")
            rows = payload
            columns = None
        else:
            try:
                records = self._adapter.validate_python(payload)
            except ValidationError as e:
                raise DecodeError(
                    f"{e.error_count()} record(s) do not match {self.record_model.__name__}:\n{e}"
                ) from e
            rows = [record_to_row(r) for r in records]
            columns = model_columns(self.record_model)

        logger.debug(f"Decoded {len(rows)} JSON records")

        try:
            return Table.from_records(rows, columns=columns)
        except InvalidArgumentError as e:
            raise DecodeError(f"JSON records do not form a valid table: {e}") from e

    def encode(self, table: Table) -> bytes:
        try:
            text = table.to_pandas().to_json(orient="records", date_format="iso")
        except (ValueError, TypeError, OverflowError) as e:
            raise EncodeError(f"Failed to encode table as JSON: {e}") from e
        return text.encode("utf-8")
