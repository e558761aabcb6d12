"""Record schemas for JSON record sets, using pydantic."""

from __future__ import annotations

from typing import Any, Dict, List, Type
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SecurityRecord(BaseModel):
    """One network security event; the default schema for JSON record sets."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: UUID = Field(
        validation_alias=AliasChoices("id", "uuid"),
        description="Record identifier (a UUID; 'uuid' is accepted as the input key)",
    )
    timestamp: str = Field(description="Event time as recorded by the source")
    source_ip: str = Field(description="Source address")
    destination_ip: str = Field(description="Destination address")
    action: str = Field(description="Action taken, e.g. allow or deny")
    protocol: str = Field(description="Network protocol")

    @field_validator("action", "protocol")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    def to_row(self) -> Dict[str, Any]:
        """Row dict with the id rendered as a string."""
        row = self.model_dump()
        row["id"] = str(self.id)
        return row


def model_columns(model: Type[BaseModel]) -> List[str]:
    """Column names produced by ``model``, in field order."""
    return list(model.model_fields.keys())


def record_to_row(record: BaseModel) -> Dict[str, Any]:
    """Convert a validated record to a table row, stringifying UUIDs."""
    if hasattr(record, "to_row"):
        return record.to_row()
    return {k: (str(v) if isinstance(v, UUID) else v) for k, v in record.model_dump().items()}


SECURITY_COLUMNS: List[str] = model_columns(SecurityRecord)
