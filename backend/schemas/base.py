# backend/schemas/base.py
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; they were stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Timestamps are always timezone-aware UTC, whichever backend produced them
UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


# Base configuration for ORM compatibility; JSON keys are camelCase on the wire
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
