"""Base model and enums for directory entities.

Every entity model inherits from :class:`FleetBaseModel`: frozen, with
``alias_generator=to_camel`` so camelCase fixture keys map automatically
to snake_case fields. Text fields are kept exactly as given.

Text enums inherit from :class:`FleetEnum` whose ``_missing_`` hook
resolves values case-insensitively by value or member name.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FleetEnum(enum.StrEnum):
    """Base for text enums loaded from fixtures.

    ``VehicleStatus("in use")`` and ``VehicleStatus("IN_USE")`` both
    resolve to ``VehicleStatus.IN_USE``. Anything else still raises
    ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> FleetEnum | None:
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted or member.name.lower() == wanted:
                return member
        return None


class EntityKind(FleetEnum):
    """The two entity variants held by a directory."""

    PERSON = "person"
    VEHICLE = "vehicle"


class FleetBaseModel(BaseModel):
    """Base for immutable directory entities."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
