"""Vehicle model."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import field_validator

from pyfleetsearch.models._base import EntityKind, FleetBaseModel, FleetEnum


class VehicleStatus(FleetEnum):
    """Operating status of a vehicle."""

    IN_USE = "In use"
    MAINTENANCE = "Maintenance"
    OFF = "Off"


class Vehicle(FleetBaseModel):
    """A vehicle listed in the directory.

    ``driver`` and ``time`` are optional; a fixture may omit them or give
    an empty string, both of which load as ``None``.
    """

    kind: Literal["vehicle"] = "vehicle"
    """Variant tag."""
    id: str
    """Identity, unique among vehicles (e.g. ``"truck-237"``)."""
    name: str
    """Display name (e.g. ``"Truck #237"``)."""
    status: VehicleStatus
    """Operating status."""
    driver: str | None = None
    """Name of the assigned driver, if any."""
    time: str | None = None
    """Usage-time label (e.g. ``"05h/08h"``)."""

    @property
    def entity_kind(self) -> EntityKind:
        return EntityKind.VEHICLE

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("driver", "time", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value
