"""Data models for directory entities."""

from typing import Annotated

from pydantic import Field

from pyfleetsearch.models._base import EntityKind, FleetBaseModel, FleetEnum
from pyfleetsearch.models.person import Person
from pyfleetsearch.models.vehicle import Vehicle, VehicleStatus

Entity = Annotated[Person | Vehicle, Field(discriminator="kind")]
"""A directory entity, dispatched on its ``kind`` tag."""

__all__ = [
    "Entity",
    "EntityKind",
    "FleetBaseModel",
    "FleetEnum",
    "Person",
    "Vehicle",
    "VehicleStatus",
]
