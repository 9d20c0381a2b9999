"""Person model."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pyfleetsearch.models._base import EntityKind, FleetBaseModel


class Person(FleetBaseModel):
    """A person listed in the directory (shown as a client)."""

    kind: Literal["person"] = "person"
    """Variant tag."""
    id: int
    """Identity, unique among people."""
    name: str
    """Display name (e.g. ``"Tresor Manock"``)."""
    location: str
    """Location label (e.g. ``"Akwa"``)."""
    avatar: str = Field(default="")
    """Avatar image URI."""

    @property
    def entity_kind(self) -> EntityKind:
        return EntityKind.PERSON
