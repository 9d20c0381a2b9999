"""Custom exception hierarchy for pyfleetsearch."""

from __future__ import annotations


class FleetSearchError(Exception):
    """Base exception for all pyfleetsearch errors."""


class FleetSearchConfigError(FleetSearchError):
    """Invalid or missing configuration."""


class DirectoryError(FleetSearchError):
    """Problem with the entity directory."""


class DirectoryLoadError(DirectoryError):
    """A directory fixture could not be read or validated."""

    def __init__(self, message: str, *, source: str = "") -> None:
        self.source = source
        super().__init__(message)


class DuplicateEntityError(DirectoryError):
    """Two entities of the same kind share an identity.

    Identities only have to be unique inside their own kind: a person
    with id ``1`` and a vehicle with id ``"1"`` may coexist.
    """

    def __init__(self, message: str, *, kind: str, entity_id: int | str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(message)
