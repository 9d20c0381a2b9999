"""Directory store and fixture loading.

The store holds the fixed collection every query runs against. It has a
single accessor and no mutation operations; populating it is the job of
the loaders in this module.
"""

from __future__ import annotations

import importlib.resources
import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pyfleetsearch.exceptions import DirectoryLoadError, DuplicateEntityError
from pyfleetsearch.models import Entity, EntityKind, Person, Vehicle

_logger = logging.getLogger(__name__)

_ENTITY_LIST_ADAPTER: TypeAdapter[list[Entity]] = TypeAdapter(list[Entity])

SAMPLE_DIRECTORY_RESOURCE = "data/sample_directory.json"


class DirectoryStore:
    """Immutable, ordered collection of people and vehicles.

    Parameters
    ----------
    entities : iterable of Person or Vehicle
        Entities in display order. Identities must be unique per kind.

    Raises
    ------
    DuplicateEntityError
        If two people or two vehicles share an id.
    """

    def __init__(self, entities: Iterable[Person | Vehicle] = ()) -> None:
        collection = tuple(entities)
        seen: set[tuple[EntityKind, int | str]] = set()
        for entity in collection:
            key = (entity.entity_kind, entity.id)
            if key in seen:
                raise DuplicateEntityError(
                    f"duplicate {entity.entity_kind} id {entity.id!r}",
                    kind=entity.entity_kind,
                    entity_id=entity.id,
                )
            seen.add(key)
        self._entities = collection

    @classmethod
    def from_records(cls, records: Iterable[Any], *, source: str = "<records>") -> DirectoryStore:
        """Validate tagged entity dicts and build a store from them."""
        try:
            entities = _ENTITY_LIST_ADAPTER.validate_python(list(records))
        except ValidationError as exc:
            raise DirectoryLoadError(f"invalid directory records in {source}: {exc}", source=source) from exc
        return cls(entities)

    @property
    def entities(self) -> tuple[Person | Vehicle, ...]:
        """The full collection, in its original order."""
        return self._entities

    @property
    def people(self) -> tuple[Person, ...]:
        return tuple(entity for entity in self._entities if isinstance(entity, Person))

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return tuple(entity for entity in self._entities if isinstance(entity, Vehicle))

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Person | Vehicle]:
        return iter(self._entities)

    def __repr__(self) -> str:
        return f"DirectoryStore(people={len(self.people)}, vehicles={len(self.vehicles)})"


def _parse_json(text: str, source: str) -> list[Any]:
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DirectoryLoadError(f"{source} is not valid JSON: {exc}", source=source) from exc
    if not isinstance(decoded, list):
        raise DirectoryLoadError(f"{source} must contain a JSON array of entities", source=source)
    return decoded


def load_directory(path: str | Path) -> DirectoryStore:
    """Load a directory from a JSON fixture.

    The file holds an array of records tagged with ``"kind": "person"`` or
    ``"kind": "vehicle"``.

    Raises
    ------
    DirectoryLoadError
        If the file cannot be read, is not a JSON array, or holds an
        invalid record.
    """
    fixture = Path(path)
    source = str(fixture)
    _logger.debug("Loading directory from %s", source)
    try:
        text = fixture.read_text(encoding="utf-8")
    except OSError as exc:
        raise DirectoryLoadError(f"cannot read directory file {source}: {exc}", source=source) from exc
    store = DirectoryStore.from_records(_parse_json(text, source), source=source)
    _logger.debug("Loaded %r from %s", store, source)
    return store


def sample_directory() -> DirectoryStore:
    """Load the sample directory shipped with the package."""
    _logger.debug("Loading sample directory from package data")
    try:
        ref = importlib.resources.files("pyfleetsearch").joinpath(SAMPLE_DIRECTORY_RESOURCE)
        text = ref.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DirectoryLoadError(
            f"{SAMPLE_DIRECTORY_RESOURCE} not found in package data",
            source=SAMPLE_DIRECTORY_RESOURCE,
        ) from exc
    return DirectoryStore.from_records(_parse_json(text, SAMPLE_DIRECTORY_RESOURCE), source=SAMPLE_DIRECTORY_RESOURCE)
