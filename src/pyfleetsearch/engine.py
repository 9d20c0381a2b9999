"""Query engine: filtering, grouping and match highlighting.

:func:`search` is a pure function of the collection, the query text and
the active kind filter. It holds no state and has no side effects, so the
lifecycle controller simply calls it again after every change.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pyfleetsearch.models import EntityKind, Person, Vehicle


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    """A piece of field text, flagged when it is an occurrence of the query."""

    text: str
    matched: bool = False


@dataclass(frozen=True, slots=True)
class SearchHit:
    """An entity included in a result set, with its highlight annotations.

    ``highlights`` maps each searchable field name to the field text split
    into plain and matched spans. It is empty when the query is empty, and
    read-only: whatever mapping is passed in is copied into a proxy.
    """

    entity: Person | Vehicle
    highlights: Mapping[str, tuple[HighlightSpan, ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "highlights", MappingProxyType(dict(self.highlights)))

    @property
    def kind(self) -> EntityKind:
        return self.entity.entity_kind

    def fragments(self, field_name: str) -> tuple[HighlightSpan, ...]:
        """Spans to render for *field_name*.

        Fields without an annotation come back as a single plain span (or
        no span at all when the field is absent or empty).
        """
        annotated = self.highlights.get(field_name)
        if annotated is not None:
            return annotated
        value = getattr(self.entity, field_name, None)
        if not value:
            return ()
        return (HighlightSpan(str(value)),)


@dataclass(frozen=True, slots=True)
class ResultGroup:
    """Hits of a single kind, in directory order."""

    kind: EntityKind
    hits: tuple[SearchHit, ...] = ()

    @property
    def count(self) -> int:
        return len(self.hits)

    @property
    def entities(self) -> tuple[Person | Vehicle, ...]:
        return tuple(hit.entity for hit in self.hits)

    def __len__(self) -> int:
        return len(self.hits)

    def __iter__(self) -> Iterator[SearchHit]:
        return iter(self.hits)


@dataclass(frozen=True, slots=True)
class ResultSet:
    """Outcome of applying a query and a kind filter to a collection."""

    query: str = ""
    active_filter: EntityKind | None = None
    hits: tuple[SearchHit, ...] = ()

    @property
    def people(self) -> ResultGroup:
        return ResultGroup(EntityKind.PERSON, tuple(hit for hit in self.hits if hit.kind is EntityKind.PERSON))

    @property
    def vehicles(self) -> ResultGroup:
        return ResultGroup(EntityKind.VEHICLE, tuple(hit for hit in self.hits if hit.kind is EntityKind.VEHICLE))

    @property
    def person_count(self) -> int:
        return self.people.count

    @property
    def vehicle_count(self) -> int:
        return self.vehicles.count

    @property
    def total(self) -> int:
        return len(self.hits)

    @property
    def is_empty(self) -> bool:
        """``True`` when nothing matched (the "no results" condition)."""
        return not self.hits

    @property
    def entities(self) -> tuple[Person | Vehicle, ...]:
        """Every included entity, in directory order."""
        return tuple(hit.entity for hit in self.hits)

    def group(self, kind: EntityKind | str) -> ResultGroup:
        if EntityKind(kind) is EntityKind.PERSON:
            return self.people
        return self.vehicles

    def visible_groups(self, active_filter: EntityKind | str | None = None) -> tuple[ResultGroup, ...]:
        """Groups a renderer shows, people first.

        A group is shown when it is non-empty and the filter (this result
        set's own filter unless one is given) is unset or names its kind.
        """
        wanted = self.active_filter if active_filter is None else EntityKind(active_filter)
        groups = (self.people, self.vehicles)
        return tuple(group for group in groups if group.count and (wanted is None or wanted is group.kind))


def searchable_fields(entity: Person | Vehicle) -> tuple[tuple[str, str | None], ...]:
    """``(field_name, value)`` pairs tested against a query, per variant.

    Raises
    ------
    TypeError
        If *entity* is neither a :class:`Person` nor a :class:`Vehicle`.
    """
    if isinstance(entity, Person):
        return (("name", entity.name), ("location", entity.location))
    if isinstance(entity, Vehicle):
        return (("name", entity.name), ("driver", entity.driver))
    raise TypeError(f"unsupported entity type: {type(entity).__name__}")


def _literal_pattern(query: str) -> re.Pattern[str]:
    return re.compile(re.escape(query), re.IGNORECASE)


def _split(text: str, pattern: re.Pattern[str]) -> tuple[HighlightSpan, ...]:
    spans: list[HighlightSpan] = []
    cursor = 0
    for match in pattern.finditer(text):
        if match.start() > cursor:
            spans.append(HighlightSpan(text[cursor : match.start()]))
        spans.append(HighlightSpan(match.group(0), matched=True))
        cursor = match.end()
    if cursor < len(text):
        spans.append(HighlightSpan(text[cursor:]))
    return tuple(spans)


def highlight(text: str, query: str) -> tuple[HighlightSpan, ...]:
    """Split *text* into plain and matched spans around *query*.

    The query is a literal, case-insensitive delimiter; matched spans keep
    the casing of *text*. Empty spans are never produced.

    >>> [(s.text, s.matched) for s in highlight("Tresor Manock", "tresor")]
    [('Tresor', True), (' Manock', False)]
    """
    if not query:
        return (HighlightSpan(text),) if text else ()
    return _split(text, _literal_pattern(query))


def search(
    collection: Iterable[Person | Vehicle],
    query_text: str,
    active_filter: EntityKind | str | None = None,
) -> ResultSet:
    """Derive the result set for *query_text* and *active_filter*.

    Parameters
    ----------
    collection : iterable of Person or Vehicle
        Entities to search, usually a :class:`~pyfleetsearch.directory.DirectoryStore`.
    query_text : str
        Literal substring to look for. An empty query matches everything
        and produces no highlights. The text is used as given (no trimming).
    active_filter : EntityKind, str or None
        Restrict the result to one kind. ``None`` keeps both.

    Returns
    -------
    ResultSet
        Included entities in collection order with their annotations.
    """
    kind_filter = None if active_filter is None else EntityKind(active_filter)
    pattern = _literal_pattern(query_text) if query_text else None

    hits: list[SearchHit] = []
    for entity in collection:
        if kind_filter is not None and entity.entity_kind is not kind_filter:
            continue
        if pattern is None:
            hits.append(SearchHit(entity))
            continue

        fields = [(name, value) for name, value in searchable_fields(entity) if value is not None]
        if not any(pattern.search(value) for _, value in fields):
            continue
        hits.append(SearchHit(entity, {name: _split(value, pattern) for name, value in fields}))

    return ResultSet(query=query_text, active_filter=kind_filter, hits=tuple(hits))
