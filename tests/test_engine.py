"""Tests for the query engine (filtering, grouping, highlighting)."""

from __future__ import annotations

import pytest

from pyfleetsearch.directory import DirectoryStore, sample_directory
from pyfleetsearch.engine import HighlightSpan, ResultSet, SearchHit, highlight, search, searchable_fields
from pyfleetsearch.models import EntityKind, Person, Vehicle, VehicleStatus

TRESOR = Person(id=1, name="Tresor Manock", location="Akwa", avatar="https://example.com/1.png")
TRUCK = Vehicle(
    id="truck-237",
    name="Truck #237",
    status=VehicleStatus.IN_USE,
    driver="Tresor Manock",
    time="05h/08h",
)
CARGO = Vehicle(id="cargo-098", name="CargoNgola #098", status=VehicleStatus.MAINTENANCE)


@pytest.fixture
def store() -> DirectoryStore:
    return DirectoryStore([TRESOR, TRUCK, CARGO])


def _texts(spans: tuple[HighlightSpan, ...]) -> list[tuple[str, bool]]:
    return [(span.text, span.matched) for span in spans]


# ------------------------------------------------------------------
# Scenarios
# ------------------------------------------------------------------


class TestScenarios:
    def test_query_matches_person_and_vehicle_driver(self, store: DirectoryStore) -> None:
        result = search(store, "tresor", None)

        assert result.people.entities == (TRESOR,)
        assert result.vehicles.entities == (TRUCK,)
        assert result.person_count == 1
        assert result.vehicle_count == 1

        person_hit = result.people.hits[0]
        assert _texts(person_hit.highlights["name"]) == [("Tresor", True), (" Manock", False)]
        assert _texts(person_hit.highlights["location"]) == [("Akwa", False)]

        vehicle_hit = result.vehicles.hits[0]
        assert _texts(vehicle_hit.highlights["name"]) == [("Truck #237", False)]
        assert _texts(vehicle_hit.highlights["driver"]) == [("Tresor", True), (" Manock", False)]

    def test_vehicle_filter(self, store: DirectoryStore) -> None:
        result = search(store, "tresor", EntityKind.VEHICLE)

        assert result.people.count == 0
        assert result.vehicles.entities == (TRUCK,)
        assert result.active_filter is EntityKind.VEHICLE

    def test_empty_query_returns_everything_without_highlights(self, store: DirectoryStore) -> None:
        result = search(store, "", None)

        assert result.entities == (TRESOR, TRUCK, CARGO)
        assert result.people.entities == (TRESOR,)
        assert result.vehicles.entities == (TRUCK, CARGO)
        assert all(hit.highlights == {} for hit in result.hits)

    def test_no_match(self, store: DirectoryStore) -> None:
        result = search(store, "zzz", None)

        assert result.is_empty
        assert result.total == 0
        assert result.people.count == 0
        assert result.vehicles.count == 0
        assert result.visible_groups() == ()


# ------------------------------------------------------------------
# Matching rules
# ------------------------------------------------------------------


class TestMatching:
    def test_case_insensitive_keeps_original_casing(self, store: DirectoryStore) -> None:
        result = search(store, "AKWA", None)
        assert _texts(result.hits[0].highlights["location"]) == [("Akwa", True)]

    def test_literal_match_of_pattern_characters(self) -> None:
        dotted = Person(id=1, name="a.b", location="x")
        wildcard_bait = Person(id=2, name="axb", location="x")
        result = search([dotted, wildcard_bait], "a.b", None)
        assert result.entities == (dotted,)

    @pytest.mark.parametrize("query", ["#237", "(", "[", "*", "+", "\\", "$", "^"])
    def test_regex_metacharacters_never_raise(self, store: DirectoryStore, query: str) -> None:
        result = search(store, query, None)
        for entity in result.entities:
            assert any(value and query.lower() in value.lower() for _, value in searchable_fields(entity))

    def test_hash_is_literal(self, store: DirectoryStore) -> None:
        assert search(store, "#237", None).entities == (TRUCK,)

    def test_absent_driver_never_matches(self) -> None:
        result = search([CARGO], "none", None)
        assert result.is_empty

    def test_dash_driver_is_searchable(self) -> None:
        dashed = Vehicle(id="v", name="Van", status=VehicleStatus.OFF, driver="--")
        hit = search([dashed], "--", None).hits[0]
        assert _texts(hit.highlights["driver"]) == [("--", True)]

    def test_absent_driver_is_not_annotated(self, store: DirectoryStore) -> None:
        result = search(store, "cargo", None)
        hit = result.hits[0]
        assert hit.entity == CARGO
        assert set(hit.highlights) == {"name"}

    def test_time_and_avatar_are_not_searchable(self, store: DirectoryStore) -> None:
        assert search(store, "05h", None).is_empty
        assert search(store, "example.com", None).is_empty

    def test_status_is_not_searchable(self, store: DirectoryStore) -> None:
        assert search(store, "maintenance", None).is_empty

    def test_no_trimming(self, store: DirectoryStore) -> None:
        assert search(store, " tresor ", None).is_empty
        assert search(store, " ", None).entities == (TRESOR, TRUCK, CARGO)
        assert search(store, " ", None).hits[0].highlights["name"][1] == HighlightSpan(" ", matched=True)

    def test_filter_accepts_plain_strings(self, store: DirectoryStore) -> None:
        assert search(store, "tresor", "person").entities == (TRESOR,)

    def test_empty_collection(self) -> None:
        assert search([], "tresor", None) == ResultSet(query="tresor")

    def test_searchable_fields_rejects_unknown_types(self) -> None:
        with pytest.raises(TypeError):
            searchable_fields("not an entity")  # type: ignore[arg-type]


# ------------------------------------------------------------------
# Properties over the sample directory
# ------------------------------------------------------------------

QUERIES = ["", "a", "R", "rui", "akwa", "#0", "truck", "doe", "tresor manock", "zzz", "o"]


class TestProperties:
    @pytest.mark.parametrize("active_filter", [None, EntityKind.PERSON, EntityKind.VEHICLE])
    def test_empty_query_is_kind_narrowing_only(self, active_filter: EntityKind | None) -> None:
        store = sample_directory()
        result = search(store, "", active_filter)

        expected = tuple(
            entity for entity in store.entities if active_filter is None or entity.entity_kind is active_filter
        )
        assert result.entities == expected
        assert all(not hit.highlights for hit in result.hits)

    @pytest.mark.parametrize("query", QUERIES)
    def test_sound_and_complete(self, query: str) -> None:
        store = sample_directory()
        result = search(store, query, None)

        def matches(entity: Person | Vehicle) -> bool:
            return any(value is not None and query.lower() in value.lower() for _, value in searchable_fields(entity))

        assert result.entities == tuple(entity for entity in store.entities if matches(entity))

    @pytest.mark.parametrize("query", QUERIES)
    @pytest.mark.parametrize("active_filter", [None, EntityKind.PERSON, EntityKind.VEHICLE])
    def test_groups_partition_in_store_order(self, query: str, active_filter: EntityKind | None) -> None:
        store = sample_directory()
        result = search(store, query, active_filter)

        assert all(isinstance(entity, Person) for entity in result.people.entities)
        assert all(isinstance(entity, Vehicle) for entity in result.vehicles.entities)
        assert result.person_count + result.vehicle_count == result.total
        order = {id(entity): index for index, entity in enumerate(store.entities)}
        for group in (result.people, result.vehicles):
            positions = [order[id(entity)] for entity in group.entities]
            assert positions == sorted(positions)

    @pytest.mark.parametrize("query", QUERIES)
    def test_highlights_reassemble_field_text(self, query: str) -> None:
        store = sample_directory()
        for hit in search(store, query, None).hits:
            for field_name, spans in hit.highlights.items():
                assert "".join(span.text for span in spans) == getattr(hit.entity, field_name)
                for span in spans:
                    if span.matched:
                        assert span.text.lower() == query.lower()

    def test_pure(self) -> None:
        store = sample_directory()
        assert search(store, "rui", None) == search(store, "rui", None)


# ------------------------------------------------------------------
# Result set views
# ------------------------------------------------------------------


class TestResultSet:
    def test_visible_groups_follow_filter(self, store: DirectoryStore) -> None:
        result = search(store, "", None)
        assert [group.kind for group in result.visible_groups()] == [EntityKind.PERSON, EntityKind.VEHICLE]
        assert [group.kind for group in result.visible_groups(EntityKind.VEHICLE)] == [EntityKind.VEHICLE]

    def test_visible_groups_skip_empty_groups(self, store: DirectoryStore) -> None:
        result = search(store, "cargo", None)
        groups = result.visible_groups()
        assert len(groups) == 1
        assert groups[0].kind is EntityKind.VEHICLE
        assert groups[0].count == 1

    def test_group_lookup(self, store: DirectoryStore) -> None:
        result = search(store, "", None)
        assert result.group("person") == result.people
        assert result.group(EntityKind.VEHICLE) == result.vehicles

    def test_results_are_hashable(self, store: DirectoryStore) -> None:
        result = search(store, "tresor", None)

        assert hash(result) == hash(search(store, "tresor", None))
        assert hash(result.hits[0]) == hash(SearchHit(TRESOR))
        assert result.hits[0] != SearchHit(TRESOR)

    def test_highlights_are_read_only(self) -> None:
        source = {"name": (HighlightSpan("Truck #237"),)}
        hit = SearchHit(TRUCK, source)
        source["driver"] = ()

        assert set(hit.highlights) == {"name"}
        with pytest.raises(TypeError):
            hit.highlights["name"] = ()  # type: ignore[index]

    def test_fragments_fall_back_to_plain_text(self) -> None:
        hit = SearchHit(TRUCK)
        assert _texts(hit.fragments("name")) == [("Truck #237", False)]
        assert hit.fragments("missing") == ()
        assert SearchHit(CARGO).fragments("driver") == ()


# ------------------------------------------------------------------
# highlight()
# ------------------------------------------------------------------


class TestHighlight:
    def test_multiple_occurrences(self) -> None:
        assert _texts(highlight("Rui Silvestre", "r")) == [
            ("R", True),
            ("ui Silvest", False),
            ("r", True),
            ("e", False),
        ]

    def test_whole_text(self) -> None:
        assert _texts(highlight("Akwa", "akwa")) == [("Akwa", True)]

    def test_adjacent_occurrences(self) -> None:
        assert _texts(highlight("aaa", "a")) == [("a", True), ("a", True), ("a", True)]

    def test_empty_query(self) -> None:
        assert _texts(highlight("Akwa", "")) == [("Akwa", False)]

    def test_empty_text(self) -> None:
        assert highlight("", "a") == ()
        assert highlight("", "") == ()

    def test_literal_delimiter(self) -> None:
        assert _texts(highlight("a.b axb", ".")) == [("a", False), (".", True), ("b axb", False)]
