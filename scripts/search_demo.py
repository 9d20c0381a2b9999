#!/usr/bin/env python3
"""Run overlay searches against a directory from the terminal.

Loads the packaged sample directory (or ``--directory FILE``), opens the
search modal, applies each query in turn and prints the grouped results
with matches wrapped in ``[...]``.

Examples::

    python scripts/search_demo.py tresor
    python scripts/search_demo.py --filter vehicle tresor "#0"
    python scripts/search_demo.py --directory fleet.json --verbose akwa
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfleetsearch import (  # noqa: E402
    DirectoryError,
    EntityKind,
    FilterToggled,
    KeyboardHub,
    KeyEvent,
    ModalSnapshot,
    Person,
    QueryChanged,
    SearchConfig,
    SearchHit,
    SearchModalController,
    load_directory,
    sample_directory,
)

_GROUP_TITLES = {EntityKind.PERSON: "Clients", EntityKind.VEHICLE: "Cars"}


def _fragments(hit: SearchHit, field_name: str) -> str:
    return "".join(f"[{span.text}]" if span.matched else span.text for span in hit.fragments(field_name))


def _describe(hit: SearchHit) -> str:
    entity = hit.entity
    if isinstance(entity, Person):
        return f"{_fragments(hit, 'name')}  ({_fragments(hit, 'location')})"
    line = f"{_fragments(hit, 'name')}  <{entity.status}>"
    if entity.driver:
        line += f"  driven by {_fragments(hit, 'driver')}"
    if entity.time:
        line += f"  {entity.time}"
    return line


def _print_snapshot(snapshot: ModalSnapshot) -> None:
    filter_label = snapshot.active_filter or "all"
    print(f"query={snapshot.query_text!r} filter={filter_label}")
    if snapshot.results.is_empty:
        print("  No results")
        return
    for group in snapshot.results.visible_groups():
        print(f"  {_GROUP_TITLES[group.kind]} ({group.count})")
        for hit in group:
            print(f"    {_describe(hit)}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("queries", nargs="*", help="Queries to apply in order (default: empty query)")
    parser.add_argument("--directory", type=Path, help="JSON directory fixture (default: packaged sample)")
    parser.add_argument("--filter", choices=[kind.value for kind in EntityKind], help="Kind filter to toggle on")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        store = load_directory(args.directory) if args.directory else sample_directory()
    except DirectoryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    hub = KeyboardHub()
    with SearchModalController(store, config=SearchConfig.from_env(), keyboard=hub) as modal:
        bindings = modal.config.key_bindings
        hub.emit(KeyEvent(key=bindings.open_key, **{bindings.open_modifiers[0]: True}))
        if args.filter:
            modal.dispatch(FilterToggled(kind=EntityKind(args.filter)))
        for query in args.queries or [""]:
            modal.dispatch(QueryChanged(text=query))
            _print_snapshot(modal.snapshot())
    return 0


if __name__ == "__main__":
    sys.exit(main())
