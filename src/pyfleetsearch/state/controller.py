"""Modal lifecycle controller.

This is the only component allowed to change the overlay state (open or
closed, query text, kind filter). Every change re-runs the query engine
synchronously and notifies subscribers with a fresh snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pyfleetsearch.config import SearchConfig
from pyfleetsearch.engine import ResultSet, search
from pyfleetsearch.models import EntityKind, Person, Vehicle
from pyfleetsearch.state.events import (
    ClickedAway,
    CloseRequested,
    DismissRequested,
    FilterToggled,
    KeyEvent,
    OpenRequested,
    QueryChanged,
)
from pyfleetsearch.state.keyboard import KeyboardHub, KeySubscription

_logger = logging.getLogger(__name__)


class ModalState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True, slots=True)
class ModalSnapshot:
    """Everything a renderer needs to draw the overlay."""

    state: ModalState
    query_text: str
    active_filter: EntityKind | None
    results: ResultSet

    @property
    def is_open(self) -> bool:
        return self.state is ModalState.OPEN


Subscriber = Callable[[ModalSnapshot], None]


class SearchModalController:
    """Drives the search modal from input events.

    Usage::

        hub = KeyboardHub()
        with SearchModalController(sample_directory(), keyboard=hub) as modal:
            hub.emit(KeyEvent(key="k", ctrl=True))
            modal.set_query("tresor")
            render(modal.snapshot())

    Parameters
    ----------
    collection : iterable of Person or Vehicle
        Entities to search, typically a ``DirectoryStore``. Iterated on
        every recomputation, so it must be re-iterable.
    config : SearchConfig or None
        Shortcuts and reset/trim policy. Defaults to ``SearchConfig()``.
    keyboard : KeyboardHub or None
        Global key source. When given, the controller listens to it between
        :meth:`attach` and :meth:`detach` (or for the ``with`` block).
    """

    def __init__(
        self,
        collection: Iterable[Person | Vehicle],
        *,
        config: SearchConfig | None = None,
        keyboard: KeyboardHub | None = None,
    ) -> None:
        self._collection = collection
        self._config = config or SearchConfig()
        self._keyboard = keyboard
        self._key_subscription: KeySubscription | None = None
        self._subscribers: list[Subscriber] = []
        self._state = ModalState.CLOSED
        self._query_text = ""
        self._active_filter: EntityKind | None = None
        self._results = self._compute()

    # ------------------------------------------------------------------
    # Keyboard listener lifecycle
    # ------------------------------------------------------------------

    def attach(self) -> None:
        """Start listening to the keyboard hub (no-op without one)."""
        if self._keyboard is None or self._key_subscription is not None:
            return
        self._key_subscription = self._keyboard.subscribe(self.handle_key)

    def detach(self) -> None:
        """Stop listening to the keyboard hub."""
        subscription = self._key_subscription
        self._key_subscription = None
        if subscription is not None:
            subscription.cancel()

    def __enter__(self) -> SearchModalController:
        self.attach()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.detach()

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def state(self) -> ModalState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ModalState.OPEN

    @property
    def query_text(self) -> str:
        return self._query_text

    @property
    def active_filter(self) -> EntityKind | None:
        return self._active_filter

    @property
    def results(self) -> ResultSet:
        """Result set for the current query and filter."""
        return self._results

    def snapshot(self) -> ModalSnapshot:
        return ModalSnapshot(
            state=self._state,
            query_text=self._query_text,
            active_filter=self._active_filter,
            results=self._results,
        )

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call *callback* with a snapshot after every state change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                _logger.debug("Modal subscriber failed", exc_info=True)

    def _compute(self) -> ResultSet:
        return search(self._collection, self._query_text, self._active_filter)

    def _changed(self) -> None:
        self._results = self._compute()
        self._notify()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open the modal. The previous query and filter are kept."""
        if self._state is ModalState.OPEN:
            return
        self._state = ModalState.OPEN
        _logger.debug("Search modal opened (query=%r, filter=%s)", self._query_text, self._active_filter)
        self._changed()

    def close(self) -> None:
        """Close the modal; no-op when already closed."""
        if self._state is ModalState.CLOSED:
            return
        self._state = ModalState.CLOSED
        if self._config.reset_on_close:
            self._query_text = ""
            self._active_filter = None
        _logger.debug("Search modal closed")
        self._changed()

    def dismiss(self) -> None:
        """Dismiss-key close."""
        self.close()

    def click_away(self) -> None:
        """Close after a pointer activation outside the modal."""
        self.close()

    def toggle_filter(self, kind: EntityKind | str) -> None:
        """Select *kind*, or clear the filter if *kind* is already selected.

        Ignored while the modal is closed, since the filter buttons are not
        reachable then.
        """
        wanted = EntityKind(kind)
        if self._state is not ModalState.OPEN:
            _logger.debug("Ignoring %s filter toggle while closed", wanted)
            return
        self._active_filter = None if self._active_filter is wanted else wanted
        _logger.debug("Active filter is now %s", self._active_filter)
        self._changed()

    def set_query(self, text: str) -> None:
        """Replace the query text and recompute results, in either state."""
        if self._config.trim_query:
            text = text.strip()
        self._query_text = text
        self._changed()

    def handle_key(self, event: KeyEvent) -> bool:
        """React to a global key press.

        Returns ``True`` when the key was one of the shortcuts and was acted
        on, so the caller can suppress its default behavior.
        """
        bindings = self._config.key_bindings
        if event.key.lower() == bindings.open_key.lower() and any(
            event.modifier_held(name) for name in bindings.open_modifiers
        ):
            _logger.debug("Open shortcut pressed")
            self.open()
            return True
        if event.key == bindings.dismiss_key and self._state is ModalState.OPEN:
            self.dismiss()
            return True
        return False

    def dispatch(
        self,
        event: OpenRequested | CloseRequested | DismissRequested | ClickedAway | QueryChanged | FilterToggled | KeyEvent,
    ) -> bool:
        """Apply any input event.

        Returns ``True`` if the event was handled (always, except for key
        presses that are not shortcuts).
        """
        if isinstance(event, OpenRequested):
            self.open()
        elif isinstance(event, CloseRequested):
            self.close()
        elif isinstance(event, DismissRequested):
            self.dismiss()
        elif isinstance(event, ClickedAway):
            self.click_away()
        elif isinstance(event, QueryChanged):
            self.set_query(event.text)
        elif isinstance(event, FilterToggled):
            self.toggle_filter(event.kind)
        elif isinstance(event, KeyEvent):
            return self.handle_key(event)
        else:
            raise TypeError(f"unsupported event type: {type(event).__name__}")
        return True
