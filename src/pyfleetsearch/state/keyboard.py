"""Global keyboard listener.

A :class:`KeyboardHub` stands in for the window-level key listener of a UI
toolkit: the toolkit adapter forwards every key press to :meth:`KeyboardHub.emit`
regardless of which element has focus, and interested parties hold an
explicit :class:`KeySubscription` that they cancel when they go away.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pyfleetsearch.state.events import KeyEvent

_logger = logging.getLogger(__name__)

KeyListener = Callable[[KeyEvent], bool]
"""Receives a key event; returns ``True`` when it consumed the event."""


class KeySubscription:
    """Handle for a registered listener. Cancelling twice is harmless."""

    def __init__(self, hub: KeyboardHub, listener: KeyListener) -> None:
        self._hub = hub
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._hub._remove(self._listener)  # noqa: SLF001

    def __enter__(self) -> KeySubscription:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.cancel()


class KeyboardHub:
    """Fan-out point for global key presses."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: KeyListener) -> KeySubscription:
        """Register *listener* until the returned subscription is cancelled."""
        self._listeners.append(listener)
        _logger.debug("Key listener registered (%d active)", len(self._listeners))
        return KeySubscription(self, listener)

    def _remove(self, listener: KeyListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return
        _logger.debug("Key listener removed (%d active)", len(self._listeners))

    def emit(self, event: KeyEvent) -> bool:
        """Deliver *event* to every listener.

        Returns ``True`` when at least one listener consumed the event, in
        which case the caller should suppress the toolkit's default action.
        """
        consumed = False
        # Copy: a listener may cancel its own subscription while handling.
        for listener in list(self._listeners):
            try:
                consumed = bool(listener(event)) or consumed
            except Exception:
                _logger.debug("Key listener failed for key=%s", event.key, exc_info=True)
        return consumed
