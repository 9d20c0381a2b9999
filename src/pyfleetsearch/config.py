"""Search overlay configuration for pyfleetsearch."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfleetsearch.exceptions import FleetSearchConfigError

MODIFIER_NAMES: frozenset[str] = frozenset({"ctrl", "meta", "alt", "shift"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class KeyBindings:
    """Global keyboard shortcuts recognized by the modal.

    Parameters
    ----------
    open_key : str
        Letter that opens the modal when pressed with a modifier.
        Compared case-insensitively.
    open_modifiers : tuple of str
        Modifiers that may accompany ``open_key``; holding any one of them
        is enough (``Ctrl+K`` and ``Cmd+K`` both open by default).
    dismiss_key : str
        Key that closes the open modal.
    """

    open_key: str = "k"
    open_modifiers: tuple[str, ...] = ("ctrl", "meta")
    dismiss_key: str = "Escape"

    def __post_init__(self) -> None:
        if not self.open_key.strip():
            raise FleetSearchConfigError("open_key must be non-empty")
        if not self.dismiss_key.strip():
            raise FleetSearchConfigError("dismiss_key must be non-empty")
        if not self.open_modifiers:
            raise FleetSearchConfigError("open_modifiers must name at least one modifier")
        unknown = set(self.open_modifiers) - MODIFIER_NAMES
        if unknown:
            raise FleetSearchConfigError(
                f"unknown modifier(s) {sorted(unknown)}; expected some of {sorted(MODIFIER_NAMES)}"
            )


@dataclasses.dataclass(frozen=True)
class SearchConfig:
    """Overlay configuration.

    Parameters
    ----------
    key_bindings : KeyBindings
        Open and dismiss shortcuts.
    reset_on_close : bool
        Clear the query text and kind filter whenever the modal closes.
        Off by default: a reopened modal shows the previous search.
    trim_query : bool
        Strip leading/trailing whitespace from query edits before they
        reach the engine, so a blank query behaves like an empty one.
    """

    key_bindings: KeyBindings = dataclasses.field(default_factory=KeyBindings)
    reset_on_close: bool = False
    trim_query: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> SearchConfig:
        """Create configuration from environment variables.

        Reads ``FLEETSEARCH_OPEN_KEY``, ``FLEETSEARCH_OPEN_MODIFIERS``
        (comma separated), ``FLEETSEARCH_DISMISS_KEY``,
        ``FLEETSEARCH_RESET_ON_CLOSE`` and ``FLEETSEARCH_TRIM_QUERY``.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.
            ``key_bindings`` may be a :class:`KeyBindings` or a dict of
            its fields.

        Returns
        -------
        SearchConfig
            Populated configuration.
        """
        env = os.environ

        binding_kwargs: dict[str, Any] = {}
        open_key = env.get("FLEETSEARCH_OPEN_KEY")
        if open_key is not None:
            binding_kwargs["open_key"] = open_key
        dismiss_key = env.get("FLEETSEARCH_DISMISS_KEY")
        if dismiss_key is not None:
            binding_kwargs["dismiss_key"] = dismiss_key
        modifiers = env.get("FLEETSEARCH_OPEN_MODIFIERS")
        if modifiers is not None:
            binding_kwargs["open_modifiers"] = tuple(
                part.strip().lower() for part in modifiers.split(",") if part.strip()
            )

        binding_overrides = overrides.pop("key_bindings", None)
        if isinstance(binding_overrides, dict):
            binding_kwargs.update(binding_overrides)
        elif isinstance(binding_overrides, KeyBindings):
            binding_kwargs = dataclasses.asdict(binding_overrides)

        config_kwargs: dict[str, Any] = {"key_bindings": KeyBindings(**binding_kwargs)}

        if "reset_on_close" not in overrides:
            config_kwargs["reset_on_close"] = _env_bool(env.get("FLEETSEARCH_RESET_ON_CLOSE"), False)
        if "trim_query" not in overrides:
            config_kwargs["trim_query"] = _env_bool(env.get("FLEETSEARCH_TRIM_QUERY"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
