"""Input events consumed by the modal lifecycle controller.

Pointer, keyboard and text-input adapters convert what they observe into
these events. Only the controller is allowed to act on them.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyfleetsearch.models import EntityKind


class _InputEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class OpenRequested(_InputEvent):
    """Explicit open request (e.g. the search button was activated)."""

    type: Literal["open"] = "open"


class CloseRequested(_InputEvent):
    """Explicit close request (e.g. the close button was activated)."""

    type: Literal["close"] = "close"


class DismissRequested(_InputEvent):
    """The dismiss key was pressed."""

    type: Literal["dismiss"] = "dismiss"


class ClickedAway(_InputEvent):
    """A pointer activation landed outside the modal."""

    type: Literal["click_away"] = "click_away"


class QueryChanged(_InputEvent):
    """The search input now holds ``text``."""

    type: Literal["query"] = "query"
    text: str = ""


class FilterToggled(_InputEvent):
    """A kind filter button was activated."""

    type: Literal["filter"] = "filter"
    kind: EntityKind


class KeyEvent(_InputEvent):
    """A key press observed by the global keyboard listener."""

    type: Literal["key"] = "key"
    key: str = Field(..., description="Key name, e.g. 'k' or 'Escape'")
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False

    @field_validator("key")
    @classmethod
    def _non_empty_key(cls, value: str) -> str:
        if not value:
            raise ValueError("key must be non-empty")
        return value

    def modifier_held(self, name: str) -> bool:
        return bool(getattr(self, name, False))


InputEvent = Annotated[
    OpenRequested | CloseRequested | DismissRequested | ClickedAway | QueryChanged | FilterToggled | KeyEvent,
    Field(discriminator="type"),
]
"""Any event the controller can dispatch."""
