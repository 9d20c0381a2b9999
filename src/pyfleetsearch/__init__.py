"""pyfleetsearch - In-memory search overlay over a people and vehicle directory."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfleetsearch")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfleetsearch.config import KeyBindings, SearchConfig
from pyfleetsearch.directory import DirectoryStore, load_directory, sample_directory
from pyfleetsearch.engine import HighlightSpan, ResultGroup, ResultSet, SearchHit, highlight, search
from pyfleetsearch.exceptions import (
    DirectoryError,
    DirectoryLoadError,
    DuplicateEntityError,
    FleetSearchConfigError,
    FleetSearchError,
)
from pyfleetsearch.models import Entity, EntityKind, Person, Vehicle, VehicleStatus
from pyfleetsearch.state.controller import ModalSnapshot, ModalState, SearchModalController
from pyfleetsearch.state.events import (
    ClickedAway,
    CloseRequested,
    DismissRequested,
    FilterToggled,
    InputEvent,
    KeyEvent,
    OpenRequested,
    QueryChanged,
)
from pyfleetsearch.state.keyboard import KeyboardHub, KeySubscription

__all__ = [
    "__version__",
    "ClickedAway",
    "CloseRequested",
    "DirectoryError",
    "DirectoryLoadError",
    "DirectoryStore",
    "DismissRequested",
    "DuplicateEntityError",
    "Entity",
    "EntityKind",
    "FilterToggled",
    "FleetSearchConfigError",
    "FleetSearchError",
    "HighlightSpan",
    "InputEvent",
    "KeyBindings",
    "KeyEvent",
    "KeySubscription",
    "KeyboardHub",
    "ModalSnapshot",
    "ModalState",
    "OpenRequested",
    "Person",
    "QueryChanged",
    "ResultGroup",
    "ResultSet",
    "SearchConfig",
    "SearchHit",
    "SearchModalController",
    "Vehicle",
    "VehicleStatus",
    "highlight",
    "load_directory",
    "sample_directory",
    "search",
]
