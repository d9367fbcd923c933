import weakref
from typing import Any, List, Protocol

from pclocator.core.logging import get_logger

logger = get_logger(__name__)

class History(Protocol):
    """Owner-keyed sink for free-text notes explaining where a result came from."""

    def add(self, owner: Any, note: str) -> None:
        ...

class LoggingHistory:
    """
    Default history collaborator.
    Keeps notes per owner object and mirrors them to the debug log. Owners
    are held weakly, so notes disappear together with their owner.
    """
    def __init__(self):
        self._notes: "weakref.WeakKeyDictionary[Any, List[str]]" = weakref.WeakKeyDictionary()

    def add(self, owner: Any, note: str) -> None:
        self._notes.setdefault(owner, []).append(note)
        logger.debug(f"{type(owner).__name__}@{id(owner):x}: {note}")

    def notes(self, owner: Any) -> List[str]:
        return list(self._notes.get(owner, []))

    def __len__(self) -> int:
        return len(self._notes)
