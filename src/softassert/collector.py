"""Per-context error accumulators.

An ``ErrorCollector`` owns the collection mode, the ordered failures and the
clue stack of one execution context. Two variants exist and are chosen when
the collector is created, see ``create_error_collector``.
"""

import logging
from abc import ABC, abstractmethod

from .clues import Clue, ClueStack
from .config import CollectionMode, CollectorKind

logger = logging.getLogger(__name__)


class ErrorCollector(ABC):
    """Interface shared by all collector variants."""

    @abstractmethod
    def get_collection_mode(self) -> CollectionMode:
        pass

    @abstractmethod
    def set_collection_mode(self, mode: CollectionMode) -> None:
        pass

    @abstractmethod
    def errors(self) -> tuple[BaseException, ...]:
        """Return the errors accumulated in the current context."""
        pass

    @abstractmethod
    def push_error(self, error: BaseException) -> None:
        """Add the given error to the current context."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all errors from the current context."""
        pass

    @abstractmethod
    def push_clue(self, clue: Clue) -> None:
        pass

    @abstractmethod
    def pop_clue(self) -> None:
        pass

    @abstractmethod
    def clue_context(self) -> tuple[Clue, ...]:
        """Return every clue nested to this point, outermost first."""
        pass

    @abstractmethod
    def render_clue_context(self) -> str:
        """Evaluate the clue context, outer clues first, one per line."""
        pass


class NoopErrorCollector(ErrorCollector):
    """Collector for contexts without isolation: always immediate, stores nothing."""

    def get_collection_mode(self) -> CollectionMode:
        return CollectionMode.IMMEDIATE

    def set_collection_mode(self, mode: CollectionMode) -> None:
        pass

    def errors(self) -> tuple[BaseException, ...]:
        return ()

    def push_error(self, error: BaseException) -> None:
        pass

    def clear(self) -> None:
        pass

    def push_clue(self, clue: Clue) -> None:
        pass

    def pop_clue(self) -> None:
        pass

    def clue_context(self) -> tuple[Clue, ...]:
        return ()

    def render_clue_context(self) -> str:
        return ""


class BasicErrorCollector(ErrorCollector):
    """Stateful collector holding mode, failures and clues for one context."""

    def __init__(self, mode: CollectionMode = CollectionMode.IMMEDIATE):
        self._mode = CollectionMode(mode)
        self._failures: list[BaseException] = []
        self._clues = ClueStack()

    def get_collection_mode(self) -> CollectionMode:
        return self._mode

    def set_collection_mode(self, mode: CollectionMode) -> None:
        mode = CollectionMode(mode)
        if mode != self._mode:
            logger.debug(f"Collection mode changed: {self._mode.value} -> {mode.value}")
        self._mode = mode

    def errors(self) -> tuple[BaseException, ...]:
        return tuple(self._failures)

    def push_error(self, error: BaseException) -> None:
        self._failures.append(error)
        logger.debug(f"Collected {type(error).__name__} ({len(self._failures)} pending)")

    def clear(self) -> None:
        self._failures.clear()

    def push_clue(self, clue: Clue) -> None:
        self._clues.push(clue)

    def pop_clue(self) -> None:
        self._clues.pop()

    def clue_context(self) -> tuple[Clue, ...]:
        return self._clues.context()

    def render_clue_context(self) -> str:
        return self._clues.render()

    def __repr__(self) -> str:
        return (
            f"BasicErrorCollector(mode={self._mode.value}, "
            f"errors={len(self._failures)}, clues={len(self._clues)})"
        )


def create_error_collector(
    kind: CollectorKind = CollectorKind.BASIC,
    mode: CollectionMode = CollectionMode.IMMEDIATE,
) -> ErrorCollector:
    """Create an error collector for a new execution context.

    Args:
        kind: Collector variant
        mode: Initial collection mode (ignored by the noop variant)

    Returns:
        ErrorCollector instance
    """
    if CollectorKind(kind) == CollectorKind.NOOP:
        return NoopErrorCollector()
    return BasicErrorCollector(mode)
