"""Clue stack: lazily evaluated diagnostic context for failures."""

import logging
from collections.abc import Callable

from .errors import EmptyClueStackError

logger = logging.getLogger(__name__)

Clue = Callable[[], str]


class ClueStack:
    """LIFO stack of clue producers.

    Producers are stored innermost first and only called by ``render``.
    ``context`` hands them back in push order, so rendered text reads
    outer context first and inner context last.
    """

    def __init__(self):
        self._clues: list[Clue] = []

    def push(self, clue: Clue) -> None:
        self._clues.insert(0, clue)

    def pop(self) -> Clue:
        if not self._clues:
            logger.debug("Attempted to pop a clue from an empty stack")
            raise EmptyClueStackError("pop_clue called with no clue pushed")
        return self._clues.pop(0)

    def context(self) -> tuple[Clue, ...]:
        """Return all clues, outermost first."""
        return tuple(reversed(self._clues))

    def render(self) -> str:
        """Evaluate every clue and join them one per line.

        Returns:
            Newline separated clues with a trailing newline, or an empty
            string when no clue is pushed
        """
        clues = self.context()
        if not clues:
            return ""
        return "\n".join(clue() for clue in clues) + "\n"

    def __len__(self) -> int:
        return len(self._clues)

    def __bool__(self) -> bool:
        return bool(self._clues)
