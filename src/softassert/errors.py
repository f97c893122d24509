"""Error taxonomy for softassert.

Individual failures are whatever assertion code hands to the collector.
The types here are the ones the engine itself creates.
"""

from collections.abc import Iterable

from .stacktraces import throwable_location


def failure_message(error: BaseException) -> str:
    """Return the message a failure was created with.

    ``str()`` of some exceptions differs from their message, e.g. KeyError
    quotes it, so a single argument is used as is.
    """
    if len(error.args) == 1:
        return str(error.args[0])
    return str(error)


class SoftAssertError(Exception):
    """Base class for misuse of the collection engine."""
    pass


class EmptyClueStackError(SoftAssertError, IndexError):
    """Raised when a clue is popped without a matching push."""
    pass


class MultiAssertionError(AssertionError):
    """Two or more collected failures reported as one error."""

    def __init__(
        self,
        errors: Iterable[BaseException],
        hidden_modules: Iterable[str] | None = None,
    ):
        self.errors: tuple[BaseException, ...] = tuple(errors)
        super().__init__(self._create_message(self.errors, hidden_modules))

    @staticmethod
    def _create_message(
        errors: tuple[BaseException, ...],
        hidden_modules: Iterable[str] | None,
    ) -> str:
        hidden = tuple(hidden_modules) if hidden_modules is not None else None
        noun = "assertion" if len(errors) == 1 else f"{len(errors)} assertions"
        lines = [f"The following {noun} failed:"]
        for index, error in enumerate(errors, start=1):
            lines.append(f"{index}) {failure_message(error)}")
            location = throwable_location(error, hidden)
            if location:
                lines.append(f"   at {location}")
        return "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return len(self.errors)
