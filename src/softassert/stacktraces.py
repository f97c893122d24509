"""Stack trace cleaning for errors created by the collection engine."""

import logging
from collections.abc import Iterable
from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_HIDDEN_MODULES = ("softassert",)


def _is_hidden(module_name: str, hidden_modules: tuple[str, ...]) -> bool:
    return any(
        module_name == prefix or module_name.startswith(prefix + ".")
        for prefix in hidden_modules
    )


def clean_stacktrace(
    error: BaseException,
    hidden_modules: Iterable[str] | None = None,
) -> BaseException:
    """Strip engine frames from an error's traceback.

    The traceback chain is rebuilt without frames whose module belongs to
    one of ``hidden_modules``. The error is modified in place and returned.

    Args:
        error: Error to clean
        hidden_modules: Module prefixes to strip (default: softassert itself)

    Returns:
        The same error instance
    """
    prefixes = tuple(hidden_modules) if hidden_modules is not None else DEFAULT_HIDDEN_MODULES

    kept = []
    tb = error.__traceback__
    while tb is not None:
        module_name = tb.tb_frame.f_globals.get("__name__", "")
        if not _is_hidden(module_name, prefixes):
            kept.append(tb)
        tb = tb.tb_next

    cleaned = None
    for entry in reversed(kept):
        cleaned = TracebackType(cleaned, entry.tb_frame, entry.tb_lasti, entry.tb_lineno)

    if error.__traceback__ is not None:
        logger.debug(f"Cleaned traceback of {type(error).__name__}, {len(kept)} frames kept")
    return error.with_traceback(cleaned)


def throwable_location(
    error: BaseException,
    hidden_modules: Iterable[str] | None = None,
) -> str | None:
    """Return ``file:line`` of the innermost frame outside ``hidden_modules``."""
    prefixes = tuple(hidden_modules) if hidden_modules is not None else DEFAULT_HIDDEN_MODULES

    location = None
    tb = error.__traceback__
    while tb is not None:
        if not _is_hidden(tb.tb_frame.f_globals.get("__name__", ""), prefixes):
            location = f"{tb.tb_frame.f_code.co_filename}:{tb.tb_lineno}"
        tb = tb.tb_next
    return location
