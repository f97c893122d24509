"""Collect-or-throw and aggregation algorithms.

These functions hold no state of their own. Every one of them works on the
collector passed in, or on the current context's collector when none is
given, so assertion code can report failures without knowing whether it is
running in immediate or deferred mode.
"""

import logging
from collections.abc import Iterable

from .collector import ErrorCollector
from .config import CollectionMode
from .context import current_collector, get_active_config
from .errors import MultiAssertionError, failure_message
from .stacktraces import clean_stacktrace

logger = logging.getLogger(__name__)


def _resolve(collector: ErrorCollector | None) -> ErrorCollector:
    return collector if collector is not None else current_collector()


def _clean(error: BaseException) -> BaseException:
    config = get_active_config()
    if not config.stacktraces.clean:
        return error
    return clean_stacktrace(error, config.hidden_modules)


def get_and_replace(
    errors: Iterable[BaseException],
    collector: ErrorCollector | None = None,
) -> tuple[BaseException, ...]:
    """Swap the collected errors for ``errors`` and return the previous ones."""
    collector = _resolve(collector)
    old = collector.errors()
    collector.clear()
    for error in errors:
        collector.push_error(error)
    return old


def push_errors(
    errors: Iterable[BaseException],
    collector: ErrorCollector | None = None,
) -> None:
    collector = _resolve(collector)
    for error in errors:
        collector.push_error(error)


def collect_or_throw(
    error: BaseException | Iterable[BaseException],
    collector: ErrorCollector | None = None,
) -> None:
    """Report a failure, or several, to the current context.

    A single failure is raised unmodified in immediate mode and stored in
    deferred mode. An iterable of failures is stored in deferred mode; in
    immediate mode it is raised as one error together with anything
    collected earlier, leaving the collector empty.
    """
    __tracebackhide__ = True
    collector = _resolve(collector)

    if isinstance(error, BaseException):
        if collector.get_collection_mode() == CollectionMode.DEFERRED:
            collector.push_error(error)
            return
        raise error

    failures = tuple(error)
    if collector.get_collection_mode() == CollectionMode.DEFERRED:
        push_errors(failures, collector)
        return

    # Supplied failures join the aggregate directly; a noop collector stores nothing.
    aggregate = _aggregate(get_and_replace((), collector) + failures)
    if aggregate is not None:
        raise aggregate


def _aggregate(failures: tuple[BaseException, ...]) -> AssertionError | None:
    if not failures:
        return None

    if len(failures) == 1:
        error = AssertionError(failure_message(failures[0]))
        error.__cause__ = failures[0]
    else:
        error = MultiAssertionError(failures, get_active_config().hidden_modules)

    logger.debug(f"Aggregated {len(failures)} collected failure(s) into {type(error).__name__}")
    return _clean(error)


def collective_error(collector: ErrorCollector | None = None) -> AssertionError | None:
    """Drain the collected errors into a single error.

    The collected failures themselves are left untouched; only the newly
    created error is cleaned.

    Returns:
        None when nothing was collected, a plain AssertionError carrying the
        message of a single failure, or a MultiAssertionError for two or more
    """
    collector = _resolve(collector)
    failures = collector.errors()
    collector.clear()
    return _aggregate(failures)


reduce_to_single_error = collective_error


def throw_collected_errors(collector: ErrorCollector | None = None) -> None:
    """Raise everything collected so far as a single error, if anything."""
    __tracebackhide__ = True
    error = collective_error(collector)
    if error is not None:
        raise error


throw_aggregate = throw_collected_errors


def clue_context_as_string(collector: ErrorCollector | None = None) -> str:
    return _resolve(collector).render_clue_context()


def failure(
    message: str,
    cause: BaseException | None = None,
    collector: ErrorCollector | None = None,
) -> AssertionError:
    """Create an AssertionError prefixed with the current clue context.

    Args:
        message: Failure message produced by the assertion
        cause: Optional underlying error, chained as ``__cause__``
        collector: Collector whose clues are rendered

    Returns:
        A new AssertionError, not raised
    """
    error = AssertionError(clue_context_as_string(collector) + message)
    if cause is not None:
        error.__cause__ = cause
    return error
