"""Scoped helpers built on the collection protocol."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .collector import ErrorCollector
from .config import CollectionMode
from .context import current_collector
from .errors import failure_message
from .protocol import collective_error, get_and_replace

logger = logging.getLogger(__name__)


@contextmanager
def with_clue(
    clue: str | Callable[[], str],
    collector: ErrorCollector | None = None,
) -> Iterator[None]:
    """Add a clue to failures created inside the block.

    Args:
        clue: Message, or a callable producing it when a failure is rendered
        collector: Collector to push onto (default: current context)
    """
    collector = collector if collector is not None else current_collector()
    producer = clue if callable(clue) else (lambda: clue)
    collector.push_clue(producer)
    try:
        yield
    finally:
        collector.pop_clue()


@contextmanager
def assert_softly(collector: ErrorCollector | None = None) -> Iterator[ErrorCollector]:
    """Defer every failure reported inside the block and raise them together.

    Failures collected before entering are set aside and restored on exit,
    as is the previous collection mode. Nested blocks join the outer one.

    Yields:
        The collector in use
    """
    __tracebackhide__ = True
    collector = collector if collector is not None else current_collector()

    if collector.get_collection_mode() == CollectionMode.DEFERRED:
        yield collector
        return

    outer_mode = collector.get_collection_mode()
    collector.set_collection_mode(CollectionMode.DEFERRED)
    if collector.get_collection_mode() != CollectionMode.DEFERRED:
        # Collector cannot defer: failures raise where they happen.
        logger.debug(f"{type(collector).__name__} cannot defer failures, running block unchanged")
        yield collector
        return

    outer_errors = get_and_replace((), collector)

    try:
        yield collector
    except AssertionError as e:
        collector.push_error(e)
    except Exception as e:
        pending = collector.errors()
        for index, error in enumerate(pending, start=1):
            e.add_note(f"Pending soft assertion {index}/{len(pending)}: {failure_message(error)}")
        if pending:
            logger.debug(f"{type(e).__name__} escaped a soft block with {len(pending)} pending failure(s)")
        collector.clear()
        raise
    finally:
        collector.set_collection_mode(outer_mode)
        aggregate = collective_error(collector)
        get_and_replace(outer_errors, collector)

    if aggregate is not None:
        raise aggregate
