"""Resolution of the current execution context's collector.

A collector is bound together with its owner: the running asyncio task, or
the thread when no event loop is running. Tasks inherit a copy of their
creator's context, so a binding made by another owner is ignored and the
task gets a collector of its own on first use.
"""

import asyncio
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from .collector import ErrorCollector, create_error_collector
from .config import SoftAssertConfig, load_config

logger = logging.getLogger(__name__)

_current_collector: ContextVar[tuple[object, ErrorCollector] | None] = ContextVar(
    "softassert_collector", default=None
)

_active_config: SoftAssertConfig | None = None


def get_active_config() -> SoftAssertConfig:
    """Return the configuration in effect, loading it on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
        logger.debug(
            f"Loaded configuration: collector={_active_config.collection.collector.value}, "
            f"default mode={_active_config.collection.default_mode.value}"
        )
    return _active_config


def set_active_config(config: SoftAssertConfig | None) -> None:
    """Replace the configuration in effect. ``None`` reloads it on next use.

    Collectors that already exist keep the mode they were created with.
    """
    global _active_config
    _active_config = config


def new_collector() -> ErrorCollector:
    """Create a collector according to the active configuration."""
    config = get_active_config()
    return create_error_collector(
        config.collection.collector,
        config.collection.default_mode,
    )


def _current_owner() -> object:
    try:
        task = asyncio.current_task()
    except RuntimeError:  # no running event loop
        task = None
    return task if task is not None else threading.get_ident()


def current_collector() -> ErrorCollector:
    """Return the collector bound to the current owner, creating it if needed."""
    owner = _current_owner()
    binding = _current_collector.get()
    if binding is not None and binding[0] == owner:
        return binding[1]

    collector = new_collector()
    _current_collector.set((owner, collector))
    logger.debug(f"Created {type(collector).__name__} for {owner!r}")
    return collector


@contextmanager
def collector_scope(collector: ErrorCollector | None = None) -> Iterator[ErrorCollector]:
    """Bind a collector to the current owner for the duration of the block.

    Args:
        collector: Collector to bind (default: a new one from the active config)

    Yields:
        The bound collector
    """
    if collector is None:
        collector = new_collector()
    token = _current_collector.set((_current_owner(), collector))
    try:
        yield collector
    finally:
        _current_collector.reset(token)
