"""softassert - Assertion error aggregation for soft and hard assertions.

Decides, per execution context, whether a failed check raises immediately
or is deferred and reported together with the other failures of the same
test run.
"""

__version__ = "0.1.0"
__description__ = "Assertion error aggregation for soft and hard assertions"

from softassert.clues import Clue, ClueStack
from softassert.collector import (
    BasicErrorCollector,
    ErrorCollector,
    NoopErrorCollector,
    create_error_collector,
)
from softassert.config import CollectionMode, CollectorKind, SoftAssertConfig, load_config
from softassert.context import collector_scope, current_collector, get_active_config, set_active_config
from softassert.errors import EmptyClueStackError, MultiAssertionError, SoftAssertError
from softassert.protocol import (
    clue_context_as_string,
    collect_or_throw,
    collective_error,
    failure,
    get_and_replace,
    push_errors,
    reduce_to_single_error,
    throw_aggregate,
    throw_collected_errors,
)
from softassert.softly import assert_softly, with_clue
from softassert.stacktraces import clean_stacktrace

__all__ = [
    "__version__",
    "__description__",
    # Clues
    "Clue",
    "ClueStack",
    # Collectors
    "BasicErrorCollector",
    "CollectionMode",
    "CollectorKind",
    "ErrorCollector",
    "NoopErrorCollector",
    "create_error_collector",
    # Context
    "collector_scope",
    "current_collector",
    "get_active_config",
    "set_active_config",
    # Configuration
    "SoftAssertConfig",
    "load_config",
    # Errors
    "EmptyClueStackError",
    "MultiAssertionError",
    "SoftAssertError",
    # Protocol
    "clue_context_as_string",
    "collect_or_throw",
    "collective_error",
    "failure",
    "get_and_replace",
    "push_errors",
    "reduce_to_single_error",
    "throw_aggregate",
    "throw_collected_errors",
    # Helpers
    "assert_softly",
    "with_clue",
    "clean_stacktrace",
]
