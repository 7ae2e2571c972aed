"""
Query executor: run one template against one handle with positional parameters.
Arity is checked before the handle is touched. Engine errors become ExecutionError.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, List, Sequence

from .core.errors import ExecutionError
from .queries import QueryTemplate
from .store.engine import Record, StoreHandle

logger = logging.getLogger(__name__)


def execute(handle: StoreHandle, template: QueryTemplate, parameters: Sequence[Any]) -> List[Record]:
    """
    Records in the order the engine yields them. An empty list is a valid result.
    Parameter values are bound, never formatted into the SQL text.
    """
    template.check_arity(parameters)
    try:
        records = handle.run_query(template.sql, list(parameters))
    except (sqlite3.Error, OverflowError, ValueError) as e:
        logger.warning("Query %s failed on %s: %s", template.name, handle.label, e)
        raise ExecutionError(f"Query '{template.name}' failed: {e}") from e
    logger.debug("Query %s%s -> %d record(s)", template.name, tuple(parameters), len(records))
    return records
