"""Sandboxed query evaluation over Figma document trees."""

from figmamcp.core.query.evaluator import (
    DEFAULT_QUERY_TIMEOUT,
    QueryError,
    QueryEvaluator,
    QueryExecutionError,
    QueryOutcome,
    QueryTimeoutError,
    execute_query,
)
from figmamcp.core.query.index import NodeIndex, build_node_index
from figmamcp.core.query.sandbox import QueryMode, detect_mode
from figmamcp.core.query.strip import (
    GEOMETRY_PLACEHOLDER,
    MAX_DEPTH_PLACEHOLDER,
    strip_heavy_data,
)

__all__ = [
    "DEFAULT_QUERY_TIMEOUT",
    "GEOMETRY_PLACEHOLDER",
    "MAX_DEPTH_PLACEHOLDER",
    "NodeIndex",
    "QueryError",
    "QueryEvaluator",
    "QueryExecutionError",
    "QueryMode",
    "QueryOutcome",
    "QueryTimeoutError",
    "build_node_index",
    "detect_mode",
    "execute_query",
    "strip_heavy_data",
]
