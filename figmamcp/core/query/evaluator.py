"""Query evaluation with a hard wall-clock budget.

Each evaluation runs in its own short-lived worker process so a runaway
query can be terminated without cooperation from caller code. The document
is serialized to JSON once in the parent and decoded by the worker, which
then builds the node index, executes the restricted program, strips geometry
payloads, and sends back JSON-compatible data plus captured log lines.
"""

from __future__ import annotations

import json
import logging
import math
import multiprocessing
import time
from dataclasses import dataclass, field
from multiprocessing.connection import Connection
from typing import Any

from figmamcp.core.query.index import NodeIndex
from figmamcp.core.query.sandbox import (
    ENTRYPOINT,
    QueryMode,
    build_restricted_globals,
    compile_query,
    detect_mode,
)
from figmamcp.core.query.strip import strip_heavy_data

logger = logging.getLogger(__name__)

DEFAULT_QUERY_TIMEOUT = 5.0
DEFAULT_START_METHOD = "spawn"
_REAP_GRACE_SECONDS = 1.0


class QueryError(Exception):
    """Base class for query evaluation failures."""


class QueryExecutionError(QueryError):
    """Caller code failed to compile or raised while running."""


class QueryTimeoutError(QueryError):
    """Caller code exceeded the execution budget."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Query exceeded the {timeout:g}s execution budget")
        self.timeout = timeout


@dataclass
class QueryOutcome:
    """Stripped, JSON-compatible result of one query."""

    result: Any
    mode: QueryMode
    logs: list[str] = field(default_factory=list)


def _replace_non_finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [_replace_non_finite(item) for item in value]
    if isinstance(value, dict):
        return {key: _replace_non_finite(item) for key, item in value.items()}
    return value


def to_jsonable(value: Any) -> Any:
    """Normalize a stripped result to plain JSON data.

    NaN and infinities become ``None`` so the result is strict JSON.
    """
    try:
        return _replace_non_finite(json.loads(json.dumps(value, default=str)))
    except (TypeError, ValueError) as exc:
        raise QueryExecutionError(f"Query result is not JSON serializable: {exc}") from exc


def execute_query(document: Any, query: str, logs: list[str] | None = None) -> QueryOutcome:
    """Run a query in the current process, without a time budget.

    ``QueryEvaluator`` calls this inside its worker process.
    """
    if logs is None:
        logs = []
    if not query.strip():
        raise QueryExecutionError("Query is empty")

    index = NodeIndex(document)
    mode = detect_mode(query)
    try:
        code = compile_query(query, mode)
        namespace = build_restricted_globals(index.bindings(), logs)
        exec(code, namespace)
        result = namespace[ENTRYPOINT]()
    except Exception as exc:
        raise QueryExecutionError(str(exc) or type(exc).__name__) from exc

    return QueryOutcome(result=to_jsonable(strip_heavy_data(result)), mode=mode, logs=logs)


def encode_document(document: Any) -> bytes:
    """Serialize a document once for transfer to a worker process."""
    return json.dumps(document, separators=(",", ":"), default=str).encode("utf-8")


def _worker(conn: Connection, payload: bytes, query: str) -> None:
    logs: list[str] = []
    try:
        outcome = execute_query(json.loads(payload), query, logs)
    except QueryError as exc:
        conn.send({"ok": False, "error": str(exc), "logs": logs})
    else:
        conn.send(
            {
                "ok": True,
                "result": outcome.result,
                "mode": outcome.mode.value,
                "logs": outcome.logs,
            }
        )
    finally:
        conn.close()


class QueryEvaluator:
    """Evaluate query programs against a document under a time budget."""

    def __init__(
        self,
        timeout: float = DEFAULT_QUERY_TIMEOUT,
        start_method: str | None = DEFAULT_START_METHOD,
    ) -> None:
        if timeout <= 0:
            raise ValueError("Query timeout must be positive")
        self.timeout = timeout
        self.start_method = start_method

    def evaluate(self, document: Any, query: str) -> QueryOutcome:
        """Run ``query`` against ``document``.

        Raises:
            QueryTimeoutError: the worker did not answer within the budget.
            QueryExecutionError: caller code failed, or the worker died.
        """
        payload = encode_document(document)
        logger.debug("Sending %d-byte document to query worker", len(payload))
        ctx = multiprocessing.get_context(self.start_method)
        reader, writer = ctx.Pipe(duplex=False)
        process = ctx.Process(
            target=_worker,
            args=(writer, payload, query),
            name="figma-query",
            daemon=True,
        )
        # The budget covers worker startup and document transfer too.
        deadline = time.monotonic() + self.timeout
        process.start()
        writer.close()

        try:
            if not reader.poll(max(0.0, deadline - time.monotonic())):
                logger.warning("Query timed out after %ss; terminating worker", self.timeout)
                process.terminate()
                raise QueryTimeoutError(self.timeout)
            try:
                message = reader.recv()
            except EOFError as exc:
                raise QueryExecutionError(
                    f"Query worker exited unexpectedly (exit code {process.exitcode})"
                ) from exc
        finally:
            reader.close()
            process.join(_REAP_GRACE_SECONDS)
            if process.is_alive():
                process.kill()
                process.join()

        for line in message.get("logs", []):
            logger.info("[Query] %s", line)

        if not message["ok"]:
            raise QueryExecutionError(message["error"])
        return QueryOutcome(
            result=message["result"],
            mode=QueryMode(message["mode"]),
            logs=list(message["logs"]),
        )
