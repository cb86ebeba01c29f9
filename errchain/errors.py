"""Chained error values shared by the DAO and service layers.

Dao 层并不知道 "no rows" 对于业务意味着什么，所以只负责附加上下文（如 query）后上抛；
是否可以忽略由业务层用 error_is(err, NO_ROWS) 判断后决定。

Never compare a caught error against NO_ROWS directly: once any layer has
wrapped it the top-level object is a ChainedError, so always walk the chain.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Protocol, runtime_checkable

# Guard for corrupted chains (e.g. a hand-set __cause__ loop); chains built
# through this module are always finite.
MAX_CHAIN_DEPTH = 1000


@runtime_checkable
class Unwrapper(Protocol):
    """Anything that renders as a string and exposes the error it wraps."""

    @property
    def cause(self) -> BaseException: ...

    def __str__(self) -> str: ...


class ChainCycleError(RuntimeError):
    """Raised when a chain is deeper than MAX_CHAIN_DEPTH (almost certainly a cycle)."""


class NoRowsError(LookupError):
    """Leaf error: a query matched no rows. Use the NO_ROWS singleton."""


class InvalidQueryError(ValueError):
    """Leaf error: the DAO refused a malformed query."""

    def __init__(self, message: str = "dao: invalid query"):
        super().__init__(message)


# 相当于 database/sql 的 ErrNoRows；只读常量，不要直接 raise，需要时用 QueryError 包一层
NO_ROWS = NoRowsError("no rows in result set")


class ChainedError(Exception):
    """An error carrying contextual metadata plus the error it wraps.

    ``context`` and ``cause`` are fixed at construction. ``str()`` renders
    one level only: ``err: <cause>, context: <context>``.
    """

    context_label = "context"

    def __init__(self, context: Any, cause: BaseException):
        if cause is None:
            raise ValueError("cause is required")
        if context is None or (isinstance(context, str) and not context.strip()):
            raise ValueError("context must be non-empty")
        super().__init__(context, cause)
        self._context = context
        self._cause = cause
        # keep Python tracebacks aware of the chain too
        self.__cause__ = cause

    @property
    def context(self) -> Any:
        return self._context

    @property
    def cause(self) -> BaseException:
        return self._cause

    def __str__(self) -> str:
        return f"err: {self._cause}, {self.context_label}: {self._context}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(context={self._context!r}, cause={self._cause!r})"


class QueryError(ChainedError):
    """DAO-level annotation: the query that produced ``cause``."""

    context_label = "query"

    @property
    def query(self) -> str:
        return str(self.context)


def new_chained_error(context: Any, cause: BaseException) -> ChainedError:
    return ChainedError(context, cause)


def wrap(err: BaseException, extra_context: Any) -> ChainedError:
    """Add one more layer of context on top of ``err`` (用于多层上抛时定位报错地点)."""
    return ChainedError(extra_context, err)


def cause_of(err: Optional[BaseException]) -> Optional[BaseException]:
    """Immediate cause of ``err``, or None for a leaf.

    ChainedError and any other Unwrapper expose ``cause``; for the rest the
    explicit ``raise ... from ...`` cause is followed, implicit ``__context__``
    is not.
    """
    if err is None:
        return None
    if isinstance(err, Unwrapper):
        return err.cause
    return getattr(err, "__cause__", None)


def describe(err: BaseException) -> str:
    return str(err)


def iter_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """Yield ``err`` and every cause below it, top to bottom."""
    depth = 0
    cur = err
    while cur is not None:
        if depth >= MAX_CHAIN_DEPTH:
            raise ChainCycleError(f"error chain deeper than {MAX_CHAIN_DEPTH}")
        yield cur
        cur = cause_of(cur)
        depth += 1


def _matches(node: BaseException, target: Any) -> bool:
    if node is target:
        return True
    if isinstance(target, type):
        return isinstance(node, target)
    hook = getattr(node, "matches", None)
    if callable(hook) and hook(target):
        return True
    return node == target


def error_is(err: Optional[BaseException], target: Any) -> bool:
    """True if ``target`` appears anywhere in the chain starting at ``err``.

    ``target`` is normally a sentinel instance such as NO_ROWS (identity /
    equality, or the node's own ``matches(target)`` hook). An exception class
    is also accepted and matched with isinstance.
    """
    for node in iter_chain(err):
        if _matches(node, target):
            return True
    return False


def root_cause(err: BaseException) -> BaseException:
    last = err
    for node in iter_chain(err):
        last = node
    return last


def format_chain(err: BaseException) -> str:
    """Multi-line dump of the whole chain, one level per line."""
    lines: List[str] = []
    for depth, node in enumerate(iter_chain(err)):
        if isinstance(node, ChainedError):
            text = f"{node.context_label}: {node.context}"
        else:
            text = str(node)
        lines.append(f"{'  ' * depth}{type(node).__name__}: {text}")
    return "\n".join(lines)


def to_dict(err: BaseException) -> Dict[str, Any]:
    """JSON-safe view of the chain, for the operation log and HTTP responses."""
    chain = []
    for node in iter_chain(err):
        item: Dict[str, Any] = {"type": type(node).__name__, "message": str(node)}
        if isinstance(node, ChainedError):
            item[node.context_label] = str(node.context)
        chain.append(item)
    return {
        "message": str(err),
        "root": chain[-1]["type"] if chain else None,
        "chain": chain,
    }
