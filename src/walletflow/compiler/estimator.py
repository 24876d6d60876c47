"""Gas and complexity estimation."""

from enum import Enum
from functools import lru_cache
from typing import Iterable, Tuple

from .compiler import NodeLike, as_node
from .opcodes import node_gas


class Complexity(Enum):
    """Coarse size bucket for a flow."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


MEDIUM_THRESHOLD = 5
HIGH_THRESHOLD = 15


@lru_cache(maxsize=256)
def _gas_for_types(types: Tuple[str, ...]) -> int:
    return sum(node_gas(t) for t in types)


def estimate_gas(nodes: Iterable[NodeLike]) -> int:
    """Sum of per-type fixed costs over all nodes."""
    return _gas_for_types(tuple(as_node(n).type for n in nodes))


def complexity_score(node_count: int, edge_count: int) -> float:
    return node_count + 0.5 * edge_count


def estimate_complexity(node_count: int, edge_count: int) -> Complexity:
    """
    Bucket a flow by size.

    score < 5 is low, 5 <= score < 15 is medium, score >= 15 is high.
    """
    score = complexity_score(node_count, edge_count)
    if score < MEDIUM_THRESHOLD:
        return Complexity.LOW
    if score < HIGH_THRESHOLD:
        return Complexity.MEDIUM
    return Complexity.HIGH
