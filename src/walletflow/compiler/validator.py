"""
Flow Validator.

Checks the structural well-formedness of a candidate flow before compilation.
Validation never stops at the first problem: every node and every edge is
visited once and each violation becomes one human-readable error string.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple, Union

from ..errors import StructuralError
from ..flow.models import Flow, Network

logger = logging.getLogger(__name__)


INVALID_JSON = "Invalid JSON format"
INVALID_STRUCTURE = "Invalid program structure"

RawFlow = Union[str, bytes, Dict[str, Any], Flow]


@dataclass
class ValidationResult:
    """Verdict of a validation pass."""
    ok: bool
    errors: List[str] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise StructuralError if validation failed."""
        if not self.ok:
            raise StructuralError(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.ok, "errors": list(self.errors)}


def parse_raw_flow(raw: RawFlow) -> Tuple[Optional[Dict[str, Any]], List[str]]:
    """
    Decode a candidate flow into a plain mapping.

    Returns:
        (mapping, errors); mapping is None when the input cannot be used at all
    """
    if isinstance(raw, Flow):
        return raw.to_dict(), []

    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (ValueError, TypeError):
            return None, [INVALID_JSON]

    if not isinstance(raw, dict):
        return None, [INVALID_STRUCTURE]

    return raw, []


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _validate_nodes(nodes: List[Any], errors: List[str]) -> set:
    seen = set()
    for index, node in enumerate(nodes):
        if not isinstance(node, dict):
            errors.append(f"Node {index}: Not an object")
            continue

        node_id = node.get("id")
        if not _is_present(node_id):
            errors.append(f"Node {index}: Missing id")
        elif node_id in seen:
            errors.append(f"Node {index}: Duplicate id {node_id}")
        else:
            seen.add(node_id)

        if not _is_present(node.get("type")):
            errors.append(f"Node {index}: Missing type")
        if not isinstance(node.get("data"), dict):
            errors.append(f"Node {index}: Missing data")
    return seen


def _validate_edges(edges: List[Any], node_ids: Optional[set], errors: List[str]) -> None:
    for index, edge in enumerate(edges):
        if not isinstance(edge, dict):
            errors.append(f"Edge {index}: Not an object")
            continue

        source = edge.get("source")
        target = edge.get("target")
        if not _is_present(source):
            errors.append(f"Edge {index}: Missing source")
        elif node_ids is not None and source not in node_ids:
            errors.append(f"Edge {index}: Unknown source node {source}")

        if not _is_present(target):
            errors.append(f"Edge {index}: Missing target")
        elif node_ids is not None and target not in node_ids:
            errors.append(f"Edge {index}: Unknown target node {target}")


def validate_flow(raw: RawFlow, strict: bool = False) -> ValidationResult:
    """
    Validate a candidate flow.

    Args:
        raw: JSON text, a decoded mapping, or a Flow
        strict: Also check version/network, every node's id/type/data, and
            every edge's endpoints (including dangling references)

    Returns:
        ValidationResult; never raises for data-shape problems
    """
    parsed, errors = parse_raw_flow(raw)
    if parsed is None:
        logger.debug("Flow rejected before field checks: %s", errors)
        return ValidationResult(ok=False, errors=errors)

    nodes = parsed.get("nodes")
    nodes_ok = isinstance(nodes, list)

    if not strict:
        if not nodes_ok:
            errors.append(INVALID_STRUCTURE)
        return ValidationResult(ok=not errors, errors=errors)

    if not parsed.get("version"):
        errors.append("Missing version field")
    network = parsed.get("network")
    if not network:
        errors.append("Missing network field")
    elif Network.parse(network) is None:
        errors.append(f"Invalid network: {network}")

    if not nodes_ok:
        errors.append(INVALID_STRUCTURE)

    edges = parsed.get("edges")
    edges_ok = isinstance(edges, list)
    if not edges_ok:
        errors.append("Missing or invalid edges array")

    node_ids = _validate_nodes(nodes, errors) if nodes_ok else None
    if edges_ok:
        _validate_edges(edges, node_ids, errors)

    if errors:
        logger.debug("Flow failed strict validation with %d error(s)", len(errors))
    return ValidationResult(ok=not errors, errors=errors)
