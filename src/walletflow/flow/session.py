"""
Editing session: the mutable state behind one flow editor.

The compiler only ever sees snapshots taken from a session, so edits made
after a snapshot never leak into a compiled program.
"""

import copy
import itertools
import logging
import time
from typing import List, Dict, Optional, Any

from ..errors import InsufficientFlowError, NodeNotFoundError
from .defaults import default_data
from .models import Flow, FlowNode, FlowEdge, Network, DEFAULT_NETWORK, DEFAULT_FLOW_VERSION

logger = logging.getLogger(__name__)


class FlowSession:
    """
    Session-scoped flow editing state.

    Mirrors what the visual editor does: nodes are created with default data,
    connecting into a target replaces that target's existing incoming edge, and
    deleting a node drops every edge touching it.
    """

    def __init__(self, network: Any = DEFAULT_NETWORK, version: str = DEFAULT_FLOW_VERSION):
        self.network = network.value if isinstance(network, Network) else network
        self.version = version
        self.nodes: List[FlowNode] = []
        self.edges: List[FlowEdge] = []
        self._counter = itertools.count(1)

    def _new_node_id(self, node_type: str) -> str:
        existing = {n.id for n in self.nodes}
        stamp = int(time.time() * 1000)
        while True:
            candidate = f"{node_type}-{stamp}-{next(self._counter)}"
            if candidate not in existing:
                return candidate

    def _require(self, node_id: str) -> FlowNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise NodeNotFoundError(node_id)

    def add_node(
        self,
        node_type: Any,
        position: Optional[Dict[str, float]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> FlowNode:
        """Create a node with default data for its type."""
        type_str = getattr(node_type, "value", node_type)
        payload = default_data(type_str, self.network)
        if data:
            payload.update(data)

        node = FlowNode(
            id=self._new_node_id(type_str),
            type=type_str,
            position=dict(position) if position else {"x": 0, "y": 0},
            data=payload,
        )
        self.nodes.append(node)
        logger.debug("Added node %s", node.id)
        return node

    def update_node(self, node_id: str, data: Dict[str, Any]) -> FlowNode:
        """Shallow-merge new data into a node."""
        node = self._require(node_id)
        node.data = {**node.data, **data}
        return node

    def move_node(self, node_id: str, position: Dict[str, float]) -> FlowNode:
        node = self._require(node_id)
        node.position = dict(position)
        return node

    def delete_node(self, node_id: str) -> None:
        """Remove a node and every edge attached to it."""
        self._require(node_id)
        self.nodes = [n for n in self.nodes if n.id != node_id]
        self.edges = [e for e in self.edges if e.source != node_id and e.target != node_id]

    def connect(self, source: str, target: str) -> FlowEdge:
        """Connect two nodes; a target keeps at most one incoming edge."""
        self._require(source)
        self._require(target)
        edge = FlowEdge(id=f"{source}-{target}", source=source, target=target)
        self.edges = [e for e in self.edges if e.target != target]
        self.edges.append(edge)
        return edge

    def disconnect(self, edge_id: str) -> bool:
        before = len(self.edges)
        self.edges = [e for e in self.edges if e.id != edge_id]
        return len(self.edges) != before

    def clear(self) -> None:
        self.nodes = []
        self.edges = []

    def load(self, flow: Flow) -> None:
        """Replace the session contents with a copy of a flow."""
        self.network = flow.network
        self.version = flow.version
        self.nodes = copy.deepcopy(flow.nodes)
        self.edges = copy.deepcopy(flow.edges)

    def snapshot(self, version: Optional[str] = None) -> Flow:
        """Independent copy of the current state with fresh metadata."""
        flow = Flow(
            version=version or self.version,
            network=self.network,
            nodes=copy.deepcopy(self.nodes),
            edges=copy.deepcopy(self.edges),
        )
        flow.refresh_metadata()
        return flow

    def compile(self, strict: bool = False):
        """
        Snapshot and compile the current flow.

        Raises:
            InsufficientFlowError: if the flow has one node or fewer
        """
        # Lazy import to avoid circular dependency
        from ..compiler.assembler import compile_flow

        if len(self.nodes) <= 1:
            raise InsufficientFlowError("Please add more nodes to create a complete flow")
        return compile_flow(self.snapshot(), strict=strict)
