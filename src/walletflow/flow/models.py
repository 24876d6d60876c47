"""
Data models for wallet flows.

A flow is the user-authored graph of typed nodes and directed edges that the
compiler turns into an instruction list. Node order is significant: it decides
instruction emission order and step indices. Edge order is not.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Dict, Optional, Any, Iterable
from enum import Enum


class NodeType(Enum):
    """Closed set of node types the editor can place."""
    WALLET = "wallet"
    FUNDING = "funding"
    TRANSACTION = "transaction"
    TOKEN = "token"
    INPUT_VALUE = "inputValue"
    CONDITIONAL_TIMER = "conditionalTimer"
    ORACLE_CHECK = "oracleCheck"
    OUTPUT = "output"
    CONDITIONAL = "conditional"
    COPY_TRADE = "copyTrade"
    PROFIT_LOSS = "profitLoss"
    ARBITRAGE = "arbitrage"
    MEME_TRADE = "memeTrade"

    @classmethod
    def parse(cls, value: Any) -> Optional["NodeType"]:
        """Return the member for a wire string, or None for unknown types."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Network(Enum):
    """Cluster a flow targets."""
    DEVNET = "devnet"
    TESTNET = "testnet"
    MAINNET = "mainnet"

    @classmethod
    def parse(cls, value: Any) -> Optional["Network"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_NETWORK = Network.DEVNET.value
DEFAULT_FLOW_VERSION = "2.0.0"

# Types offered by the wallet-flow editor (as opposed to the trading playground)
WALLET_FLOW_TYPES = {
    NodeType.WALLET.value,
    NodeType.FUNDING.value,
    NodeType.TRANSACTION.value,
    NodeType.INPUT_VALUE.value,
    NodeType.CONDITIONAL_TIMER.value,
    NodeType.ORACLE_CHECK.value,
    NodeType.OUTPUT.value,
}


def utc_now_iso() -> str:
    """ISO-8601 timestamp in UTC with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass
class FlowNode:
    """A typed unit of behavior in a flow."""
    id: str
    type: str  # Raw type string; unknown types are kept as-is
    position: Optional[Dict[str, Any]] = None  # Presentation only
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def node_type(self) -> Optional[NodeType]:
        return NodeType.parse(self.type)

    @property
    def label(self) -> str:
        return str(self.data.get("label") or self.type or "Node")

    @classmethod
    def from_dict(cls, raw: Any) -> "FlowNode":
        """Build a node from its wire form, tolerating missing fields."""
        if not isinstance(raw, dict):
            raw = {}
        data = raw.get("data")
        return cls(
            id=str(raw.get("id") or ""),
            type=str(raw.get("type") or ""),
            position=raw.get("position"),
            # Kept by reference: compiled instructions point at the same mapping
            data=data if isinstance(data, dict) else {},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "type": self.type}
        if self.position is not None:
            out["position"] = self.position
        out["data"] = self.data
        return out


@dataclass
class FlowEdge:
    """A directed connection between two nodes."""
    id: str
    source: str
    target: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "FlowEdge":
        if not isinstance(raw, dict):
            raw = {}
        source = str(raw.get("source") or "")
        target = str(raw.get("target") or "")
        return cls(
            id=str(raw.get("id") or f"{source}-{target}"),
            source=source,
            target=target,
            source_handle=raw.get("sourceHandle"),
            target_handle=raw.get("targetHandle"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "source": self.source, "target": self.target}
        if self.source_handle is not None:
            out["sourceHandle"] = self.source_handle
        if self.target_handle is not None:
            out["targetHandle"] = self.target_handle
        return out


def detect_flow_type(nodes: Iterable[FlowNode]) -> str:
    """Heuristic tag describing what kind of strategy a flow implements."""
    types = [n.type for n in nodes]

    if NodeType.ARBITRAGE.value in types:
        return "arbitrage"
    if NodeType.MEME_TRADE.value in types:
        return "meme-trading"
    if NodeType.COPY_TRADE.value in types:
        return "copy-trading"
    if types.count(NodeType.TOKEN.value) > 2:
        return "multi-token-swap"
    if types and all(t in WALLET_FLOW_TYPES for t in types):
        return "wallet-flow"
    return "general"


def _count(value: Any) -> int:
    # Incoming counts are derived data; anything unparseable reads as 0
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass
class FlowMetadata:
    """Derived summary of a flow. Never authoritative."""
    created_at: str = field(default_factory=utc_now_iso)
    network: str = DEFAULT_NETWORK
    node_count: int = 0
    edge_count: int = 0
    flow_type: str = "general"

    @classmethod
    def from_dict(cls, raw: Any) -> "FlowMetadata":
        if not isinstance(raw, dict):
            return cls()
        return cls(
            created_at=raw.get("createdAt") or utc_now_iso(),
            network=raw.get("network") or DEFAULT_NETWORK,
            node_count=_count(raw.get("nodeCount")),
            edge_count=_count(raw.get("edgeCount")),
            flow_type=raw.get("flowType") or "general",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "createdAt": self.created_at,
            "network": self.network,
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "flowType": self.flow_type,
        }


@dataclass
class Flow:
    """The root artifact: an ordered node list plus edges."""
    version: str = DEFAULT_FLOW_VERSION
    network: str = DEFAULT_NETWORK
    nodes: List[FlowNode] = field(default_factory=list)
    edges: List[FlowEdge] = field(default_factory=list)
    metadata: Optional[FlowMetadata] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Flow":
        """Build a flow from its wire form. Shape checks belong to the validator."""
        nodes = raw.get("nodes") if isinstance(raw.get("nodes"), list) else []
        edges = raw.get("edges") if isinstance(raw.get("edges"), list) else []
        metadata = raw.get("metadata")
        return cls(
            version=raw.get("version") or DEFAULT_FLOW_VERSION,
            network=raw.get("network") or DEFAULT_NETWORK,
            nodes=[FlowNode.from_dict(n) for n in nodes],
            edges=[FlowEdge.from_dict(e) for e in edges],
            metadata=FlowMetadata.from_dict(metadata) if metadata else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "version": self.version,
            "network": self.network,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
        if self.metadata is not None:
            out["metadata"] = self.metadata.to_dict()
        return out

    def get_node(self, node_id: str) -> Optional[FlowNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def refresh_metadata(self) -> FlowMetadata:
        """Recompute the derived metadata from the current nodes and edges."""
        self.metadata = FlowMetadata(
            network=self.network,
            node_count=len(self.nodes),
            edge_count=len(self.edges),
            flow_type=detect_flow_type(self.nodes),
        )
        return self.metadata

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [
            f"Flow v{self.version} ({self.network})",
            f"Nodes: {len(self.nodes)} | Edges: {len(self.edges)}",
        ]
        for i, node in enumerate(self.nodes):
            lines.append(f"  {i}. {node.label} [{node.type}]")
        return "\n".join(lines)
