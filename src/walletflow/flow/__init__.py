"""
Flow data model: nodes, edges, default node data and editing sessions.
"""

from .models import (
    Flow,
    FlowNode,
    FlowEdge,
    FlowMetadata,
    NodeType,
    Network,
    detect_flow_type,
)
from .defaults import default_data, get_node_types, DEFAULT_NODE_DATA
from .node_data import node_data_view, parse_node_data, NODE_DATA_TYPES
from .session import FlowSession
from .samples import SampleFlow, SAMPLE_FLOWS, get_sample_flow, list_sample_flows

__all__ = [
    "Flow",
    "FlowNode",
    "FlowEdge",
    "FlowMetadata",
    "NodeType",
    "Network",
    "detect_flow_type",
    "default_data",
    "get_node_types",
    "DEFAULT_NODE_DATA",
    "node_data_view",
    "parse_node_data",
    "NODE_DATA_TYPES",
    "FlowSession",
    "SampleFlow",
    "SAMPLE_FLOWS",
    "get_sample_flow",
    "list_sample_flows",
]
