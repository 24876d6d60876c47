"""
Instruction Compiler.

Maps each node to a fixed opcode sequence and an instruction record. Output is a
pure function of the node sequence: no randomness and no clock reads, so the
same nodes always yield byte-identical bytecode.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Iterable, Tuple, Union

from ..flow.models import FlowNode
from .opcodes import opcodes_for, operation_for, node_gas


NodeLike = Union[FlowNode, Dict[str, Any]]


@dataclass(frozen=True)
class Instruction:
    """One compiled node."""
    index: int
    type: str
    operation: str
    gas_estimate: int
    # Same mapping object as the source node's data; treat as read-only
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "type": self.type,
            "operation": self.operation,
            "gasEstimate": self.gas_estimate,
            "data": self.data,
        }


def as_node(node: NodeLike) -> FlowNode:
    return node if isinstance(node, FlowNode) else FlowNode.from_dict(node)


def generate_bytecode(nodes: Iterable[NodeLike]) -> str:
    """Newline-joined opcodes for all nodes, in node order."""
    ops: List[str] = []
    for node in nodes:
        ops.extend(opcodes_for(as_node(node).type))
    return "\n".join(ops)


def generate_instructions(nodes: Iterable[NodeLike]) -> List[Instruction]:
    """One instruction record per node, including nodes of unknown type."""
    instructions = []
    for index, raw in enumerate(nodes):
        node = as_node(raw)
        instructions.append(Instruction(
            index=index,
            type=node.type,
            operation=operation_for(node.type),
            gas_estimate=node_gas(node.type),
            data=node.data,
        ))
    return instructions


def compile_nodes(nodes: Iterable[NodeLike]) -> Tuple[str, List[Instruction]]:
    """
    Compile an ordered node sequence.

    Args:
        nodes: FlowNode objects or their wire mappings

    Returns:
        (bytecode, instructions)
    """
    nodes = [as_node(n) for n in nodes]
    return generate_bytecode(nodes), generate_instructions(nodes)
