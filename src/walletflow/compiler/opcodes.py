"""Opcode, operation-name and gas tables keyed by node type."""

from typing import Any, Dict, List, Optional, Tuple

from ..flow.defaults import default_data, get_node_types
from ..flow.models import NodeType


OPCODES: Dict[str, Tuple[str, ...]] = {
    NodeType.WALLET.value: ("INIT_WALLET", "LOAD_KEYPAIR"),
    NodeType.TRANSACTION.value: ("CREATE_TX", "SET_RECIPIENT", "SET_AMOUNT", "SIGN_TX"),
    NodeType.TOKEN.value: ("TOKEN_INIT", "TOKEN_TRANSFER"),
    NodeType.CONDITIONAL.value: ("EVAL_CONDITION", "BRANCH"),
}

OPERATIONS: Dict[str, str] = {
    NodeType.WALLET.value: "Initialize Wallet Connection",
    NodeType.TRANSACTION.value: "Create and Execute Transaction",
    NodeType.TOKEN.value: "SPL Token Operation",
    NodeType.CONDITIONAL.value: "Conditional Logic Evaluation",
}

UNKNOWN_OPERATION = "Unknown Operation"

GAS_COSTS: Dict[str, int] = {
    NodeType.WALLET.value: 1000,
    NodeType.TRANSACTION.value: 5000,
    NodeType.TOKEN.value: 3000,
    NodeType.CONDITIONAL.value: 800,
}

# Cost charged for any type not in GAS_COSTS
DEFAULT_GAS_COST = 1000


def opcodes_for(node_type: str) -> List[str]:
    """Opcode sequence for a node type; empty for types outside the table."""
    return list(OPCODES.get(node_type, ()))


def operation_for(node_type: str) -> str:
    return OPERATIONS.get(node_type, UNKNOWN_OPERATION)


def node_gas(node_type: str) -> int:
    return GAS_COSTS.get(node_type, DEFAULT_GAS_COST)


def node_catalog(network: Optional[str] = None) -> List[Dict[str, Any]]:
    """Every palette node type with its compiled form and default data."""
    return [
        {
            "type": node_type,
            "operation": operation_for(node_type),
            "opcodes": opcodes_for(node_type),
            "gas": node_gas(node_type),
            "defaultData": default_data(node_type, network),
        }
        for node_type in get_node_types()
    ]
