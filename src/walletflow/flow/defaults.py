"""Default node data: the payload a node starts with when the editor creates it."""

import copy
from typing import Dict, Any, Optional

from .models import NodeType, Network, DEFAULT_NETWORK


FALLBACK_DATA: Dict[str, Any] = {"label": "Node"}

# "{network}" placeholders are filled in by default_data()
DEFAULT_NODE_DATA: Dict[str, Dict[str, Any]] = {
    NodeType.WALLET.value: {
        "label": "Wallet Node",
        "network": "{network}",
        "address": "",
        "balance": 0,
    },
    NodeType.FUNDING.value: {
        "label": "Funding Node",
        "amount": 1,
        "source": "faucet",
        "currency": "SOL",
    },
    NodeType.TRANSACTION.value: {
        "label": "Transaction Node",
        "type": "transfer",
        "amount": 0,
        "recipient": "",
    },
    NodeType.TOKEN.value: {
        "label": "Token Transfer",
        "mint": "",
        "amount": 0,
        "decimals": 9,
    },
    NodeType.INPUT_VALUE.value: {
        "label": "Input Value",
        "valueType": "number",
        "defaultValue": 0,
        "validation": "required",
    },
    NodeType.CONDITIONAL_TIMER.value: {
        "label": "Timer Condition",
        "duration": 60,
        "unit": "seconds",
        "condition": "after",
    },
    NodeType.ORACLE_CHECK.value: {
        "label": "Oracle Check",
        "oracle": "pyth",
        "asset": "SOL/USD",
        "condition": "price > 100",
    },
    NodeType.OUTPUT.value: {
        "label": "Output Node",
        "format": "json",
        "destination": "console",
    },
    NodeType.CONDITIONAL.value: {
        "label": "Conditional Logic",
        "condition": "balance > 0",
        "trueAction": "",
        "falseAction": "",
    },
    NodeType.COPY_TRADE.value: {
        "label": "Copy Trading",
        "targetWallet": "",
        "copyPercent": 100,
        "maxSlippage": 1.0,
        "tokens": ["SOL", "BONK", "SAMO"],
    },
    NodeType.PROFIT_LOSS.value: {
        "label": "Profit/Loss Control",
        "takeProfit": 15,
        "stopLoss": 7,
        "trailingStop": False,
        "timeLimit": 24,
    },
    NodeType.ARBITRAGE.value: {
        "label": "Arbitrage Strategy",
        "path": ["DEX1", "DEX2", "DEX3"],
        "minProfitPercent": 1.5,
        "maxSlippage": 1.0,
        "gasLimit": 500000,
    },
    NodeType.MEME_TRADE.value: {
        "label": "Meme Trading",
        "tokens": ["BONK", "SAMO", "MEME"],
        "strategy": "momentum",
        "riskLevel": "medium",
        "maxAllocation": 10,
    },
}


def default_data(node_type: Any, network: Optional[Any] = None) -> Dict[str, Any]:
    """
    Initial data payload for a freshly created node.

    Returns a new mapping on every call; unknown types get only a label.
    """
    if isinstance(node_type, NodeType):
        node_type = node_type.value
    if isinstance(network, Network):
        network = network.value
    network = network or DEFAULT_NETWORK

    template = DEFAULT_NODE_DATA.get(node_type, FALLBACK_DATA)
    data = copy.deepcopy(template)
    for key, value in data.items():
        if value == "{network}":
            data[key] = network
    return data


def get_node_types() -> list:
    """All node types that have a default payload, in palette order."""
    return list(DEFAULT_NODE_DATA.keys())
