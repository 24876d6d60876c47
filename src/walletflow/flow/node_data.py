"""
Typed views over node data.

Node ``data`` travels as an open mapping. These dataclasses give each node type a
declared set of optional fields with defaults, so consumers such as the simulator
and the contract generator can read fields by name without guarding every access.
Unknown keys are ignored and missing keys fall back to the defaults below.
"""

from dataclasses import dataclass, field, fields
from typing import List, Dict, Any, Type

from .models import FlowNode, NodeType, DEFAULT_NETWORK


@dataclass
class GenericData:
    """Fallback view for node types outside the closed set."""
    label: str = "Node"


@dataclass
class WalletData:
    label: str = "Wallet Node"
    network: str = DEFAULT_NETWORK
    address: str = ""
    balance: float = 0


@dataclass
class FundingData:
    label: str = "Funding Node"
    amount: float = 0
    source: str = "faucet"
    currency: str = "SOL"


@dataclass
class TransactionData:
    label: str = "Transaction Node"
    type: str = "transfer"
    amount: float = 0
    recipient: str = ""


@dataclass
class TokenData:
    label: str = "Token Transfer"
    mint: str = ""
    amount: float = 0
    decimals: int = 9


@dataclass
class InputValueData:
    label: str = "Input Value"
    value_type: str = "number"
    default_value: Any = 0
    validation: str = "required"


@dataclass
class ConditionalTimerData:
    label: str = "Timer Condition"
    duration: float = 60
    unit: str = "seconds"
    condition: str = "after"


@dataclass
class OracleCheckData:
    label: str = "Oracle Check"
    oracle: str = "pyth"
    asset: str = "SOL/USD"
    condition: str = "price > 100"


@dataclass
class OutputData:
    label: str = "Output Node"
    format: str = "json"
    destination: str = "console"


@dataclass
class ConditionalData:
    label: str = "Conditional Logic"
    condition: str = "balance > 0"
    true_action: str = ""
    false_action: str = ""


@dataclass
class CopyTradeData:
    label: str = "Copy Trading"
    target_wallet: str = ""
    copy_percent: float = 100
    max_slippage: float = 1.0
    tokens: List[str] = field(default_factory=list)


@dataclass
class ProfitLossData:
    label: str = "Profit/Loss Control"
    take_profit: float = 15
    stop_loss: float = 7
    trailing_stop: bool = False
    time_limit: float = 24  # hours


@dataclass
class ArbitrageData:
    label: str = "Arbitrage Strategy"
    path: List[str] = field(default_factory=list)
    min_profit_percent: float = 1.5
    max_slippage: float = 1.0
    gas_limit: int = 500000


@dataclass
class MemeTradeData:
    label: str = "Meme Trading"
    tokens: List[str] = field(default_factory=list)
    strategy: str = "momentum"
    risk_level: str = "medium"
    max_allocation: float = 10  # percent


NODE_DATA_TYPES: Dict[NodeType, Type] = {
    NodeType.WALLET: WalletData,
    NodeType.FUNDING: FundingData,
    NodeType.TRANSACTION: TransactionData,
    NodeType.TOKEN: TokenData,
    NodeType.INPUT_VALUE: InputValueData,
    NodeType.CONDITIONAL_TIMER: ConditionalTimerData,
    NodeType.ORACLE_CHECK: OracleCheckData,
    NodeType.OUTPUT: OutputData,
    NodeType.CONDITIONAL: ConditionalData,
    NodeType.COPY_TRADE: CopyTradeData,
    NodeType.PROFIT_LOSS: ProfitLossData,
    NodeType.ARBITRAGE: ArbitrageData,
    NodeType.MEME_TRADE: MemeTradeData,
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def parse_node_data(node_type: Any, data: Dict[str, Any]) -> Any:
    """
    Build the typed view for a node type from a raw data mapping.

    Args:
        node_type: NodeType member or wire string
        data: Raw node data (camelCase keys, as the editor writes them)

    Returns:
        A dataclass instance; GenericData for unknown types
    """
    parsed = NodeType.parse(node_type)
    view_cls = NODE_DATA_TYPES.get(parsed, GenericData) if parsed else GenericData
    data = data if isinstance(data, dict) else {}

    kwargs = {}
    for f in fields(view_cls):
        key = _camel(f.name)
        value = data.get(key)
        # None counts as absent so partially-filled editor payloads keep defaults
        if value is not None:
            kwargs[f.name] = value
    return view_cls(**kwargs)


def node_data_view(node: FlowNode) -> Any:
    """Typed view of a node's data."""
    return parse_node_data(node.type, node.data)
