"""
walletflow - compile visual Solana wallet automation flows into programs.

Flows are graphs of typed nodes (wallets, transactions, trading strategies)
built in an editor. This package validates them, compiles them into opcode
programs with gas and complexity estimates, and simulates, analyzes and
exports them.
"""

__version__ = "0.1.0"

from .errors import (
    WalletFlowError,
    StructuralError,
    CompileError,
    InsufficientFlowError,
    NodeNotFoundError,
    AnalysisError,
    FaucetError,
)
from .flow import Flow, FlowNode, FlowEdge, FlowSession, NodeType, Network, default_data
from .compiler import CompiledProgram, CompileResult, compile_flow, validate_flow
