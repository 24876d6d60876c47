"""Exception types shared across walletflow."""

from typing import List, Optional


class WalletFlowError(Exception):
    """Base class for all walletflow errors."""


class StructuralError(WalletFlowError):
    """A flow failed its shape checks."""

    def __init__(self, errors: Optional[List[str]] = None, message: str = "Invalid program structure"):
        self.errors = list(errors or [message])
        super().__init__(message)

    def __str__(self) -> str:
        if len(self.errors) == 1:
            return self.errors[0]
        return f"{self.args[0]}: " + "; ".join(self.errors)


class CompileError(WalletFlowError):
    """Compilation could not produce a program."""


class InsufficientFlowError(WalletFlowError):
    """The flow has too few nodes to be worth compiling."""


class NodeNotFoundError(WalletFlowError, KeyError):
    """An editing operation referenced a node id that is not in the session."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")

    def __str__(self) -> str:
        return self.args[0]


class AnalysisError(WalletFlowError):
    """An analysis provider failed or returned an unusable response."""


class FaucetError(WalletFlowError):
    """An airdrop request was refused."""
