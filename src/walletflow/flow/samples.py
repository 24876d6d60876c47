"""Sample flow templates that ship with the builder."""

import copy
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from .models import Flow


@dataclass
class SampleFlow:
    id: str
    name: str
    description: str
    category: str
    difficulty: str  # Beginner, Intermediate, Advanced
    estimated_profit: str
    timeframe: str
    flow: Dict[str, Any]


SAMPLE_FLOWS: Dict[str, SampleFlow] = {
    "simple-transfer": SampleFlow(
        id="simple-transfer",
        name="Simple Wallet Transfer",
        description="Basic wallet funding and SOL transfer between accounts",
        category="basic",
        difficulty="Beginner",
        estimated_profit="0%",
        timeframe="Instant",
        flow={
            "version": "2.0.0",
            "network": "devnet",
            "nodes": [
                {
                    "id": "wallet-1",
                    "type": "wallet",
                    "position": {"x": 100, "y": 100},
                    "data": {"label": "Source Wallet", "network": "devnet", "balance": 0},
                },
                {
                    "id": "funding-1",
                    "type": "funding",
                    "position": {"x": 350, "y": 100},
                    "data": {"label": "Fund Wallet", "amount": 5, "source": "faucet", "currency": "SOL"},
                },
                {
                    "id": "transaction-1",
                    "type": "transaction",
                    "position": {"x": 600, "y": 100},
                    "data": {"label": "Transfer SOL", "type": "transfer", "amount": 1, "recipient": "target_wallet"},
                },
            ],
            "edges": [
                {"id": "e1", "source": "wallet-1", "target": "funding-1"},
                {"id": "e2", "source": "funding-1", "target": "transaction-1"},
            ],
        },
    ),
    "arbitrage-flow": SampleFlow(
        id="arbitrage-flow",
        name="DEX Arbitrage Bot",
        description="Automated arbitrage trading across multiple DEXs for profit",
        category="trading",
        difficulty="Advanced",
        estimated_profit="2-5%",
        timeframe="1-4 hours",
        flow={
            "version": "2.0.0",
            "network": "devnet",
            "nodes": [
                {
                    "id": "wallet-1",
                    "type": "wallet",
                    "position": {"x": 100, "y": 150},
                    "data": {"label": "Trading Wallet", "network": "devnet", "balance": 10},
                },
                {
                    "id": "arbitrage-1",
                    "type": "arbitrage",
                    "position": {"x": 350, "y": 150},
                    "data": {
                        "label": "Arbitrage Scanner",
                        "path": ["Raydium", "Orca", "Jupiter"],
                        "minProfitPercent": 2.0,
                        "maxSlippage": 1.0,
                        "gasLimit": 500000,
                    },
                },
                {
                    "id": "profit-1",
                    "type": "profitLoss",
                    "position": {"x": 600, "y": 100},
                    "data": {
                        "label": "Profit Control",
                        "takeProfit": 5,
                        "stopLoss": 2,
                        "trailingStop": True,
                        "timeLimit": 4,
                    },
                },
                {
                    "id": "output-1",
                    "type": "output",
                    "position": {"x": 850, "y": 150},
                    "data": {"label": "Results", "format": "json", "destination": "console"},
                },
            ],
            "edges": [
                {"id": "e1", "source": "wallet-1", "target": "arbitrage-1"},
                {"id": "e2", "source": "arbitrage-1", "target": "profit-1"},
                {"id": "e3", "source": "profit-1", "target": "output-1"},
            ],
        },
    ),
    "copy-trade-flow": SampleFlow(
        id="copy-trade-flow",
        name="Whale Copy Trader",
        description="Mirror a target wallet's trades with position limits",
        category="trading",
        difficulty="Intermediate",
        estimated_profit="5-15%",
        timeframe="24 hours",
        flow={
            "version": "2.0.0",
            "network": "devnet",
            "nodes": [
                {
                    "id": "wallet-1",
                    "type": "wallet",
                    "position": {"x": 100, "y": 150},
                    "data": {"label": "Follower Wallet", "network": "devnet", "balance": 20},
                },
                {
                    "id": "copy-1",
                    "type": "copyTrade",
                    "position": {"x": 350, "y": 150},
                    "data": {
                        "label": "Copy Whale",
                        "targetWallet": "whale_wallet",
                        "copyPercent": 50,
                        "maxSlippage": 1.5,
                        "tokens": ["SOL", "BONK", "JUP"],
                    },
                },
                {
                    "id": "profit-1",
                    "type": "profitLoss",
                    "position": {"x": 600, "y": 150},
                    "data": {
                        "label": "Risk Control",
                        "takeProfit": 15,
                        "stopLoss": 7,
                        "trailingStop": False,
                        "timeLimit": 24,
                    },
                },
                {
                    "id": "output-1",
                    "type": "output",
                    "position": {"x": 850, "y": 150},
                    "data": {"label": "Trade Log", "format": "json", "destination": "console"},
                },
            ],
            "edges": [
                {"id": "e1", "source": "wallet-1", "target": "copy-1"},
                {"id": "e2", "source": "copy-1", "target": "profit-1"},
                {"id": "e3", "source": "profit-1", "target": "output-1"},
            ],
        },
    ),
}


def list_sample_flows() -> List[SampleFlow]:
    return list(SAMPLE_FLOWS.values())


def get_sample_flow(sample_id: str) -> Optional[Flow]:
    """Fresh Flow built from a template, or None for an unknown id."""
    sample = SAMPLE_FLOWS.get(sample_id)
    if not sample:
        return None
    flow = Flow.from_dict(copy.deepcopy(sample.flow))
    flow.refresh_metadata()
    return flow
