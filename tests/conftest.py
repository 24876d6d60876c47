"""Shared fixtures."""

import copy

import pytest


WALLET_TX_FLOW = {
    "version": "2.0.0",
    "network": "devnet",
    "nodes": [
        {"id": "w1", "type": "wallet", "position": {"x": 0, "y": 0}, "data": {"label": "Main Wallet", "network": "devnet"}},
        {"id": "t1", "type": "transaction", "position": {"x": 250, "y": 0}, "data": {"label": "Send SOL", "amount": 1, "recipient": "X"}},
    ],
    "edges": [{"id": "w1-t1", "source": "w1", "target": "t1"}],
}


@pytest.fixture
def wallet_tx_flow():
    """One wallet node feeding one transaction node."""
    return copy.deepcopy(WALLET_TX_FLOW)


def make_flow(types, edge_count=0, network="devnet"):
    """Flow with one node per type and ``edge_count`` chained edges."""
    nodes = [
        {"id": f"n{i}", "type": t, "data": {"label": f"Node {i}"}}
        for i, t in enumerate(types)
    ]
    edges = [
        {"id": f"e{i}", "source": f"n{i % len(nodes)}", "target": f"n{(i + 1) % len(nodes)}"}
        for i in range(edge_count)
    ]
    return {"version": "1.0.0", "network": network, "nodes": nodes, "edges": edges}


@pytest.fixture
def flow_factory():
    return make_flow
