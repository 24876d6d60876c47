"""Tests for default node data and the node catalog."""

from walletflow.compiler import node_catalog
from walletflow.flow import NodeType, Network, default_data, get_node_types


class TestDefaultData:

    def test_every_type_has_defaults(self):
        assert set(get_node_types()) == {t.value for t in NodeType}

    def test_wallet_uses_network(self):
        assert default_data("wallet", "testnet")["network"] == "testnet"
        assert default_data(NodeType.WALLET, Network.MAINNET)["network"] == "mainnet"
        assert default_data("wallet")["network"] == "devnet"

    def test_funding(self):
        assert default_data("funding") == {
            "label": "Funding Node",
            "amount": 1,
            "source": "faucet",
            "currency": "SOL",
        }

    def test_unknown_type_fallback(self):
        assert default_data("mysteryNode") == {"label": "Node"}

    def test_returns_fresh_copy(self):
        first = default_data("memeTrade")
        first["tokens"].append("WIF")
        assert "WIF" not in default_data("memeTrade")["tokens"]


class TestNodeCatalog:

    def test_entries(self):
        catalog = {entry["type"]: entry for entry in node_catalog("devnet")}
        assert catalog["wallet"]["opcodes"] == ["INIT_WALLET", "LOAD_KEYPAIR"]
        assert catalog["transaction"]["gas"] == 5000
        assert catalog["funding"]["operation"] == "Unknown Operation"
        assert catalog["funding"]["opcodes"] == []
        assert catalog["wallet"]["defaultData"]["network"] == "devnet"
        assert len(catalog) == len(NodeType)
