"""Tests for the flow data model and typed node data."""

from walletflow.flow import (
    Flow,
    FlowEdge,
    FlowMetadata,
    FlowNode,
    NodeType,
    Network,
    detect_flow_type,
    node_data_view,
    parse_node_data,
)
from walletflow.flow.node_data import FundingData, GenericData, InputValueData, ArbitrageData


class TestEnums:

    def test_node_type_parse(self):
        assert NodeType.parse("inputValue") is NodeType.INPUT_VALUE
        assert NodeType.parse(NodeType.WALLET) is NodeType.WALLET
        assert NodeType.parse("mysteryNode") is None

    def test_network_parse(self):
        assert Network.parse("mainnet") is Network.MAINNET
        assert Network.parse("localnet") is None


class TestFlowRoundTrip:
    """Wire form survives from_dict/to_dict."""

    def test_position_preserved(self, wallet_tx_flow):
        flow = Flow.from_dict(wallet_tx_flow)
        assert flow.to_dict()["nodes"][1]["position"] == {"x": 250, "y": 0}
        assert flow.to_dict() == wallet_tx_flow

    def test_edge_handles(self):
        raw = {"id": "e", "source": "a", "target": "b", "sourceHandle": "out", "targetHandle": "in"}
        assert FlowEdge.from_dict(raw).to_dict() == raw

    def test_edge_id_default(self):
        assert FlowEdge.from_dict({"source": "a", "target": "b"}).id == "a-b"

    def test_unknown_type_survives(self):
        node = FlowNode.from_dict({"id": "x", "type": "mysteryNode", "data": {"label": "Mystery"}})
        assert node.type == "mysteryNode"
        assert node.node_type is None
        assert node.label == "Mystery"

    def test_tolerant_of_garbage(self):
        flow = Flow.from_dict({"nodes": "nope", "edges": None})
        assert flow.nodes == []
        assert flow.edges == []
        assert flow.network == "devnet"

    def test_get_node(self, wallet_tx_flow):
        flow = Flow.from_dict(wallet_tx_flow)
        assert flow.get_node("t1").type == "transaction"
        assert flow.get_node("nope") is None

    def test_metadata(self, wallet_tx_flow):
        flow = Flow.from_dict(wallet_tx_flow)
        meta = flow.refresh_metadata()
        assert meta.node_count == 2
        assert meta.edge_count == 1
        assert meta.flow_type == "wallet-flow"
        wire = flow.to_dict()["metadata"]
        assert wire["nodeCount"] == 2
        assert wire["flowType"] == "wallet-flow"

    def test_metadata_counts_tolerant(self):
        meta = FlowMetadata.from_dict({"nodeCount": "3", "edgeCount": "many"})
        assert meta.node_count == 3
        assert meta.edge_count == 0
        assert FlowMetadata.from_dict({"nodeCount": -4, "edgeCount": {}}).node_count == 0

    def test_summary(self, wallet_tx_flow):
        text = Flow.from_dict(wallet_tx_flow).summary()
        assert "Nodes: 2 | Edges: 1" in text
        assert "Send SOL [transaction]" in text


class TestDetectFlowType:

    def nodes(self, *types):
        return [FlowNode(id=str(i), type=t) for i, t in enumerate(types)]

    def test_priority(self):
        assert detect_flow_type(self.nodes("memeTrade", "arbitrage")) == "arbitrage"
        assert detect_flow_type(self.nodes("copyTrade", "memeTrade")) == "meme-trading"
        assert detect_flow_type(self.nodes("wallet", "copyTrade")) == "copy-trading"

    def test_multi_token(self):
        assert detect_flow_type(self.nodes("token", "token", "token")) == "multi-token-swap"
        assert detect_flow_type(self.nodes("token", "token")) == "general"

    def test_wallet_flow(self):
        assert detect_flow_type(self.nodes("wallet", "funding", "output")) == "wallet-flow"

    def test_general(self):
        assert detect_flow_type([]) == "general"
        assert detect_flow_type(self.nodes("wallet", "conditional")) == "general"


class TestNodeData:
    """Typed views tolerate missing fields."""

    def test_funding_defaults(self):
        view = parse_node_data("funding", {})
        assert isinstance(view, FundingData)
        assert view.amount == 0
        assert view.currency == "SOL"

    def test_camel_case_keys(self):
        view = parse_node_data(NodeType.INPUT_VALUE, {"valueType": "string", "defaultValue": "hi"})
        assert isinstance(view, InputValueData)
        assert view.value_type == "string"
        assert view.default_value == "hi"

    def test_none_counts_as_absent(self):
        view = parse_node_data("arbitrage", {"minProfitPercent": None, "path": ["A", "B"]})
        assert isinstance(view, ArbitrageData)
        assert view.min_profit_percent == 1.5
        assert view.path == ["A", "B"]

    def test_unknown_keys_ignored(self):
        view = parse_node_data("funding", {"amount": 3, "bogus": True})
        assert view.amount == 3

    def test_unknown_type(self):
        view = node_data_view(FlowNode(id="m", type="mysteryNode", data={"label": "M"}))
        assert isinstance(view, GenericData)
        assert view.label == "M"

    def test_non_dict_data(self):
        assert parse_node_data("funding", None).currency == "SOL"
