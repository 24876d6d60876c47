"""Tests for the editing session."""

import pytest

from walletflow.errors import InsufficientFlowError, NodeNotFoundError
from walletflow.flow import Flow, FlowSession, NodeType


@pytest.fixture
def session():
    return FlowSession(network="testnet")


class TestEditing:

    def test_add_node_uses_defaults(self, session):
        node = session.add_node("wallet", {"x": 10, "y": 20})
        assert node.id.startswith("wallet-")
        assert node.data["network"] == "testnet"
        assert node.position == {"x": 10, "y": 20}

    def test_add_node_with_enum_and_overrides(self, session):
        node = session.add_node(NodeType.FUNDING, data={"amount": 5})
        assert node.type == "funding"
        assert node.data["amount"] == 5
        assert node.data["currency"] == "SOL"

    def test_ids_unique(self, session):
        ids = {session.add_node("token").id for _ in range(50)}
        assert len(ids) == 50

    def test_update_node_merges(self, session):
        node = session.add_node("transaction")
        session.update_node(node.id, {"amount": 2})
        assert node.data["amount"] == 2
        assert node.data["type"] == "transfer"

    def test_unknown_node(self, session):
        with pytest.raises(NodeNotFoundError) as exc_info:
            session.update_node("ghost", {})
        assert str(exc_info.value) == "Node not found: ghost"
        with pytest.raises(KeyError):
            session.move_node("ghost", {"x": 0, "y": 0})

    def test_move_node(self, session):
        node = session.add_node("output")
        session.move_node(node.id, {"x": 5, "y": 6})
        assert node.position == {"x": 5, "y": 6}

    def test_connect_replaces_incoming_edge(self, session):
        a = session.add_node("wallet")
        b = session.add_node("funding")
        c = session.add_node("transaction")
        session.connect(a.id, c.id)
        edge = session.connect(b.id, c.id)
        assert session.edges == [edge]
        assert edge.id == f"{b.id}-{c.id}"

    def test_connect_unknown_endpoint(self, session):
        a = session.add_node("wallet")
        with pytest.raises(NodeNotFoundError):
            session.connect(a.id, "ghost")

    def test_delete_node_drops_edges(self, session):
        a = session.add_node("wallet")
        b = session.add_node("funding")
        c = session.add_node("transaction")
        session.connect(a.id, b.id)
        session.connect(b.id, c.id)
        session.delete_node(b.id)
        assert [n.id for n in session.nodes] == [a.id, c.id]
        assert session.edges == []

    def test_disconnect(self, session):
        a = session.add_node("wallet")
        b = session.add_node("funding")
        edge = session.connect(a.id, b.id)
        assert session.disconnect(edge.id)
        assert not session.disconnect(edge.id)

    def test_clear(self, session):
        session.add_node("wallet")
        session.clear()
        assert session.nodes == [] and session.edges == []


class TestSnapshots:

    def test_snapshot_is_independent(self, session):
        node = session.add_node("transaction")
        snap = session.snapshot()
        session.update_node(node.id, {"amount": 99})
        session.add_node("wallet")
        assert snap.nodes[0].data["amount"] == 0
        assert len(snap.nodes) == 1
        assert snap.metadata.node_count == 1

    def test_snapshot_version(self, session):
        assert session.snapshot().version == "2.0.0"
        assert session.snapshot(version="3.1.0").version == "3.1.0"

    def test_load_copies(self, wallet_tx_flow):
        flow = Flow.from_dict(wallet_tx_flow)
        session = FlowSession()
        session.load(flow)
        session.update_node("t1", {"amount": 7})
        assert flow.get_node("t1").data["amount"] == 1


class TestCompile:

    def test_too_few_nodes(self, session):
        with pytest.raises(InsufficientFlowError):
            session.compile()
        session.add_node("wallet")
        with pytest.raises(InsufficientFlowError):
            session.compile()

    def test_compile(self, session):
        a = session.add_node("wallet")
        b = session.add_node("transaction")
        session.connect(a.id, b.id)
        program = session.compile(strict=True).unwrap()
        assert program.network == "testnet"
        assert program.estimated_gas == 6000
        assert program.version == "2.0.0"
