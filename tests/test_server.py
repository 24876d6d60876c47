"""Tests for the HTTP API."""

import importlib
import json
import random

import pytest
from fastapi.testclient import TestClient

from walletflow.analysis import AnalysisProvider, FlowAnalyzer, HeuristicAnalysisProvider
from walletflow.config import Settings
from walletflow.errors import AnalysisError
from walletflow.server import app as server_app
from walletflow.server.app import create_app


class FailingProvider(AnalysisProvider):
    @property
    def name(self):
        return "failing"

    def analyze(self, flow, network, options):
        raise AnalysisError("down")


@pytest.fixture
def settings(tmp_path):
    return Settings.from_env({"WALLETFLOW_HOME": str(tmp_path), "WALLETFLOW_FAILURE_RATE": "0"})


@pytest.fixture
def client(settings):
    analyzer = FlowAnalyzer(fallback=HeuristicAnalysisProvider(random.Random(0)))
    return TestClient(create_app(settings, analyzer))


def test_health(client):
    body = client.get("/").json()
    assert body["status"] == "ok"
    assert body["network"] == "devnet"


class TestCompile:

    def test_success(self, client, wallet_tx_flow):
        response = client.post("/api/compile", json={"program": wallet_tx_flow, "network": "testnet"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        program = body["program"]
        assert program["network"] == "testnet"
        assert program["estimatedGas"] == 6000
        assert program["metadata"]["complexity"] == "low"
        assert program["bytecode"].split("\n")[0] == "INIT_WALLET"

    def test_invalid_structure(self, client):
        response = client.post("/api/compile", json={"program": {"edges": []}, "network": "devnet"})
        assert response.status_code == 400
        body = response.json()
        assert body == {
            "success": False,
            "error": "Invalid program structure",
            "errors": ["Invalid program structure"],
        }

    def test_missing_program(self, client):
        response = client.post("/api/compile", json={"network": "devnet"})
        assert response.status_code == 400

    def test_strict(self, client, wallet_tx_flow):
        wallet_tx_flow["edges"].append({"id": "x", "source": "ghost", "target": "t1"})
        response = client.post("/api/compile", json={"program": wallet_tx_flow, "strict": True})
        assert response.status_code == 400
        assert response.json()["errors"] == ["Edge 1: Unknown source node ghost"]

    def test_unexpected_failure(self, client, wallet_tx_flow, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("walletflow.server.app.compile_flow", boom)
        response = client.post("/api/compile", json={"program": wallet_tx_flow})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Compilation failed"}

    def test_malformed_metadata(self, client, wallet_tx_flow):
        wallet_tx_flow["metadata"] = {"nodeCount": "two"}
        response = client.post("/api/compile", json={"program": wallet_tx_flow})
        assert response.status_code == 200
        assert response.json()["program"]["metadata"]["nodeCount"] == 2

    def test_unknown_network_falls_back(self, client, wallet_tx_flow):
        response = client.post("/api/compile", json={"program": wallet_tx_flow, "network": "localnet"})
        assert response.json()["program"]["network"] == "devnet"


def test_validate(client):
    body = client.post("/api/validate", json={"program": {"nodes": []}, "strict": True}).json()
    assert body["valid"] is False
    assert "Missing version field" in body["errors"]


def test_simulate(client, wallet_tx_flow):
    body = client.post("/api/simulate", json={"program": wallet_tx_flow, "network": "testnet", "seed": 1}).json()
    assert body["success"] is True
    simulation = body["simulation"]
    assert simulation["success"] is True
    assert simulation["network"] == "testnet"
    assert simulation["totalSteps"] == 4


class TestAnalyze:

    def test_success(self, client, wallet_tx_flow):
        response = client.post("/api/analyze", json={"flow": wallet_tx_flow, "network": "devnet"})
        assert response.status_code == 200
        body = response.json()
        assert body["provider"] == "heuristic"
        assert body["analysis"]["flowComplexity"] == "Low"

    def test_invalid_flow(self, client):
        response = client.post("/api/analyze", json={"flow": {"edges": []}})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid flow structure"

    def test_all_providers_fail(self, settings, wallet_tx_flow):
        app = create_app(settings, FlowAnalyzer(primary=FailingProvider(), fallback=FailingProvider()))
        response = TestClient(app).post("/api/analyze", json={"flow": wallet_tx_flow})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Analysis failed"}


class TestContract:

    def test_generate_and_validate(self, client, wallet_tx_flow):
        contract = client.post("/api/contract/generate", json={"flow": wallet_tx_flow}).json()["contract"]
        assert len(contract["functions"]) == 2
        validation = client.post("/api/contract/validate", json={"contract": contract}).json()["validation"]
        assert validation["valid"] is True

    def test_validate_text(self, client):
        validation = client.post("/api/contract/validate", json={"contract": "{bad"}).json()["validation"]
        assert validation["errors"] == ["Invalid JSON format"]

    def test_generate_invalid_flow(self, client):
        assert client.post("/api/contract/generate", json={"flow": None}).status_code == 400


class TestWalletRoutes:

    def test_generate(self, client):
        body = client.post("/api/wallet/generate", json={"network": "testnet"}).json()
        assert body["success"] is True
        assert body["wallet"]["network"] == "testnet"
        assert body["wallet"]["balance"] == 0

    def test_generate_bad_network(self, client):
        assert client.post("/api/wallet/generate", json={"network": "localnet"}).status_code == 400

    def test_faucet(self, client):
        body = client.post("/api/faucet", json={"publicKey": "Key", "network": "devnet"}).json()
        assert body["success"] is True
        assert body["amount"] == 2.0

    def test_faucet_mainnet(self, client):
        response = client.post("/api/faucet", json={"publicKey": "Key", "network": "mainnet"})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Faucet not available on mainnet"}


def test_nodes(client):
    nodes = client.get("/api/nodes", params={"network": "testnet"}).json()["nodes"]
    wallet = next(n for n in nodes if n["type"] == "wallet")
    assert wallet["defaultData"]["network"] == "testnet"
    assert wallet["gas"] == 1000


class TestPools:

    def test_list(self, client):
        body = client.get("/api/pools").json()
        assert body["success"] is True
        assert [p["tokenA"]["symbol"] for p in body["pools"]] == ["SOL", "SAMO"]
        assert body["timestamp"].endswith("Z")

    def test_analyze_by_id(self, client):
        response = client.post("/api/analyze-pool", json={"pool": "58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2"})
        assert response.status_code == 200
        body = response.json()
        assert body["provider"] == "heuristic"
        assert body["analysis"]["poolAnalysis"]["profitPotential"] == "High"
        assert body["analysis"]["recommendations"][0].startswith("SOL/BONK")

    def test_analyze_object(self, client):
        pool = {"tokenA": "SAMO", "tokenB": "USDC", "apy": 10, "risk": "Low"}
        body = client.post("/api/analyze-pool", json={"pool": pool, "network": "mainnet"}).json()
        assert body["analysis"]["poolAnalysis"]["riskLevel"] == "Low"

    @pytest.mark.parametrize("pool", [None, {}, "unknown-pool"])
    def test_pool_required(self, client, pool):
        response = client.post("/api/analyze-pool", json={"pool": pool})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Pool data is required"}

    def test_all_providers_fail(self, settings):
        app = create_app(settings, FlowAnalyzer(primary=FailingProvider(), fallback=FailingProvider()))
        response = TestClient(app).post("/api/analyze-pool", json={"pool": {"apy": 1}})
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Pool analysis failed"
        assert "does not analyze pools" in body["details"]


class TestContractDraft:

    def test_generate(self, client):
        response = client.post("/api/contract/ai-generate", json={
            "description": "Pay rent monthly",
            "currentCode": "{}",
            "optimization": "gas",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["provider"] == "heuristic"
        assert json.loads(body["result"]["code"])["description"] == "Pay rent monthly"
        assert body["result"]["explanation"]

    @pytest.mark.parametrize("payload", [{}, {"description": ""}, {"description": 42}])
    def test_description_required(self, client, payload):
        response = client.post("/api/contract/ai-generate", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Description is required"

    def test_all_providers_fail(self, settings):
        app = create_app(settings, FlowAnalyzer(primary=FailingProvider(), fallback=FailingProvider()))
        response = TestClient(app).post("/api/contract/ai-generate", json={"description": "x"})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate contract"


def test_import_builds_no_app(monkeypatch):
    calls = []
    monkeypatch.setattr("walletflow.config.load_env", lambda *a, **k: calls.append(a))
    try:
        module = importlib.reload(server_app)
        assert calls == []
        assert not hasattr(module, "app")
    finally:
        monkeypatch.undo()
        importlib.reload(server_app)
