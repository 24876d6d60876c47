"""Tests for the command line interface."""

import json

import pytest

from walletflow.cli import create_parser, main


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("WALLETFLOW_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def flow_file(tmp_path, wallet_tx_flow):
    path = tmp_path / "flow.json"
    path.write_text(json.dumps(wallet_tx_flow))
    return path


def test_parser_commands():
    parser = create_parser()
    args = parser.parse_args(["compile", "flow.json", "-n", "testnet", "--strict"])
    assert args.command == "compile"
    assert args.network == "testnet"
    assert args.strict


def test_no_command():
    assert main([]) == 0


def test_compile_writes_program(tmp_path, flow_file):
    out = tmp_path / "program.json"
    assert main(["compile", str(flow_file), "-o", str(out)]) == 0
    program = json.loads(out.read_text())
    assert program["estimatedGas"] == 6000


def test_compile_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{}")
    assert main(["compile", str(path)]) == 1


def test_compile_missing_file(tmp_path):
    assert main(["compile", str(tmp_path / "missing.json")]) == 1


def test_validate(flow_file):
    assert main(["validate", str(flow_file), "--strict"]) == 0


def test_simulate(flow_file):
    assert main(["simulate", str(flow_file), "--seed", "1", "--failure-rate", "0"]) == 0
    assert main(["simulate", str(flow_file), "--failure-rate", "1"]) == 1


def test_analyze_offline(tmp_path, flow_file):
    out = tmp_path / "analysis.json"
    assert main(["analyze", str(flow_file), "--offline", "-o", str(out)]) == 0
    assert json.loads(out.read_text())["flowComplexity"] == "Low"


def test_listing_commands():
    assert main(["nodes"]) == 0
    assert main(["defaults", "wallet", "-n", "testnet"]) == 0
    assert main(["samples"]) == 0


def test_samples_export(tmp_path):
    out = tmp_path / "sample.json"
    assert main(["samples", "--export", "arbitrage-flow", "-o", str(out)]) == 0
    assert json.loads(out.read_text())["nodes"]
    assert main(["samples", "--export", "nope"]) == 1


def test_contract(tmp_path, flow_file):
    out = tmp_path / "contract.json"
    assert main(["contract", str(flow_file), "--from-flow", "-o", str(out)]) == 0
    assert main(["contract", str(out)]) == 0
    bad = tmp_path / "bad.json"
    bad.write_text("{}")
    assert main(["contract", str(bad)]) == 1


def test_wallet_lifecycle(tmp_path):
    assert main(["wallet", "generate", "--label", "test"]) == 0
    store_file = tmp_path / "home" / "wallets" / "solana-wallets.json"
    records = json.loads(store_file.read_text())
    assert len(records) == 1
    key = records[0]["publicKey"]

    assert main(["wallet", "airdrop", key]) == 0
    assert json.loads(store_file.read_text())[0]["balance"] == 2.0
    assert main(["wallet", "airdrop", key, "-n", "mainnet"]) == 1
    assert main(["wallet", "list"]) == 0


def test_wallet_requires_key():
    assert main(["wallet", "airdrop"]) == 1


def test_pools():
    assert main(["pools"]) == 0


def test_analyze_pool_by_id(tmp_path):
    out = tmp_path / "pool.json"
    assert main(["analyze-pool", "58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2", "-o", str(out)]) == 0
    analysis = json.loads(out.read_text())
    assert analysis["poolAnalysis"]["profitPotential"] == "High"
    assert analysis["tradingStrategy"]["stopLoss"] == "Set stop-loss at 10% below entry"


def test_analyze_pool_file(tmp_path):
    pool_file = tmp_path / "pool.json"
    pool_file.write_text(json.dumps({"tokenA": "SAMO", "tokenB": "USDC", "apy": 5, "risk": "High"}))
    assert main(["analyze-pool", str(pool_file), "--offline"]) == 0


def test_analyze_pool_unknown():
    assert main(["analyze-pool", "nope", "--offline"]) == 1


def test_generate_contract(tmp_path):
    out = tmp_path / "drafted.json"
    assert main(["generate-contract", "Stake SOL weekly", "--offline", "-o", str(out)]) == 0
    assert json.loads(out.read_text())["description"] == "Stake SOL weekly"
    assert main(["contract", str(out)]) == 0


def test_generate_contract_missing_current(tmp_path):
    assert main(["generate-contract", "x", "--current", str(tmp_path / "missing.json")]) == 1


def test_generate_contract_blank_description():
    assert main(["generate-contract", "  ", "--offline"]) == 1
