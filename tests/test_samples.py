"""Tests for the sample flow templates."""

from walletflow.compiler import compile_flow, validate_flow
from walletflow.flow import SAMPLE_FLOWS, get_sample_flow, list_sample_flows


def test_known_samples():
    assert {"simple-transfer", "arbitrage-flow", "copy-trade-flow"} <= set(SAMPLE_FLOWS)
    assert len(list_sample_flows()) == len(SAMPLE_FLOWS)


def test_unknown_sample():
    assert get_sample_flow("nope") is None


def test_samples_are_fresh_copies():
    flow = get_sample_flow("simple-transfer")
    flow.nodes[0].data["label"] = "Changed"
    assert get_sample_flow("simple-transfer").nodes[0].data["label"] != "Changed"


def test_samples_pass_strict_validation_and_compile():
    for sample in list_sample_flows():
        flow = get_sample_flow(sample.id)
        assert validate_flow(flow, strict=True).ok, sample.id
        assert compile_flow(flow).success


def test_sample_flow_types():
    assert get_sample_flow("arbitrage-flow").metadata.flow_type == "arbitrage"
    assert get_sample_flow("copy-trade-flow").metadata.flow_type == "copy-trading"
    assert get_sample_flow("simple-transfer").metadata.flow_type == "wallet-flow"
