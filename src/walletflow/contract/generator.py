"""
JSON contracts.

A contract is a flat, human-editable description of a flow: one function per
node in node order. Contracts are generated from flows and validated on their
own; they are never compiled back into a flow.
"""

import json
import re
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Union

from ..compiler.estimator import estimate_gas
from ..compiler.validator import INVALID_JSON
from ..flow.models import Flow, FlowNode, Network, utc_now_iso


CONTRACT_VERSION = "1.0.0"
CONTRACT_TYPE = "wallet_flow"

_WHITESPACE = re.compile(r"\s+")


def function_name(label: str) -> str:
    """Snake-case a node label, e.g. "Send SOL" -> "send_sol"."""
    return _WHITESPACE.sub("_", label.lower())


def node_parameters(node: FlowNode) -> Dict[str, Any]:
    data = node.data
    if node.type == "wallet":
        return {"network": data.get("network"), "address": data.get("address")}
    if node.type == "transaction":
        return {"amount": data.get("amount"), "recipient": data.get("recipient")}
    if node.type == "inputValue":
        return {"type": data.get("valueType"), "default": data.get("defaultValue")}
    return {}


def node_conditions(node: FlowNode) -> Optional[Dict[str, Any]]:
    data = node.data
    if node.type == "conditionalTimer":
        return {"duration": data.get("duration"), "unit": data.get("unit")}
    if node.type == "oracleCheck":
        return {"oracle": data.get("oracle"), "condition": data.get("condition")}
    return None


def generate_contract(flow: Union[Flow, Dict[str, Any]], network: Any = None) -> Dict[str, Any]:
    """Build a contract document from a flow."""
    if not isinstance(flow, Flow):
        flow = Flow.from_dict(flow)
    parsed = Network.parse(network) if network is not None else None
    network_name = parsed.value if parsed else flow.network

    functions = []
    for index, node in enumerate(flow.nodes):
        functions.append({
            "id": f"function_{index}",
            "name": function_name(node.label),
            "type": node.type,
            "parameters": node_parameters(node),
            "execution_order": index,
            "conditions": node_conditions(node),
        })

    return {
        "version": CONTRACT_VERSION,
        "contract_type": CONTRACT_TYPE,
        "network": network_name,
        "description": "Auto-generated from flow playground",
        "functions": functions,
        "metadata": {
            "generated_at": utc_now_iso(),
            "source": "flow_playground",
            "node_count": len(flow.nodes),
        },
    }


@dataclass
class ContractValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    gas_estimate: int = 0
    complexity: str = "Invalid"  # Invalid, Medium, High

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "gasEstimate": self.gas_estimate,
            "complexity": self.complexity,
        }


def validate_contract(raw: Union[str, bytes, Dict[str, Any]]) -> ContractValidation:
    """
    Check a contract document.

    Missing version or functions are errors; a missing contract type is only
    a warning. Text that does not parse as a JSON object is reported as
    invalid JSON.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return ContractValidation(valid=False, errors=[INVALID_JSON])
    if not isinstance(raw, dict):
        return ContractValidation(valid=False, errors=[INVALID_JSON])

    errors: List[str] = []
    warnings: List[str] = []
    if not raw.get("version"):
        errors.append("Missing version field")
    if not raw.get("contract_type"):
        warnings.append("Contract type not specified")
    functions = raw.get("functions")
    if not isinstance(functions, list):
        errors.append("Missing or invalid functions array")
        functions = []

    types = [{"type": f.get("type")} for f in functions if isinstance(f, dict)]

    if errors:
        complexity = "Invalid"
    elif len(warnings) > 2:
        complexity = "High"
    else:
        complexity = "Medium"

    return ContractValidation(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        gas_estimate=estimate_gas(types),
        complexity=complexity,
    )
