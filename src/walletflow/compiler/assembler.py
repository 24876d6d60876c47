"""
Compiled Program Assembler.

Runs the validator, then combines compiler and estimator output into a single
immutable CompiledProgram. Performs no I/O; persisting or transmitting the
result is up to the caller.
"""

import logging
import secrets
import string
import time
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple

from ..errors import CompileError
from ..flow.models import Flow, Network, DEFAULT_NETWORK, utc_now_iso
from .compiler import Instruction, compile_nodes
from .estimator import Complexity, estimate_gas, estimate_complexity
from .validator import RawFlow, INVALID_STRUCTURE, parse_raw_flow, validate_flow

logger = logging.getLogger(__name__)


DEFAULT_PROGRAM_VERSION = "1.0.0"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_program_id() -> str:
    """Time-based prefix plus a random base36 suffix."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    return f"prog_{int(time.time() * 1000)}_{suffix}"


@dataclass(frozen=True)
class ProgramMetadata:
    node_count: int
    edge_count: int
    complexity: Complexity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "complexity": self.complexity.value,
        }


@dataclass(frozen=True)
class CompiledProgram:
    """The output artifact of a successful compilation."""
    id: str
    version: str
    network: str
    bytecode: str
    instructions: Tuple[Instruction, ...]
    estimated_gas: int
    compiled_at: str
    metadata: ProgramMetadata

    @property
    def opcodes(self) -> List[str]:
        return self.bytecode.split("\n") if self.bytecode else []

    def to_dict(self) -> Dict[str, Any]:
        """Wire form (camelCase keys)."""
        return {
            "id": self.id,
            "version": self.version,
            "network": self.network,
            "bytecode": self.bytecode,
            "instructions": [ix.to_dict() for ix in self.instructions],
            "estimatedGas": self.estimated_gas,
            "compiledAt": self.compiled_at,
            "metadata": self.metadata.to_dict(),
        }

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [
            f"Program: {self.id}",
            f"Network: {self.network} | Version: {self.version}",
            f"Instructions: {len(self.instructions)} | Opcodes: {len(self.opcodes)}",
            f"Estimated gas: {self.estimated_gas:,}",
            f"Complexity: {self.metadata.complexity.value}",
        ]
        return "\n".join(lines)


@dataclass
class CompileResult:
    """Either a CompiledProgram or the reasons one could not be built."""
    success: bool
    program: Optional[CompiledProgram] = None
    error: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def unwrap(self) -> CompiledProgram:
        """Return the program or raise CompileError."""
        if not self.success or self.program is None:
            detail = "; ".join(self.errors) if self.errors else self.error
            raise CompileError(detail or INVALID_STRUCTURE)
        return self.program

    def to_dict(self) -> Dict[str, Any]:
        if self.success and self.program is not None:
            return {"success": True, "program": self.program.to_dict()}
        return {"success": False, "error": self.error, "errors": list(self.errors)}


def _resolve_network(explicit: Optional[Any], flow_network: Optional[Any]) -> str:
    """First recognised network of the argument and the flow, else devnet."""
    for candidate in (explicit, flow_network):
        parsed = Network.parse(candidate)
        if parsed is not None:
            return parsed.value
        if candidate:
            logger.debug("Ignoring unknown network %r", candidate)
    return DEFAULT_NETWORK


def compile_flow(flow: RawFlow, network: Optional[Any] = None, strict: bool = False) -> CompileResult:
    """
    Validate and compile a flow snapshot.

    Args:
        flow: A Flow, its wire mapping, or JSON text
        network: Overrides the flow's own network when given
        strict: Use strict validation (see validate_flow)

    Returns:
        CompileResult; success carries a complete CompiledProgram
    """
    validation = validate_flow(flow, strict=strict)
    if not validation.ok:
        logger.info("Compilation rejected: %s", "; ".join(validation.errors))
        return CompileResult(success=False, error=INVALID_STRUCTURE, errors=validation.errors)

    if isinstance(flow, Flow):
        snapshot = flow
        version = flow.version
    else:
        raw, _ = parse_raw_flow(flow)
        snapshot = Flow.from_dict(raw)
        version = raw.get("version")

    bytecode, instructions = compile_nodes(snapshot.nodes)
    node_count = len(snapshot.nodes)
    edge_count = len(snapshot.edges)

    program = CompiledProgram(
        id=generate_program_id(),
        version=version or DEFAULT_PROGRAM_VERSION,
        network=_resolve_network(network, snapshot.network),
        bytecode=bytecode,
        instructions=tuple(instructions),
        estimated_gas=estimate_gas(snapshot.nodes),
        compiled_at=utc_now_iso(),
        metadata=ProgramMetadata(
            node_count=node_count,
            edge_count=edge_count,
            complexity=estimate_complexity(node_count, edge_count),
        ),
    )
    logger.debug("Compiled %s: %d instruction(s), gas %d", program.id, node_count, program.estimated_gas)
    return CompileResult(success=True, program=program)
