"""
Flow compilation: validation, instruction generation and gas estimation.
"""

from .validator import ValidationResult, validate_flow, INVALID_JSON, INVALID_STRUCTURE
from .compiler import Instruction, compile_nodes, generate_bytecode, generate_instructions
from .estimator import Complexity, estimate_gas, estimate_complexity, complexity_score
from .assembler import CompiledProgram, CompileResult, ProgramMetadata, compile_flow, generate_program_id
from .opcodes import OPCODES, OPERATIONS, GAS_COSTS, DEFAULT_GAS_COST, UNKNOWN_OPERATION, node_gas, node_catalog

__all__ = [
    "ValidationResult",
    "validate_flow",
    "INVALID_JSON",
    "INVALID_STRUCTURE",
    "Instruction",
    "compile_nodes",
    "generate_bytecode",
    "generate_instructions",
    "Complexity",
    "estimate_gas",
    "estimate_complexity",
    "complexity_score",
    "CompiledProgram",
    "CompileResult",
    "ProgramMetadata",
    "compile_flow",
    "generate_program_id",
    "OPCODES",
    "OPERATIONS",
    "GAS_COSTS",
    "DEFAULT_GAS_COST",
    "UNKNOWN_OPERATION",
    "node_gas",
    "node_catalog",
]
