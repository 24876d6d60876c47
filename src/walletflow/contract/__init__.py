"""JSON contract generation and validation."""

from .generator import (
    ContractValidation,
    generate_contract,
    validate_contract,
    function_name,
    CONTRACT_TYPE,
    CONTRACT_VERSION,
)
