"""
Contract validation package.

Validates received params against declarative contracts and reports
per-field errors. Provides the validation engine, the stock primitive
checks, and the @api_contract / @operation decorators.
"""

from .errors import (
    ContractViolation,
    ContractError,
    MalformedNestedLookup,
    ContractDepthExceeded,
)
from .config import MissingInnerPolicy
from .outcome import VALID, Invalid, CheckOutcome
from .schema import FieldSpec, Contract, build_contract
from .received import Found, MISSING, lookup
from .registry import (
    CheckRegistry,
    Primitive,
    Structural,
    default_registry,
    SchemaMode,
    EndpointContract,
    register_contract,
    get_contract,
    list_contracts,
    set_contract_mode,
    set_global_mode,
    CONTRACTS,
)
from .report import ValidationReport, ValidationResult, consolidate, errors_message
from .validate import Validator, validate, valid
from .wrapper import api_contract
from .operation import operation

__all__ = [
    'ContractViolation',
    'ContractError',
    'MalformedNestedLookup',
    'ContractDepthExceeded',
    'MissingInnerPolicy',
    'VALID',
    'Invalid',
    'CheckOutcome',
    'FieldSpec',
    'Contract',
    'build_contract',
    'Found',
    'MISSING',
    'lookup',
    'CheckRegistry',
    'Primitive',
    'Structural',
    'default_registry',
    'SchemaMode',
    'EndpointContract',
    'register_contract',
    'get_contract',
    'list_contracts',
    'set_contract_mode',
    'set_global_mode',
    'CONTRACTS',
    'ValidationReport',
    'ValidationResult',
    'consolidate',
    'errors_message',
    'Validator',
    'validate',
    'valid',
    'api_contract',
    'operation',
]
