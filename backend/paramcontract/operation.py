"""
@operation decorator - validates call arguments before a plain callable runs.

Positional and keyword arguments are bound to parameter names (defaults
applied) and validated as one received set.

Usage:
    @operation([{"name": "amount", "checks": {"required": True, "type": "integer"}}])
    def charge(amount, currency="SGD"):
        ...

    charge(10)            # ok
    charge(amount="ten")  # raises ContractViolation
"""

import functools
import inspect
import logging
from typing import Any, Callable, Dict, Iterable, Optional

from .schema import build_contract
from .validate import Validator, default_validator

logger = logging.getLogger('paramcontract.operation')


def operation(contract: Iterable[Any], *, validator: Optional[Validator] = None):
    """
    Args:
        contract: Field specs the call arguments must satisfy, by parameter name
        validator: Validator to use (default: stock checks)

    Raises (from the decorated callable):
        ContractViolation: If the call arguments fail validation
    """
    built = build_contract(contract)

    def decorator(fn: Callable) -> Callable:
        signature = inspect.signature(fn)

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            params = _bind_params(signature, args, kwargs)
            result = (validator or default_validator()).valid(built, params)
            if not result:
                logger.info(f"Operation {fn.__name__} rejected: {result.message()}")
                result.raise_for_errors(f"Invalid params for {fn.__name__}")
            return fn(*args, **kwargs)

        wrapper.contract = built
        return wrapper
    return decorator


def _bind_params(signature: inspect.Signature, args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Map positional and keyword arguments to parameter names, defaults included."""
    # Partial binding leaves missing arguments for `required` to report
    bound = signature.bind_partial(*args, **kwargs)
    bound.apply_defaults()

    params: Dict[str, Any] = {}
    for name, value in bound.arguments.items():
        kind = signature.parameters[name].kind
        if kind is inspect.Parameter.VAR_KEYWORD:
            params.update(value)
        else:
            params[name] = value
    return params
