"""
@api_contract decorator - applies contract validation to Flask route handlers.

Usage:
    @bp.route("/orders", methods=["POST"])
    @api_contract("create_order")
    def create_order():
        params = g.validated_params
        ...

The decorator:
1. Resolves the contract (a registered name, an EndpointContract, or a raw contract)
2. Collects params from the query string and the JSON or form body
3. Validates them; STRICT mode returns 400 with the per-field report,
   WARN mode logs the violation and continues
4. Exposes the params and the ValidationResult on flask.g
5. Tags the response with the request id
"""

import functools
import logging
import uuid
from typing import Any, Callable, Dict, Optional, Tuple, Union

from flask import Response, g, jsonify, make_response, request

from .registry import EndpointContract, SchemaMode, get_contract
from .report import ValidationResult
from .validate import Validator, default_validator

logger = logging.getLogger('paramcontract.wrapper')

ContractRef = Union[str, EndpointContract, Any]

BODY_METHODS = ('POST', 'PUT', 'PATCH')


def api_contract(contract_ref: ContractRef, *, validator: Optional[Validator] = None):
    """
    Decorator that enforces a parameter contract on a route handler.

    Args:
        contract_ref: Registered contract name, an EndpointContract, or a
            contract (list of field specs) validated in STRICT mode
        validator: Validator to use (default: stock checks)

    Returns:
        Decorated function with contract enforcement
    """
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs) -> Union[Response, Tuple[Response, int]]:
            request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
            g.request_id = request_id

            contract = _resolve_contract(contract_ref)
            if contract is None:
                # No contract registered - pass through without enforcement
                logger.debug(f"No contract '{contract_ref}', passing through")
                return fn(*args, **kwargs)

            params = _request_params()
            result = (validator or default_validator()).valid(contract.contract, params)

            g.validated_params = params
            g.contract = contract
            g.validation_result = result

            if not result:
                if contract.mode == SchemaMode.STRICT:
                    return _violation_response(contract, result, request_id)
                _log_violation(contract.name, result, request_id)

            response = make_response(fn(*args, **kwargs))
            response.headers['X-Request-ID'] = request_id
            response.headers['X-API-Contract-Version'] = contract.version
            return response

        return wrapper
    return decorator


def _resolve_contract(contract_ref: ContractRef) -> Optional[EndpointContract]:
    if isinstance(contract_ref, EndpointContract):
        return contract_ref
    if isinstance(contract_ref, str):
        return get_contract(contract_ref)
    return EndpointContract(name=getattr(contract_ref, '__name__', 'inline'),
                            contract=contract_ref, mode=SchemaMode.STRICT)


def _request_params() -> Dict[str, Any]:
    """
    Received params for one request.

    Query string first, then the body (JSON object or form fields) on
    top, so body values win on conflicting names.
    """
    params: Dict[str, Any] = request.args.to_dict()
    if request.method not in BODY_METHODS:
        return params

    if request.is_json:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            params.update(body)
        elif body is not None:
            logger.debug(f"Ignoring non-object JSON body ({type(body).__name__})")
    else:
        params.update(request.form.to_dict())
    return params


def _violation_response(
    contract: EndpointContract,
    result: ValidationResult,
    request_id: str,
) -> Tuple[Response, int]:
    """400 envelope carrying the per-field report."""
    response = jsonify({
        "error": {
            "code": "CONTRACT_VIOLATION",
            "message": f"{len(result.errors)} param validation error(s)",
            "contract": contract.name,
            "requestId": request_id,
            "details": result.to_dict(),
        }
    })
    response.headers['X-Request-ID'] = request_id
    response.headers['X-API-Contract-Version'] = contract.version
    return response, 400


def _log_violation(name: str, result: ValidationResult, request_id: str) -> None:
    """Log contract violation for observability."""
    logger.warning(
        f"Contract violation: contract={name} request_id={request_id} "
        f"fields={sorted(map(str, result.errors))}",
        extra={
            "event": "contract_violation",
            "contract": name,
            "request_id": request_id,
            "details": result.to_dict(),
        }
    )
