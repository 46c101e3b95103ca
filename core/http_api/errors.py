"""
Citizen HTTP API - Error Mapping
================================
Stable transport error mapping for platform errors and handler failures.

    AuthorizationError                         → 403
    CapacityError, StateError, DuplicateRecord → 409
    ArithmeticOverflowError, ExternalCallError → 422
    malformed request                          → 400
"""

from __future__ import annotations

from typing import Any, Optional, Type

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.ledger.errors import (
    REJECTION_ERROR_CLASSES,
    ArithmeticOverflowError,
    AuthorizationError,
    CapacityError,
    DuplicateRecordError,
    ExternalCallError,
    InsufficientFundsError,
    MetadataError,
    MintError,
    PlatformError,
    StateError,
)

INVALID_REQUEST = "INVALID_REQUEST"
NOT_FOUND = "NOT_FOUND"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
HANDLER_EXECUTION_FAILED = "HANDLER_EXECUTION_FAILED"

ERROR_CLASS_STATUS = (
    (AuthorizationError, 403),
    (CapacityError, 409),
    (StateError, 409),
    (DuplicateRecordError, 409),
    (ArithmeticOverflowError, 422),
    (ExternalCallError, 422),
)

ERROR_CLASS_BY_CODE: dict[str, Type[PlatformError]] = {
    **REJECTION_ERROR_CLASSES,
    ReasonCode.DUPLICATE_RECORD: DuplicateRecordError,
    ReasonCode.ARITHMETIC_OVERFLOW: ArithmeticOverflowError,
    ReasonCode.MINT_FAILED: MintError,
    ReasonCode.METADATA_FAILED: MetadataError,
    ReasonCode.INSUFFICIENT_FUNDS: InsufficientFundsError,
}

TRANSPORT_STATUS = {
    INVALID_REQUEST: 400,
    NOT_FOUND: 404,
    METHOD_NOT_ALLOWED: 405,
    HANDLER_EXECUTION_FAILED: 500,
}


def status_for_error_class(error_class: Type[BaseException]) -> int:
    for base, status in ERROR_CLASS_STATUS:
        if issubclass(error_class, base):
            return status
    return 422


def status_for_code(code: str) -> int:
    if code in TRANSPORT_STATUS:
        return TRANSPORT_STATUS[code]
    error_class = ERROR_CLASS_BY_CODE.get(code)
    if error_class is None:
        return 400
    return status_for_error_class(error_class)


def http_status_for(response: dict[str, Any]) -> int:
    """HTTP status for a handler envelope."""
    if response.get("ok"):
        return 200
    return status_for_code(response.get("error", {}).get("code", INVALID_REQUEST))


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={
            "policy_name": reason.policy_name,
            "message_key": f"rejection.{reason.code.lower()}",
        },
    )


def rejection_response(
    reason: RejectionReason,
    *,
    extra_details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    details = dict(mapped.details)
    if extra_details:
        details.update(extra_details)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=details,
    )


def platform_error_response(exc: PlatformError) -> dict[str, Any]:
    return rejection_response(
        exc.reason,
        extra_details={"error_type": type(exc).__name__},
    )
