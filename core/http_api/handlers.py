"""
Citizen HTTP API - Framework-Agnostic Handlers
==============================================
Pure handler functions over contracts and injected dependencies.

Every handler returns the {"ok": ..., "data"|"error": ...} envelope.
Platform errors become rejection envelopes; malformed input becomes
INVALID_REQUEST.
"""

from __future__ import annotations

import logging
from typing import Any

from core.http_api.contracts import (
    AcquireSharesHttpRequest,
    AddIssuerHttpRequest,
    AssetReadRequest,
    ClaimYieldHttpRequest,
    IssueCredentialHttpRequest,
    RegisterPropertyHttpRequest,
    SignedHttpRequest,
    WalletReadRequest,
)
from core.http_api.errors import (
    HANDLER_EXECUTION_FAILED,
    INVALID_REQUEST,
    NOT_FOUND,
    error_response,
    platform_error_response,
    success_response,
)
from core.ledger.errors import PlatformError

logger = logging.getLogger("citizen.http")


# ══════════════════════════════════════════════════════════════
# WRITE HELPERS
# ══════════════════════════════════════════════════════════════

def _write_result_response(command_result) -> dict[str, Any]:
    journal_entry = command_result.journal_entry or {}
    correlation_id = journal_entry.get("correlation_id")
    return success_response(
        {
            "status": command_result.outcome.status.value,
            "command_id": str(command_result.outcome.command_id),
            "event_type": command_result.execution_result["event_type"],
            "correlation_id": str(correlation_id) if correlation_id else None,
            "event_hash": journal_entry.get("event_hash"),
            "payload": command_result.payload,
        }
    )


def _run_write(write_call) -> dict[str, Any]:
    try:
        command_result = write_call()
    except PlatformError as exc:
        return platform_error_response(exc)
    except (ValueError, TypeError) as exc:
        return error_response(
            code=INVALID_REQUEST,
            message=str(exc),
            details={},
        )
    except Exception as exc:
        logger.exception("Platform command failed unexpectedly")
        return error_response(
            code=HANDLER_EXECUTION_FAILED,
            message="Failed to execute platform command.",
            details={"error_type": type(exc).__name__},
        )
    return _write_result_response(command_result)


def _not_found(kind: str, key: str) -> dict[str, Any]:
    return error_response(
        code=NOT_FOUND,
        message=f"{kind} '{key}' not found.",
        details={},
    )


# ══════════════════════════════════════════════════════════════
# PLATFORM / ISSUERS
# ══════════════════════════════════════════════════════════════

def get_platform_info(dependencies) -> dict[str, Any]:
    return success_response(dependencies.runtime.platform_info())


def post_platform_init(request: SignedHttpRequest, dependencies) -> dict[str, Any]:
    return _run_write(lambda: dependencies.runtime.init_platform(request.signer))


def post_issuer_add(request: AddIssuerHttpRequest, dependencies) -> dict[str, Any]:
    return _run_write(
        lambda: dependencies.runtime.add_issuer(request.signer, request.issuer)
    )


def list_issuers(dependencies) -> dict[str, Any]:
    runtime = dependencies.runtime
    return success_response(
        {
            "issuers": runtime.list_issuers(),
            "max_issuers": runtime.context.limits.max_issuers,
        }
    )


def get_issuer_check(request: WalletReadRequest, dependencies) -> dict[str, Any]:
    return success_response(
        {
            "issuer": request.wallet,
            "authorized": dependencies.runtime.is_authorized_issuer(request.wallet),
        }
    )


# ══════════════════════════════════════════════════════════════
# CREDENTIALS
# ══════════════════════════════════════════════════════════════

def post_credential_issue(request: IssueCredentialHttpRequest, dependencies) -> dict[str, Any]:
    return _run_write(
        lambda: dependencies.runtime.issue_credential(
            request.signer,
            student=request.student,
            student_name=request.student_name,
            course_name=request.course_name,
            issuer_name=request.issuer_name,
            metadata_uri=request.metadata_uri,
            asset_id=request.asset_id,
        )
    )


def get_credential(request: AssetReadRequest, dependencies) -> dict[str, Any]:
    certificate = dependencies.runtime.get_certificate(request.asset_id)
    if certificate is None:
        return _not_found("Credential", request.asset_id)
    return success_response(certificate)


def list_student_credentials(request: WalletReadRequest, dependencies) -> dict[str, Any]:
    return success_response(dependencies.runtime.verify_student(request.wallet))


def list_issuer_credentials(request: WalletReadRequest, dependencies) -> dict[str, Any]:
    certificates = dependencies.runtime.certificates_issued_by(request.wallet)
    return success_response(
        {
            "issuer": request.wallet,
            "certificates": certificates,
            "certificate_count": len(certificates),
        }
    )


# ══════════════════════════════════════════════════════════════
# PROPERTIES / YIELD
# ══════════════════════════════════════════════════════════════

def post_property_register(request: RegisterPropertyHttpRequest, dependencies) -> dict[str, Any]:
    return _run_write(
        lambda: dependencies.runtime.register_property(
            request.signer,
            asset_id=request.asset_id,
            name=request.name,
            total_value=request.total_value,
            total_tokens=request.total_tokens,
            metadata_uri=request.metadata_uri,
        )
    )


def list_properties(dependencies) -> dict[str, Any]:
    properties = dependencies.runtime.list_properties()
    return success_response({"properties": properties, "count": len(properties)})


def get_property(request: AssetReadRequest, dependencies) -> dict[str, Any]:
    prop = dependencies.runtime.get_property(request.asset_id)
    if prop is None:
        return _not_found("Property", request.asset_id)
    return success_response(prop)


def get_property_buyers(request: AssetReadRequest, dependencies) -> dict[str, Any]:
    buyers = dependencies.runtime.property_buyers(request.asset_id)
    if buyers is None:
        return _not_found("Property", request.asset_id)
    return success_response(buyers)


def post_property_buy(request: AcquireSharesHttpRequest, dependencies) -> dict[str, Any]:
    return _run_write(
        lambda: dependencies.runtime.acquire_shares(
            request.signer,
            asset_id=request.asset_id,
            quantity=request.quantity,
        )
    )


def post_property_claim_yield(request: ClaimYieldHttpRequest, dependencies) -> dict[str, Any]:
    return _run_write(
        lambda: dependencies.runtime.claim_yield(request.signer, asset_id=request.asset_id)
    )


# ══════════════════════════════════════════════════════════════
# WALLETS
# ══════════════════════════════════════════════════════════════

def get_wallet_holdings(request: WalletReadRequest, dependencies) -> dict[str, Any]:
    return success_response(dependencies.runtime.holdings_of(request.wallet))


def get_wallet_dashboard(request: WalletReadRequest, dependencies) -> dict[str, Any]:
    return success_response(dependencies.runtime.dashboard(request.wallet))
