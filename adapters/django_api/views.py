"""
Citizen Django Adapter Views
============================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    AcquireSharesHttpRequest,
    AddIssuerHttpRequest,
    AssetReadRequest,
    ClaimYieldHttpRequest,
    IssueCredentialHttpRequest,
    RegisterPropertyHttpRequest,
    SignedHttpRequest,
    WalletReadRequest,
    signer_from_headers,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
    http_status_for,
)
from core.http_api.handlers import (
    get_credential,
    get_issuer_check,
    get_platform_info,
    get_property,
    get_property_buyers,
    get_wallet_dashboard,
    get_wallet_holdings,
    list_issuers,
    list_issuer_credentials,
    list_properties,
    list_student_credentials,
    post_credential_issue,
    post_issuer_add,
    post_platform_init,
    post_property_buy,
    post_property_claim_yield,
    post_property_register,
)


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _respond(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=http_status_for(payload))


def _json_error(code: str, message: str) -> JsonResponse:
    return _respond(error_response(code=code, message=message, details={}))


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(METHOD_NOT_ALLOWED, "Method not allowed for this endpoint.")


def _dispatch_write(write_handler, request_contract_factory, request: HttpRequest):
    try:
        body = _parse_json_body(request)
        signer = signer_from_headers(_headers_from_request(request))
        contract = request_contract_factory(body=body, signer=signer)
    except KeyError as exc:
        return _json_error(INVALID_REQUEST, f"Missing field: {exc.args[0]}.")
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc))

    return _respond(write_handler(contract, build_dependencies()))


def _dispatch_read(read_handler, contract_factory=None) -> JsonResponse:
    if contract_factory is None:
        return _respond(read_handler(build_dependencies()))
    try:
        contract = contract_factory()
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc))
    return _respond(read_handler(contract, build_dependencies()))


# ── Contract factories ────────────────────────────────────────

def _init_contract_factory(*, body, signer):
    return SignedHttpRequest(signer=signer)


def _add_issuer_contract_factory(*, body, signer):
    return AddIssuerHttpRequest(signer=signer, issuer=body["issuer"])


def _issue_credential_contract_factory(*, body, signer):
    return IssueCredentialHttpRequest(
        signer=signer,
        student=body["student"],
        student_name=body["student_name"],
        course_name=body["course_name"],
        issuer_name=body["issuer_name"],
        metadata_uri=body["metadata_uri"],
        asset_id=body.get("asset_id"),
    )


def _register_property_contract_factory(*, body, signer):
    return RegisterPropertyHttpRequest(
        signer=signer,
        asset_id=body["asset_id"],
        name=body["name"],
        total_value=body["total_value"],
        total_tokens=body["total_tokens"],
        metadata_uri=body["metadata_uri"],
    )


def _buy_contract_factory(*, body, signer):
    return AcquireSharesHttpRequest(
        signer=signer,
        asset_id=body["asset_id"],
        quantity=body["quantity"],
    )


def _claim_yield_contract_factory(*, body, signer):
    return ClaimYieldHttpRequest(signer=signer, asset_id=body["asset_id"])


# ── Platform / issuers ────────────────────────────────────────

@csrf_exempt
def platform_info_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_platform_info)


@csrf_exempt
def platform_init_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_platform_init, _init_contract_factory, request)


@csrf_exempt
def issuers_add_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_issuer_add, _add_issuer_contract_factory, request)


@csrf_exempt
def issuers_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(list_issuers)


@csrf_exempt
def issuers_check_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(
        get_issuer_check,
        lambda: WalletReadRequest(wallet=request.GET.get("issuer", "")),
    )


# ── Credentials ───────────────────────────────────────────────

@csrf_exempt
def credentials_issue_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_credential_issue,
        _issue_credential_contract_factory,
        request,
    )


@csrf_exempt
def credential_detail_view(request: HttpRequest, asset_id: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_credential, lambda: AssetReadRequest(asset_id=asset_id))


@csrf_exempt
def student_credentials_view(request: HttpRequest, wallet: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(list_student_credentials, lambda: WalletReadRequest(wallet=wallet))


@csrf_exempt
def issuer_credentials_view(request: HttpRequest, issuer: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(list_issuer_credentials, lambda: WalletReadRequest(wallet=issuer))


# ── Properties ────────────────────────────────────────────────

@csrf_exempt
def properties_register_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_property_register,
        _register_property_contract_factory,
        request,
    )


@csrf_exempt
def properties_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(list_properties)


@csrf_exempt
def property_detail_view(request: HttpRequest, asset_id: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_property, lambda: AssetReadRequest(asset_id=asset_id))


@csrf_exempt
def property_buyers_view(request: HttpRequest, asset_id: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_property_buyers, lambda: AssetReadRequest(asset_id=asset_id))


@csrf_exempt
def properties_buy_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_property_buy, _buy_contract_factory, request)


@csrf_exempt
def properties_claim_yield_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_property_claim_yield,
        _claim_yield_contract_factory,
        request,
    )


# ── Wallets ───────────────────────────────────────────────────

@csrf_exempt
def wallet_holdings_view(request: HttpRequest, wallet: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_wallet_holdings, lambda: WalletReadRequest(wallet=wallet))


@csrf_exempt
def wallet_dashboard_view(request: HttpRequest, wallet: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_wallet_dashboard, lambda: WalletReadRequest(wallet=wallet))
