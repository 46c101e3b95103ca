"""
Citizen HTTP API - Public API
=============================
"""

from core.http_api.contracts import (
    SIGNER_HEADER,
    AcquireSharesHttpRequest,
    AddIssuerHttpRequest,
    AssetReadRequest,
    ClaimYieldHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    IssueCredentialHttpRequest,
    RegisterPropertyHttpRequest,
    SignedHttpRequest,
    WalletReadRequest,
    signer_from_headers,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    http_status_for,
    map_rejection_reason,
    platform_error_response,
    rejection_response,
    status_for_code,
    success_response,
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

__all__ = [
    "SIGNER_HEADER",
    "signer_from_headers",
    "SignedHttpRequest",
    "AddIssuerHttpRequest",
    "IssueCredentialHttpRequest",
    "RegisterPropertyHttpRequest",
    "AcquireSharesHttpRequest",
    "ClaimYieldHttpRequest",
    "AssetReadRequest",
    "WalletReadRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "map_rejection_reason",
    "rejection_response",
    "platform_error_response",
    "status_for_code",
    "http_status_for",
    "get_platform_info",
    "post_platform_init",
    "post_issuer_add",
    "list_issuers",
    "get_issuer_check",
    "post_credential_issue",
    "get_credential",
    "list_student_credentials",
    "list_issuer_credentials",
    "post_property_register",
    "list_properties",
    "get_property",
    "get_property_buyers",
    "post_property_buy",
    "post_property_claim_yield",
    "get_wallet_holdings",
    "get_wallet_dashboard",
]
