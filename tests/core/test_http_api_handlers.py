"""
Citizen HTTP API — Handlers, Contracts, Status Mapping
=======================================================
Framework-agnostic layer, no Django involved.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api import handlers
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
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    HANDLER_EXECUTION_FAILED,
    INVALID_REQUEST,
    NOT_FOUND,
    http_status_for,
    rejection_response,
    status_for_code,
)
from core.ledger.arithmetic import U64_MAX
from core.runtime.ids import SequentialIdProvider
from core.runtime.platform_runtime import PlatformRuntime
from core.time.clock import FixedClock

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
AUTHORITY = "authority-wallet"
ISSUER = "issuer-wallet"
BUYER = "buyer-wallet"


@pytest.fixture
def deps():
    runtime = PlatformRuntime.in_memory(clock=FixedClock(NOW), id_provider=SequentialIdProvider())
    return HttpApiDependencies(runtime=runtime)


@pytest.fixture
def ready(deps):
    handlers.post_platform_init(SignedHttpRequest(signer=AUTHORITY), deps)
    handlers.post_issuer_add(AddIssuerHttpRequest(signer=AUTHORITY, issuer=ISSUER), deps)
    return deps


def _register(deps, **overrides):
    values = {
        "signer": AUTHORITY,
        "asset_id": "prop-1",
        "name": "Harbour Lofts",
        "total_value": 100_000,
        "total_tokens": 1_000,
        "metadata_uri": "https://example.org/props/1.json",
    }
    values.update(overrides)
    return handlers.post_property_register(RegisterPropertyHttpRequest(**values), deps)


# ══════════════════════════════════════════════════════════════
# CONTRACTS
# ══════════════════════════════════════════════════════════════

class TestContracts:
    def test_signer_header_case_insensitive(self):
        assert signer_from_headers({"x-signer": " wallet-1 "}) == "wallet-1"

    def test_missing_signer_header(self):
        with pytest.raises(ValueError):
            signer_from_headers({"Content-Type": "application/json"})

    def test_blank_signer_header(self):
        with pytest.raises(ValueError):
            signer_from_headers({"X-Signer": "  "})

    def test_quantity_must_be_int(self):
        with pytest.raises(ValueError):
            AcquireSharesHttpRequest(signer=BUYER, asset_id="prop-1", quantity="5")

    def test_bool_is_not_int(self):
        with pytest.raises(ValueError):
            AcquireSharesHttpRequest(signer=BUYER, asset_id="prop-1", quantity=True)

    def test_empty_wallet(self):
        with pytest.raises(ValueError):
            WalletReadRequest(wallet="")


# ══════════════════════════════════════════════════════════════
# STATUS MAPPING
# ══════════════════════════════════════════════════════════════

class TestStatusMapping:
    @pytest.mark.parametrize(
        "code, status",
        [
            (ReasonCode.AUTHORITY_REQUIRED, 403),
            (ReasonCode.UNAUTHORIZED_ISSUER, 403),
            (ReasonCode.INSUFFICIENT_TOKENS_AVAILABLE, 409),
            (ReasonCode.ISSUER_CAPACITY_EXCEEDED, 409),
            (ReasonCode.NO_TOKENS_OWNED, 409),
            (ReasonCode.DUPLICATE_RECORD, 409),
            (ReasonCode.ARITHMETIC_OVERFLOW, 422),
            (ReasonCode.METADATA_FAILED, 422),
            (ReasonCode.INSUFFICIENT_FUNDS, 422),
            (INVALID_REQUEST, 400),
            (NOT_FOUND, 404),
            (HANDLER_EXECUTION_FAILED, 500),
            ("SOMETHING_ELSE", 400),
        ],
    )
    def test_status_for_code(self, code, status):
        assert status_for_code(code) == status

    def test_success_is_200(self):
        assert http_status_for({"ok": True, "data": {}}) == 200

    def test_rejection_response_details(self):
        response = rejection_response(
            RejectionReason(code="NO_TOKENS_OWNED", message="none", policy_name="p"),
        )
        assert response["ok"] is False
        assert response["error"]["details"]["message_key"] == "rejection.no_tokens_owned"
        assert response["error"]["details"]["policy_name"] == "p"


# ══════════════════════════════════════════════════════════════
# HANDLERS
# ══════════════════════════════════════════════════════════════

class TestPlatformHandlers:
    def test_init_returns_committed_result(self, deps):
        response = handlers.post_platform_init(SignedHttpRequest(signer=AUTHORITY), deps)
        assert response["ok"] is True
        data = response["data"]
        assert data["status"] == "ACCEPTED"
        assert data["event_type"] == "platform.registry.initialized.v1"
        assert data["event_hash"]
        assert data["payload"]["authority"] == AUTHORITY

    def test_double_init_is_conflict(self, ready):
        response = handlers.post_platform_init(SignedHttpRequest(signer=AUTHORITY), ready)
        assert response["error"]["code"] == ReasonCode.DUPLICATE_RECORD
        assert response["error"]["details"]["error_type"] == "DuplicateRecordError"
        assert http_status_for(response) == 409

    def test_issuer_add_by_stranger_is_forbidden(self, ready):
        response = handlers.post_issuer_add(
            AddIssuerHttpRequest(signer="stranger", issuer="x"), ready,
        )
        assert http_status_for(response) == 403

    def test_issuer_listing_and_check(self, ready):
        listing = handlers.list_issuers(ready)["data"]
        assert [i["issuer"] for i in listing["issuers"]] == [ISSUER]
        check = handlers.get_issuer_check(WalletReadRequest(wallet=ISSUER), ready)
        assert check["data"]["authorized"] is True

    def test_platform_info(self, ready):
        data = handlers.get_platform_info(ready)["data"]
        assert data["initialized"] is True
        assert data["authorized_issuers"] == [ISSUER]


class TestCredentialHandlers:
    def _issue(self, deps, **overrides):
        values = {
            "signer": ISSUER,
            "student": "student-wallet",
            "student_name": "Ada",
            "course_name": "Rust 101",
            "issuer_name": "Academy",
            "metadata_uri": "https://example.org/c.json",
            "asset_id": "cred-1",
        }
        values.update(overrides)
        return handlers.post_credential_issue(IssueCredentialHttpRequest(**values), deps)

    def test_issue_and_read_back(self, ready):
        assert self._issue(ready)["ok"] is True
        data = handlers.get_credential(AssetReadRequest(asset_id="cred-1"), ready)["data"]
        assert data["student"] == "student-wallet"
        listed = handlers.list_student_credentials(WalletReadRequest(wallet="student-wallet"), ready)
        assert listed["data"]["verified"] is True

    def test_issuer_credentials_listing(self, ready):
        self._issue(ready)
        response = handlers.list_issuer_credentials(WalletReadRequest(wallet=ISSUER), ready)
        assert response["data"]["certificate_count"] == 1
        assert response["data"]["certificates"][0]["asset_id"] == "cred-1"
        empty = handlers.list_issuer_credentials(WalletReadRequest(wallet="stranger"), ready)
        assert empty["data"]["certificate_count"] == 0

    def test_missing_credential_is_404(self, ready):
        response = handlers.get_credential(AssetReadRequest(asset_id="nope"), ready)
        assert http_status_for(response) == 404

    def test_metadata_failure_is_422(self, ready):
        response = self._issue(ready, course_name="Advanced Distributed Systems")
        assert response["error"]["code"] == ReasonCode.METADATA_FAILED
        assert http_status_for(response) == 422


class TestPropertyHandlers:
    def test_register_list_buy_claim(self, ready):
        assert _register(ready)["ok"] is True
        ready.runtime.fund_yield_pool(10_000)

        listing = handlers.list_properties(ready)["data"]
        assert listing["count"] == 1

        bought = handlers.post_property_buy(
            AcquireSharesHttpRequest(signer=BUYER, asset_id="prop-1", quantity=100), ready,
        )
        assert bought["data"]["payload"]["tokens_sold"] == 100

        claimed = handlers.post_property_claim_yield(
            ClaimYieldHttpRequest(signer=BUYER, asset_id="prop-1"), ready,
        )
        assert claimed["data"]["payload"]["user_share"] == 100

        holdings = handlers.get_wallet_holdings(WalletReadRequest(wallet=BUYER), ready)["data"]
        assert holdings["holdings"][0]["ownership_bps"] == 1_000
        assert holdings["holdings"][0]["yield_claimed"] == 100

        dashboard = handlers.get_wallet_dashboard(WalletReadRequest(wallet=BUYER), ready)["data"]
        assert dashboard["liquid_balance"] == 100
        assert dashboard["total_yield_claimed"] == 100

    def test_zero_tokens_is_invalid_request(self, ready):
        response = _register(ready, total_tokens=0)
        assert response["error"]["code"] == INVALID_REQUEST
        assert http_status_for(response) == 400

    def test_unknown_property_is_404(self, ready):
        response = handlers.get_property(AssetReadRequest(asset_id="missing"), ready)
        assert response["error"]["code"] == NOT_FOUND

    def test_unexpected_error_is_500(self, ready, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(ready.runtime, "acquire_shares", explode)
        response = handlers.post_property_buy(
            AcquireSharesHttpRequest(signer=BUYER, asset_id="prop-1", quantity=1), ready,
        )
        assert response["error"]["code"] == HANDLER_EXECUTION_FAILED
        assert response["error"]["details"]["error_type"] == "RuntimeError"

    def test_property_buyers(self, ready):
        _register(ready)
        handlers.post_property_buy(
            AcquireSharesHttpRequest(signer=BUYER, asset_id="prop-1", quantity=30), ready,
        )
        response = handlers.get_property_buyers(AssetReadRequest(asset_id="prop-1"), ready)
        assert response["data"]["buyers"] == {BUYER: 30}
        assert response["data"]["buyer_count"] == 1

        missing = handlers.get_property_buyers(AssetReadRequest(asset_id="missing"), ready)
        assert http_status_for(missing) == 404

    def test_holdings_survive_overflowing_estimate(self, ready):
        _register(ready, total_value=U64_MAX, total_tokens=U64_MAX)
        handlers.post_property_buy(
            AcquireSharesHttpRequest(signer=BUYER, asset_id="prop-1", quantity=200), ready,
        )

        holdings = handlers.get_wallet_holdings(WalletReadRequest(wallet=BUYER), ready)
        assert holdings["ok"] is True
        assert holdings["data"]["holdings"][0]["estimated_monthly_yield"] is None

        dashboard = handlers.get_wallet_dashboard(WalletReadRequest(wallet=BUYER), ready)
        assert http_status_for(dashboard) == 200
        assert dashboard["data"]["property_count"] == 1
