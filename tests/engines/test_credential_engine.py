"""
Citizen Credential Engine — Issuance Tests
===========================================
Credential record + single-unit mint + metadata + counter, all or nothing.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.commands.rejection import ReasonCode
from core.ledger.errors import (
    AuthorizationError,
    CapacityError,
    DuplicateRecordError,
    MetadataError,
)
from core.ledger.address import certificate_address
from core.runtime.ids import SequentialIdProvider
from core.runtime.platform_runtime import PlatformRuntime
from core.time.clock import FixedClock, unix_timestamp
from engines.credential.commands import CREDENTIAL_ISSUE_REQUEST, IssueCredentialRequest
from engines.credential.events import CREDENTIAL_ISSUED_V1
from engines.credential.services import CredentialProjectionStore, credential_metadata

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
AUTHORITY = "authority-wallet"
ISSUER = "issuer-wallet"
STUDENT = "student-wallet"
URI = "https://example.org/credentials/1.json"


@pytest.fixture
def runtime():
    rt = PlatformRuntime.in_memory(clock=FixedClock(NOW), id_provider=SequentialIdProvider())
    rt.init_platform(AUTHORITY)
    rt.add_issuer(AUTHORITY, ISSUER)
    return rt


def _issue(runtime, signer=ISSUER, **overrides):
    values = {
        "student": STUDENT,
        "student_name": "Ada",
        "course_name": "Rust 101",
        "issuer_name": "Academy",
        "metadata_uri": URI,
        "asset_id": "cred-1",
    }
    values.update(overrides)
    return runtime.issue_credential(signer, **values)


class TestIssueCredentialRequest:
    def test_to_command(self):
        request = IssueCredentialRequest(
            student=STUDENT, student_name="Ada", course_name="Rust 101",
            issuer_name="Academy", metadata_uri=URI, asset_id="cred-1",
            actor_id=ISSUER, issued_at=NOW,
        )
        cmd = request.to_command()
        assert cmd["command_type"] == CREDENTIAL_ISSUE_REQUEST
        assert cmd["source_engine"] == "credential"
        assert cmd["payload"]["asset_id"] == "cred-1"

    def test_missing_student_rejected(self):
        with pytest.raises(ValueError):
            IssueCredentialRequest(
                student="", student_name="Ada", course_name="Rust 101",
                issuer_name="Academy", metadata_uri=URI, asset_id="cred-1",
                actor_id=ISSUER, issued_at=NOW,
            )


class TestCredentialMetadata:
    def test_descriptor_shape(self):
        descriptor = credential_metadata("Rust 101", "EDU", URI, ISSUER)
        assert descriptor.name == "Rust 101 Certificate"
        assert descriptor.symbol == "EDU"
        assert descriptor.seller_fee_basis_points == 0
        assert len(descriptor.creators) == 1
        assert descriptor.creators[0].address == ISSUER
        assert descriptor.creators[0].verified is True
        assert descriptor.creators[0].share == 100
        assert descriptor.collection is None
        assert descriptor.uses is None
        assert descriptor.is_mutable is True


class TestIssueCredential:
    def test_issue_writes_all_effects(self, runtime):
        result = _issue(runtime)

        credential = runtime.context.get_credential("cred-1")
        assert credential.student == STUDENT
        assert credential.issuer == ISSUER
        assert credential.mint_time == unix_timestamp(NOW)
        assert runtime.context.minter.balance_of("cred-1", STUDENT) == 1
        assert runtime.context.minter.get_asset("cred-1").supply == 1
        assert runtime.context.metadata.get("cred-1").descriptor.name == "Rust 101 Certificate"
        assert runtime.context.registry().total_certificates == 1

        assert result.payload["certificate_address"] == certificate_address("cred-1")
        assert result.payload["total_certificates"] == 1
        assert result.journal_entry["event_type"] == CREDENTIAL_ISSUED_V1

    def test_generated_asset_id(self, runtime):
        result = runtime.issue_credential(
            ISSUER, student=STUDENT, student_name="Ada", course_name="Rust 101",
            issuer_name="Academy", metadata_uri=URI,
        )
        assert result.payload["asset_id"].startswith("cred-")

    def test_unlisted_issuer_rejected_without_effects(self, runtime):
        with pytest.raises(AuthorizationError) as exc_info:
            _issue(runtime, signer="stranger")

        assert exc_info.value.code == ReasonCode.UNAUTHORIZED_ISSUER
        assert runtime.context.get_credential("cred-1") is None
        assert runtime.context.registry().total_certificates == 0

    def test_same_asset_twice_rejected(self, runtime):
        _issue(runtime)
        with pytest.raises(DuplicateRecordError):
            _issue(runtime, student="other-student")
        assert runtime.context.registry().total_certificates == 1
        assert runtime.context.minter.balance_of("cred-1", "other-student") == 0

    def test_field_over_cap_rejected(self, runtime):
        with pytest.raises(CapacityError) as exc_info:
            _issue(runtime, student_name="x" * 101)
        assert exc_info.value.code == ReasonCode.FIELD_TOO_LONG

    def test_metadata_failure_rolls_back_everything(self, runtime):
        # "<course> Certificate" overflows the 32-byte metadata name
        with pytest.raises(MetadataError):
            _issue(runtime, course_name="Advanced Distributed Systems")

        assert runtime.context.get_credential("cred-1") is None
        assert runtime.context.minter.get_asset("cred-1") is None
        assert runtime.context.minter.balance_of("cred-1", STUDENT) == 0
        assert runtime.context.registry().total_certificates == 0
        assert runtime.certificates_of(STUDENT) == []

    def test_get_certificate_query(self, runtime):
        _issue(runtime)
        data = runtime.get_certificate("cred-1")
        assert data["course_name"] == "Rust 101"
        assert data["holder_balance"] == 1
        assert data["metadata"]["creators"][0]["address"] == ISSUER
        assert runtime.get_certificate("missing") is None


class TestCredentialProjection:
    def test_indexes_by_student_and_issuer(self, runtime):
        _issue(runtime, asset_id="cred-1")
        _issue(runtime, asset_id="cred-2", course_name="Go 101")

        projection = runtime.credential_projection
        assert [c["asset_id"] for c in projection.certificates_of(STUDENT)] == ["cred-1", "cred-2"]
        assert len(projection.certificates_issued_by(ISSUER)) == 2

    def test_runtime_lists_certificates_by_issuer(self, runtime):
        _issue(runtime, asset_id="cred-1")
        assert [c["asset_id"] for c in runtime.certificates_issued_by(ISSUER)] == ["cred-1"]
        assert runtime.certificates_issued_by("stranger") == []

    def test_verify_student(self, runtime):
        assert runtime.verify_student(STUDENT)["verified"] is False
        _issue(runtime)
        summary = runtime.verify_student(STUDENT)
        assert summary["verified"] is True
        assert summary["certificate_count"] == 1

    def test_truncate(self):
        projection = CredentialProjectionStore()
        projection.apply(CREDENTIAL_ISSUED_V1, {
            "asset_id": "c", "student": "s", "issuer": "i", "student_name": "S",
            "course_name": "C", "issuer_name": "I", "metadata_uri": URI,
            "mint_time": 0, "certificate_address": "addr",
        })
        assert projection.get_certificate("c")["student"] == "s"
        projection.truncate()
        assert projection.event_count == 0
        assert projection.get_certificate("c") is None
