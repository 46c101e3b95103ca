"""
Citizen HTTP API - Contracts
============================
Framework-agnostic request/response DTOs for platform endpoints.

Write requests carry the signer, taken from the X-Signer header by
the adapter. Field validation here covers transport shape only; the
engine request dataclasses own the domain checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

SIGNER_HEADER = "X-Signer"


def signer_from_headers(headers: Optional[Mapping[str, Any]]) -> str:
    for key, value in (headers or {}).items():
        if str(key).strip().lower() != SIGNER_HEADER.lower():
            continue
        signer = str(value).strip()
        if signer:
            return signer
        break
    raise ValueError(f"{SIGNER_HEADER} header is required.")


def _require_text(value: Any, field_name: str) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")


def _require_int(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer.")


@dataclass(frozen=True)
class SignedHttpRequest:
    signer: str

    def __post_init__(self):
        _require_text(self.signer, "signer")


@dataclass(frozen=True)
class AddIssuerHttpRequest:
    signer: str
    issuer: str

    def __post_init__(self):
        _require_text(self.signer, "signer")
        _require_text(self.issuer, "issuer")


@dataclass(frozen=True)
class IssueCredentialHttpRequest:
    signer: str
    student: str
    student_name: str
    course_name: str
    issuer_name: str
    metadata_uri: str
    asset_id: Optional[str] = None

    def __post_init__(self):
        _require_text(self.signer, "signer")
        _require_text(self.student, "student")
        for name in ("student_name", "course_name", "issuer_name", "metadata_uri"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string.")
        if self.asset_id is not None:
            _require_text(self.asset_id, "asset_id")


@dataclass(frozen=True)
class RegisterPropertyHttpRequest:
    signer: str
    asset_id: str
    name: str
    total_value: int
    total_tokens: int
    metadata_uri: str

    def __post_init__(self):
        _require_text(self.signer, "signer")
        _require_text(self.asset_id, "asset_id")
        _require_text(self.name, "name")
        _require_int(self.total_value, "total_value")
        _require_int(self.total_tokens, "total_tokens")
        if not isinstance(self.metadata_uri, str):
            raise ValueError("metadata_uri must be a string.")


@dataclass(frozen=True)
class AcquireSharesHttpRequest:
    signer: str
    asset_id: str
    quantity: int

    def __post_init__(self):
        _require_text(self.signer, "signer")
        _require_text(self.asset_id, "asset_id")
        _require_int(self.quantity, "quantity")


@dataclass(frozen=True)
class ClaimYieldHttpRequest:
    signer: str
    asset_id: str

    def __post_init__(self):
        _require_text(self.signer, "signer")
        _require_text(self.asset_id, "asset_id")


@dataclass(frozen=True)
class AssetReadRequest:
    asset_id: str

    def __post_init__(self):
        _require_text(self.asset_id, "asset_id")


@dataclass(frozen=True)
class WalletReadRequest:
    wallet: str

    def __post_init__(self):
        _require_text(self.wallet, "wallet")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
