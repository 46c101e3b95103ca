"""
Citizen Credential Engine — Service Layer
==========================================
Issuance writes the Credential, mints exactly one unit to the student,
attaches metadata and bumps total_certificates. All four happen in the
bus transaction, so a failed mint or attach leaves no trace.

The projection indexes issued credentials by student and issuer.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from core.assets.metadata import Creator, MetadataDescriptor
from core.commands.rejection import ReasonCode
from core.ledger.address import certificate_address
from core.ledger.arithmetic import checked_add
from core.ledger.errors import StateError
from core.primitives.records import Credential
from core.time.clock import unix_timestamp
from engines.credential.commands import CREDENTIAL_ISSUE_REQUEST
from engines.credential.events import (
    COMMAND_TO_EVENT_TYPE,
    CREDENTIAL_ISSUED_V1,
    PAYLOAD_BUILDERS,
)

logger = logging.getLogger("citizen.engines")

CERTIFICATE_NAME_SUFFIX = " Certificate"


def credential_metadata(course_name: str, symbol: str, uri: str, issuer: str) -> MetadataDescriptor:
    """Descriptor attached to every credential asset."""
    return MetadataDescriptor(
        name=f"{course_name}{CERTIFICATE_NAME_SUFFIX}",
        symbol=symbol,
        uri=uri,
        seller_fee_basis_points=0,
        creators=(Creator(address=issuer, verified=True, share=100),),
        collection=None,
        uses=None,
        is_mutable=True,
        update_authority_is_signer=True,
    )


# ── Projection Store ──────────────────────────────────────────

class CredentialProjectionStore:
    """In-memory read model of issued credentials."""

    def __init__(self):
        self._events: List[dict] = []
        self._certificates: Dict[str, dict] = {}  # asset_id → summary
        self._by_student: Dict[str, List[str]] = {}
        self._by_issuer: Dict[str, List[str]] = {}

    def apply(self, event_type: str, payload: Dict[str, Any]) -> None:
        if event_type != CREDENTIAL_ISSUED_V1:
            return
        self._events.append({"event_type": event_type, "payload": payload})

        asset_id = payload["asset_id"]
        self._certificates[asset_id] = {
            "asset_id": asset_id,
            "student": payload["student"],
            "issuer": payload["issuer"],
            "student_name": payload["student_name"],
            "course_name": payload["course_name"],
            "issuer_name": payload["issuer_name"],
            "metadata_uri": payload["metadata_uri"],
            "mint_time": payload["mint_time"],
            "certificate_address": payload["certificate_address"],
        }
        self._by_student.setdefault(payload["student"], []).append(asset_id)
        self._by_issuer.setdefault(payload["issuer"], []).append(asset_id)

    # ── Queries ───────────────────────────────────────────────

    def get_certificate(self, asset_id: str) -> Optional[dict]:
        summary = self._certificates.get(asset_id)
        return dict(summary) if summary else None

    def certificates_of(self, student: str) -> List[dict]:
        return [dict(self._certificates[a]) for a in self._by_student.get(student, [])]

    def certificates_issued_by(self, issuer: str) -> List[dict]:
        return [dict(self._certificates[a]) for a in self._by_issuer.get(issuer, [])]

    def verify_student(self, student: str) -> dict:
        certificates = self.certificates_of(student)
        return {
            "student": student,
            "verified": bool(certificates),
            "certificate_count": len(certificates),
            "certificates": certificates,
        }

    @property
    def event_count(self) -> int:
        return len(self._events)

    def truncate(self):
        self._events.clear()
        self._certificates.clear()
        self._by_student.clear()
        self._by_issuer.clear()


# ── Service ───────────────────────────────────────────────────

class CredentialService:
    """Credential engine service. Runs inside the bus transaction."""

    def __init__(self, *, context):
        self._context = context

    def execute(self, command) -> dict:
        if command.command_type != CREDENTIAL_ISSUE_REQUEST:
            raise StateError(
                f"Unknown command: {command.command_type}",
                code=ReasonCode.UNKNOWN_COMMAND,
                policy_name="credential_service",
            )
        effects = self._issue(command)
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]
        payload = PAYLOAD_BUILDERS[event_type](command, effects)
        return {"event_type": event_type, "payload": payload}

    def _issue(self, command) -> dict:
        ctx = self._context
        registry = ctx.require_registry()
        p = command.payload
        asset_id = p["asset_id"]
        address = certificate_address(asset_id)

        credential = Credential(
            student=p["student"],
            issuer=command.actor_id,
            student_name=p["student_name"],
            course_name=p["course_name"],
            issuer_name=p["issuer_name"],
            mint_time=unix_timestamp(ctx.clock.now_utc()),
            asset_id=asset_id,
        )
        ctx.store.create(address, credential, kind="credential")

        authority = registry.mint_authority
        ctx.minter.create_asset(asset_id, authority=authority, decimals=0, max_supply=1)
        ctx.minter.mint(asset_id, credential.student, 1, authority)

        descriptor = credential_metadata(
            credential.course_name,
            ctx.limits.credential_symbol,
            p["metadata_uri"],
            command.actor_id,
        )
        ctx.metadata.attach(asset_id, descriptor, authority)

        registry.total_certificates = checked_add(registry.total_certificates, 1)
        logger.info(
            f"Credential {asset_id} issued to {credential.student} by {command.actor_id}"
        )
        return {
            "mint_time": credential.mint_time,
            "certificate_address": address,
            "metadata": descriptor.to_dict(),
            "total_certificates": registry.total_certificates,
        }
