"""
Citizen Credential Engine — Event Types
========================================
"""

from engines.credential.commands import CREDENTIAL_ISSUE_REQUEST

# ── Event Types ───────────────────────────────────────────────

CREDENTIAL_ISSUED_V1 = "credential.certificate.issued.v1"

ALL_EVENT_TYPES = (
    CREDENTIAL_ISSUED_V1,
)


# ── Payload Builders ──────────────────────────────────────────

def _base_fields(cmd):
    return {
        "actor_id": cmd.actor_id,
        "correlation_id": str(cmd.correlation_id),
        "command_id": str(cmd.command_id),
    }


def _credential_issued(cmd, effects):
    base = _base_fields(cmd)
    p = cmd.payload
    base.update({
        "asset_id": p["asset_id"],
        "student": p["student"],
        "issuer": cmd.actor_id,
        "student_name": p["student_name"],
        "course_name": p["course_name"],
        "issuer_name": p["issuer_name"],
        "metadata_uri": p["metadata_uri"],
        "mint_time": effects["mint_time"],
        "certificate_address": effects["certificate_address"],
        "metadata": effects["metadata"],
        "total_certificates": effects["total_certificates"],
    })
    return base


PAYLOAD_BUILDERS = {
    CREDENTIAL_ISSUED_V1: _credential_issued,
}

COMMAND_TO_EVENT_TYPE = {
    CREDENTIAL_ISSUE_REQUEST: CREDENTIAL_ISSUED_V1,
}
