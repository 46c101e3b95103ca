"""
Citizen Credential Engine — Commands
=====================================
Issue a non-transferable achievement credential to a student.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

CREDENTIAL_ISSUE_REQUEST = "credential.certificate.issue.request"

CREDENTIAL_COMMAND_TYPES = frozenset({CREDENTIAL_ISSUE_REQUEST})


@dataclass(frozen=True)
class IssueCredentialRequest:
    """Issuer (the signer) mints one credential unit to the student."""
    student: str
    student_name: str
    course_name: str
    issuer_name: str
    metadata_uri: str
    asset_id: str
    actor_id: str
    issued_at: datetime
    source_engine: str = "credential"

    def __post_init__(self):
        if not self.student or not isinstance(self.student, str):
            raise ValueError("student must be a non-empty string.")
        if not self.asset_id or not isinstance(self.asset_id, str):
            raise ValueError("asset_id must be a non-empty string.")
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        for name in ("student_name", "course_name", "issuer_name", "metadata_uri"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string.")
        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

    def to_command(self) -> dict:
        return {
            "command_type": CREDENTIAL_ISSUE_REQUEST,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "issued_at": self.issued_at,
            "payload": {
                "student": self.student,
                "student_name": self.student_name,
                "course_name": self.course_name,
                "issuer_name": self.issuer_name,
                "metadata_uri": self.metadata_uri,
                "asset_id": self.asset_id,
                "issued_at": str(self.issued_at),
            },
        }
