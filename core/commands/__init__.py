"""
Citizen Platform Command Layer
===============================
Every operation begins as a Command.
Every Command is evaluated into exactly one Outcome.
Rejections are journaled and raised as named errors.

Dispatcher and bus live in core.commands.dispatcher and
core.commands.bus; they depend on core.ledger and are imported
by path.
"""

from core.commands.base import (
    Command,
    command_from_request,
    derive_rejection_event_type,
    derive_source_engine,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "Command",
    "command_from_request",
    "derive_rejection_event_type",
    "derive_source_engine",
    "CommandOutcome",
    "CommandStatus",
    "RejectionReason",
    "ReasonCode",
]
