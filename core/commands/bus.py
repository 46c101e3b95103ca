"""
Citizen Platform Command Layer - Command Bus
=============================================
High-level orchestration of one atomic platform operation.

Flow (all under one RecordStore transaction):
    1. Dispatch command → Outcome (policies read current state)
    2. REJECTED → raise the named PlatformError
    3. ACCEPTED → engine service executes, writes records, mints/transfers

After the transaction, still holding the store lock:
    - success → journal the accepted event, notify subscribers
    - failure → store already rolled back; journal the rejection event,
                re-raise to the caller

The CommandBus:
- Orchestrates, does not decide
- Never swallows an error
- Never journals an event for an operation that did not commit
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional, Protocol

from core.commands.base import Command, derive_rejection_event_type
from core.commands.dispatcher import CommandDispatcher
from core.commands.outcomes import CommandOutcome
from core.commands.rejection import RejectionReason
from core.ledger.errors import PlatformError, error_for_rejection
from core.ledger.journal import TransactionJournal
from core.ledger.store import RecordStore

logger = logging.getLogger("citizen.commands")

EventSubscriber = Callable[[str, dict], None]


class EngineServiceProtocol(Protocol):
    """
    Engine service handler.

    execute() runs inside the open transaction and returns
    {"event_type": ..., "payload": ...} describing what happened.
    """

    def execute(self, command: Command) -> Dict[str, Any]:
        ...


class CommandBusError(Exception):
    """Base error for command bus wiring problems."""
    pass


class NoHandlerRegistered(CommandBusError):
    """No engine service handler registered for command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine service handler registered for "
            f"command type '{command_type}'."
        )


class CommandResult:
    """Result of CommandBus.handle() for a committed command."""

    def __init__(
        self,
        outcome: CommandOutcome,
        execution_result: Any = None,
        journal_entry: Optional[dict] = None,
    ):
        self.outcome = outcome
        self.execution_result = execution_result
        self.journal_entry = journal_entry

    @property
    def is_accepted(self) -> bool:
        return self.outcome.is_accepted

    @property
    def payload(self) -> dict:
        if isinstance(self.execution_result, dict):
            return self.execution_result.get("payload", {})
        return {}


class CommandBus:
    """
    Usage:
        bus = CommandBus(dispatcher=dispatcher, store=store, journal=journal)
        bus.register_handler("property.shares.acquire.request", property_service)
        bus.subscribe(property_projection.apply)
        result = bus.handle(command)
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        store: RecordStore,
        journal: TransactionJournal,
    ):
        self._dispatcher = dispatcher
        self._store = store
        self._journal = journal
        self._handlers: Dict[str, Any] = {}
        self._subscribers: List[EventSubscriber] = []

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register_handler(self, command_type: str, handler: Any) -> None:
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )

        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise TypeError("Handler must have callable .execute() method.")

        self._handlers[command_type] = handler
        logger.info(f"Handler registered: {command_type}")

    def subscribe(self, subscriber: EventSubscriber) -> None:
        """Subscribe to committed events as (event_type, payload)."""
        if not callable(subscriber):
            raise TypeError("Subscriber must be callable.")
        self._subscribers.append(subscriber)

    @property
    def registered_command_types(self) -> frozenset:
        return frozenset(self._handlers)

    # ══════════════════════════════════════════════════════════
    # HANDLE
    # ══════════════════════════════════════════════════════════

    def handle(self, command: Command) -> CommandResult:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        # Journal order and projection updates follow commit order.
        with self._store.serialized():
            try:
                with self._store.transaction():
                    outcome = self._dispatcher.dispatch(command)
                    if outcome.is_rejected:
                        raise error_for_rejection(outcome.reason)

                    logger.info(
                        f"Executing accepted command {command.command_id} "
                        f"({command.command_type})"
                    )
                    execution_result = handler.execute(command)
            except PlatformError as exc:
                self._record_rejection(command, exc.reason)
                raise

            journal_entry = self._record_accepted(command, execution_result)
            for subscriber in self._subscribers:
                subscriber(execution_result["event_type"], execution_result["payload"])

        return CommandResult(
            outcome=outcome,
            execution_result=execution_result,
            journal_entry=journal_entry,
        )

    # ══════════════════════════════════════════════════════════
    # JOURNAL
    # ══════════════════════════════════════════════════════════

    def _base_entry(self, command: Command) -> dict:
        return {
            "event_id": uuid.uuid4(),
            "command_id": command.command_id,
            "correlation_id": command.correlation_id,
            "source_engine": command.source_engine,
            "actor_id": command.actor_id,
            "created_at": command.issued_at,
        }

    def _record_accepted(self, command: Command, execution_result: dict) -> dict:
        entry = self._base_entry(command)
        entry.update({
            "event_type": execution_result["event_type"],
            "payload": execution_result["payload"],
            "status": "COMMITTED",
        })
        return self._journal.record(entry)

    def _record_rejection(self, command: Command, reason: RejectionReason) -> dict:
        rejection_event_type = derive_rejection_event_type(command.command_type)
        logger.info(
            f"Recording rejection for command {command.command_id}: "
            f"{rejection_event_type} (reason: {reason.code})"
        )
        entry = self._base_entry(command)
        entry.update({
            "event_type": rejection_event_type,
            "payload": {
                "command_type": command.command_type,
                "rejection": reason.to_dict(),
                "original_payload": command.payload,
            },
            "status": "REJECTED",
        })
        return self._journal.record(entry)
