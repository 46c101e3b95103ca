"""
Citizen Platform Command Layer - Command Dispatcher
====================================================
Accept Command → Evaluate Policies → Produce Outcome.

The Dispatcher is the DECISION MAKER for precondition checks. It
decides ACCEPTED or REJECTED and nothing else.

The Dispatcher DOES NOT:
- Write records
- Mint, transfer or attach metadata
- Record journal entries

Policies are callables (Command, context) → Optional[RejectionReason].
A policy registered without command types applies to every command.
Policies run in registration order; the first rejection wins.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from core.commands.base import Command
from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import RejectionReason
from core.time.clock import Clock, get_default_clock

logger = logging.getLogger("citizen.commands")


# A policy is a callable:
#   (Command, context) → Optional[RejectionReason]
PolicyEvaluator = Callable[[Command, Any], Optional[RejectionReason]]


class CommandDispatcher:
    """
    Evaluate a command through its registered policies.

    Usage:
        dispatcher = CommandDispatcher(context=platform_context)
        dispatcher.register_policy(
            authority_signer_policy,
            command_types=("platform.issuer.authorize.request",),
        )
        outcome = dispatcher.dispatch(command)
    """

    def __init__(self, context: Any, clock: Optional[Clock] = None):
        self._context = context
        self._clock = clock
        # (policy, command_types or None for all)
        self._policies: List[Tuple[PolicyEvaluator, Optional[frozenset]]] = []

    def register_policy(
        self,
        policy: PolicyEvaluator,
        *,
        command_types: Optional[Iterable[str]] = None,
    ) -> None:
        if not callable(policy):
            raise TypeError(
                f"Policy must be callable, got {type(policy).__name__}."
            )
        scope = frozenset(command_types) if command_types is not None else None
        self._policies.append((policy, scope))

        policy_name = getattr(policy, "__qualname__", str(policy))
        logger.debug(f"Policy registered: {policy_name}")

    def register_policies(self, policies: Dict[str, Iterable[PolicyEvaluator]]) -> None:
        """Register an engine's {command_type: (policy, ...)} table."""
        for command_type, evaluators in policies.items():
            for policy in evaluators:
                self.register_policy(policy, command_types=(command_type,))

    def policies_for(self, command_type: str) -> List[PolicyEvaluator]:
        return [
            policy for policy, scope in self._policies
            if scope is None or command_type in scope
        ]

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def dispatch(self, command: Command) -> CommandOutcome:
        """
        Evaluate command and produce outcome.

        Returns:
            CommandOutcome, never None, never ambiguous.
        """
        clock = self._clock or get_default_clock()
        now = clock.now_utc()

        for policy in self.policies_for(command.command_type):
            rejection = policy(command, self._context)
            if rejection is None:
                continue
            if not isinstance(rejection, RejectionReason):
                raise TypeError(
                    f"Policy must return RejectionReason or None, "
                    f"got {type(rejection).__name__}."
                )

            logger.info(
                f"Command {command.command_id} rejected by "
                f"policy '{rejection.policy_name}': "
                f"[{rejection.code}] {rejection.message}"
            )
            return CommandOutcome(
                command_id=command.command_id,
                status=CommandStatus.REJECTED,
                reason=rejection,
                occurred_at=now,
            )

        logger.info(f"Command {command.command_id} ACCEPTED")
        return CommandOutcome(
            command_id=command.command_id,
            status=CommandStatus.ACCEPTED,
            reason=None,
            occurred_at=now,
        )
