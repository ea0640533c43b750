from __future__ import annotations
import logging
from typing import Callable, Mapping, Protocol

from .models import Decision, RejectReason
from .store import WhitelistStore

logger = logging.getLogger(__name__)

IDENTIFIER_TYPE = "steam"

MISSING_IDENTIFIER_MESSAGE = (
    "Could not find your steam connection. Please start steam and relaunch."
)
NOT_WHITELISTED_MESSAGE = (
    "You are not whitelisted. Please contact the server owner to get whitelisted."
)


class Deferrals(Protocol):
    """Connection deferral handle supplied by the host."""

    def defer(self) -> None: ...

    def update(self, message: str) -> None: ...

    def done(self) -> None: ...


def authorize(store: WhitelistStore, identifier: str | None) -> Decision:
    if not identifier:
        return Decision.reject(
            RejectReason.MISSING_IDENTIFIER, MISSING_IDENTIFIER_MESSAGE
        )
    if not store.is_authorized(identifier):
        return Decision.reject(RejectReason.NOT_WHITELISTED, NOT_WHITELISTED_MESSAGE)
    return Decision.authorize()


def handle_connecting(
    store: WhitelistStore,
    player_name: str,
    identifiers: Mapping[str, str],
    kick: Callable[[str], None],
    deferrals: Deferrals,
) -> Decision | None:
    """Run the deferral flow for a connecting player.

    Returns the decision, or None if the check itself failed.
    """
    try:
        deferrals.defer()
        identifier = identifiers.get(IDENTIFIER_TYPE)
        decision = authorize(store, identifier)
        if decision.reason is RejectReason.MISSING_IDENTIFIER:
            kick(decision.message)
            return decision

        logger.info("Player %s with steam id %s is joining...", player_name, identifier)
        deferrals.update(
            f"Hello {player_name}. Please hold while we check your ticket..."
        )
        if not decision.authorized:
            kick(decision.message)
            logger.info("Kicked player %s for not being whitelisted", player_name)
            return decision

        logger.info("Player %s is whitelisted, loading in!", player_name)
        deferrals.done()
        return decision
    except Exception:
        logger.exception("Connection check for %s failed", player_name)
        return None
