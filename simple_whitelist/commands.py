from __future__ import annotations
import logging
from typing import Callable, Sequence

from .models import CommandResult, Outcome
from .store import WhitelistStore

logger = logging.getLogger(__name__)

ADD_USAGE = "Usage: whitelist.add [steam id]"
REMOVE_USAGE = "Usage: whitelist.remove [steam id]"
HELP_USAGE = (
    "Usage: whitelist.add [steam id], whitelist.remove [steam id], whitelist.list"
)

Handler = Callable[[WhitelistStore, Sequence[str]], None]


def _log_result(result: CommandResult, usage: str) -> None:
    messages = {
        Outcome.ADDED: "Added {} to the whitelist!",
        Outcome.REMOVED: "Removed {} from the whitelist!",
        Outcome.ALREADY_EXISTS: "User {} is already whitelisted!",
        Outcome.NOT_FOUND: "User {} is not whitelisted!",
    }
    if result.outcome is Outcome.USAGE_ERROR:
        logger.info(usage)
        return
    logger.info(messages[result.outcome].format(result.identifier))
    if result.ok and not result.persisted:
        logger.error("Whitelist file is out of date; the change is held in memory only")


def _add(store: WhitelistStore, args: Sequence[str]) -> None:
    if not args:
        logger.info(ADD_USAGE)
        return
    _log_result(store.add(str(args[0])), ADD_USAGE)


def _remove(store: WhitelistStore, args: Sequence[str]) -> None:
    if not args:
        logger.info(REMOVE_USAGE)
        return
    _log_result(store.remove(str(args[0])), REMOVE_USAGE)


def _list(store: WhitelistStore, args: Sequence[str]) -> None:
    logger.info("SimpleWhitelist - Whitelisted players:")
    for entry in store.entries():
        logger.info(entry)


def _help(store: WhitelistStore, args: Sequence[str]) -> None:
    logger.info(HELP_USAGE)


COMMANDS: dict[str, Handler] = {
    "whitelist.add": _add,
    "whitelist.remove": _remove,
    "whitelist.list": _list,
    "whitelist": _help,
}


def dispatch(
    store: WhitelistStore, command: str, arguments: Sequence[str] | None = None
) -> bool:
    """Route an admin command to its handler.

    Returns True when the command was consumed, False when it is not a
    whitelist command and should be left for other handlers.
    """
    handler = COMMANDS.get(command.lower())
    if handler is None:
        return False
    try:
        handler(store, arguments or [])
    except Exception:
        logger.exception("Command %s failed", command)
    return True
