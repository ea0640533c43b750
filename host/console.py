from __future__ import annotations

import logging
import shlex
from typing import Iterable, TextIO

from pydantic import BaseModel, Field

from simple_whitelist import WhitelistStore, dispatch, handle_connecting

logger = logging.getLogger("simple_whitelist.host")

# ── Boundary models ──────────────────────────────────────────────────────────


class CommandRequest(BaseModel):
    command: str
    arguments: list[str] = Field(default_factory=list)


class ConnectionRequest(BaseModel):
    player_name: str
    identifiers: dict[str, str] = Field(default_factory=dict)


# ── Deferral handle ──────────────────────────────────────────────────────────


class ConsoleDeferrals:
    """Records the deferral calls a connection went through."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self.events: list[str] = []

    def defer(self) -> None:
        self.events.append("defer")

    def update(self, message: str) -> None:
        self.events.append("update")
        self._out.write(f"[deferral] {message}\n")

    def done(self) -> None:
        self.events.append("done")
        self._out.write("[deferral] done\n")

    def kick(self, reason: str) -> None:
        self.events.append("kick")
        self._out.write(f"[kick] {reason}\n")


# ── Event parsing ────────────────────────────────────────────────────────────


def parse_line(line: str) -> CommandRequest | ConnectionRequest | None:
    """Turn one console line into a request.

    ``connect <name> [steam id]`` simulates a connecting player; anything
    else is an admin command followed by its arguments.
    """
    parts = shlex.split(line, comments=True)
    if not parts:
        return None
    if parts[0].lower() == "connect":
        if len(parts) < 2:
            raise ValueError("Usage: connect <player name> [steam id]")
        identifiers = {"steam": parts[2]} if len(parts) > 2 else {}
        return ConnectionRequest(player_name=parts[1], identifiers=identifiers)
    return CommandRequest(command=parts[0], arguments=parts[1:])


class ConsoleHost:
    """Single-threaded event loop feeding console lines to the whitelist."""

    def __init__(self, store: WhitelistStore, out: TextIO) -> None:
        self.store = store
        self.out = out

    def start(self) -> None:
        self.store.initialize()

    def handle(self, request: CommandRequest | ConnectionRequest) -> None:
        if isinstance(request, ConnectionRequest):
            deferrals = ConsoleDeferrals(self.out)
            handle_connecting(
                self.store,
                request.player_name,
                request.identifiers,
                deferrals.kick,
                deferrals,
            )
            return
        if not dispatch(self.store, request.command, request.arguments):
            logger.warning("Unknown command: %s", request.command)

    def run(self, lines: Iterable[str]) -> None:
        for line in lines:
            try:
                request = parse_line(line)
            except ValueError as exc:
                logger.error("%s", exc)
                continue
            if request is not None:
                self.handle(request)
