"""simple-whitelist: file-backed steam ID whitelist for game server connections."""
from .commands import COMMANDS, dispatch
from .gate import authorize, handle_connecting
from .models import CommandResult, Decision, Outcome, RejectReason
from .store import StoreNotReadyError, WhitelistStore, normalize

__all__ = [
    "COMMANDS",
    "CommandResult",
    "Decision",
    "Outcome",
    "RejectReason",
    "StoreNotReadyError",
    "WhitelistStore",
    "authorize",
    "dispatch",
    "handle_connecting",
    "normalize",
]
