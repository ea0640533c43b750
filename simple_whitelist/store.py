from __future__ import annotations
import logging
import os
from pathlib import Path

from .models import CommandResult, Outcome

logger = logging.getLogger(__name__)

DEFAULT_FILE = os.getenv("WHITELIST_FILE", "SimpleWhitelist.txt")


class StoreNotReadyError(RuntimeError):
    """Raised when the store is used before ``initialize()`` has run."""


def normalize(identifier: str) -> str:
    return identifier.strip().lower()


class WhitelistStore:
    """File-backed set of authorized identifiers.

    Entries are kept in insertion order and written back to the backing
    file, one per line, after every successful mutation.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path if path is not None else DEFAULT_FILE)
        self._entries: dict[str, None] = {}
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.is_authorized(identifier)

    def initialize(self) -> None:
        """Load the backing file, or start empty and write a fresh one."""
        logger.info("Loading whitelist...")
        self._entries = {}
        if not self.path.exists() or self.load() is None:
            self._entries = {}
            self.persist()
        self._ready = True

    def load(self) -> list[str] | None:
        """Replace the in-memory entries with the file contents.

        Returns the loaded entries, or None if the file could not be read.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.exception("Could not read whitelist file %s", self.path)
            return None
        entries: dict[str, None] = {}
        # Split on \n only; normalize() drops the \r of CRLF files.
        for line in content.split("\n"):
            identifier = normalize(line)
            if identifier:
                entries[identifier] = None
        self._entries = entries
        logger.info("Successfully loaded %d whitelist entries", len(entries))
        return list(entries)

    def persist(self) -> bool:
        """Overwrite the backing file with every entry. Returns False on I/O failure."""
        try:
            with self.path.open("w", encoding="utf-8", newline="\n") as fh:
                fh.write("\n".join(self._entries))
        except OSError:
            logger.exception("Could not write whitelist file %s", self.path)
            return False
        logger.info(
            "Successfully wrote %d entries to the whitelist file", len(self._entries)
        )
        return True

    def _check_ready(self) -> None:
        if not self._ready:
            raise StoreNotReadyError("initialize() must complete before use")

    def add(self, identifier: str) -> CommandResult:
        self._check_ready()
        key = normalize(identifier)
        # One identifier per line in the backing file.
        if not key or "\n" in key or "\r" in key:
            return CommandResult(Outcome.USAGE_ERROR, key)
        if key in self._entries:
            return CommandResult(Outcome.ALREADY_EXISTS, key)
        self._entries[key] = None
        return CommandResult(Outcome.ADDED, key, persisted=self.persist())

    def remove(self, identifier: str) -> CommandResult:
        self._check_ready()
        key = normalize(identifier)
        if not key:
            return CommandResult(Outcome.USAGE_ERROR, key)
        if key not in self._entries:
            return CommandResult(Outcome.NOT_FOUND, key)
        del self._entries[key]
        return CommandResult(Outcome.REMOVED, key, persisted=self.persist())

    def entries(self) -> list[str]:
        self._check_ready()
        return list(self._entries)

    def is_authorized(self, identifier: str) -> bool:
        self._check_ready()
        # Lower-case only: surrounding whitespace is not trimmed on this path.
        return identifier.lower() in self._entries
