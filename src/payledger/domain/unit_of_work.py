"""One transaction boundary per ledger command.

Every mutating command takes the account's lock and runs its reads and
writes inside a single record-store transaction, so concurrent commands on
the same account never interleave their read-modify-write steps and a
failure part-way through leaves no partial writes behind.
"""

import threading
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from payledger.database.base import Database
from payledger.domain.errors import DomainError

logger = structlog.get_logger(__name__)

_account_locks: dict[int, threading.RLock] = {}
_registry_lock = threading.Lock()


def account_lock(account_id: int) -> threading.RLock:
    """Return the re-entrant lock that serializes commands for an account."""
    with _registry_lock:
        lock = _account_locks.get(account_id)
        if lock is None:
            lock = threading.RLock()
            _account_locks[account_id] = lock
        return lock


@contextmanager
def ledger_command(
    db: Database, account_id: int, command: str, **fields: Any
) -> Iterator[Any]:
    """Run a command's writes atomically under the account lock.

    Yields a logger bound to the account and command. One event is logged
    when the command commits, another when it fails; the error is re-raised
    after every write of the command has been rolled back.
    """
    log = logger.bind(account_id=account_id, command=command, **fields)
    with account_lock(account_id):
        try:
            with db.transaction():
                yield log
        except DomainError as e:
            log.info("ledger_command_rolled_back", error=str(e), error_type=type(e).__name__)
            raise
    log.info("ledger_command_applied")
