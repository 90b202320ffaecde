"""
Session Manager - SQL*Plus session commands and session state

Bookkeeping only: COMMIT and ROLLBACK reset the transaction flags but
never touch the catalog. Statements already executed stay applied.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from ..constants import (SCHEMA_USER, DEFAULT_DATE_FORMAT, DEFAULT_NUM_WIDTH,
                         DEFAULT_PAGE_SIZE, DEFAULT_PRIVILEGES, SP2_UNKNOWN_COMMAND,
                         STATEMENT_TERMINATORS)


logger = logging.getLogger(__name__)

SESSION_KEYWORDS = ('COMMIT', 'ROLLBACK', 'SAVEPOINT', 'SET', 'SHOW')


@dataclass
class SessionState:
    """Per-session settings shown by SHOW and changed by SET"""
    current_schema: str = SCHEMA_USER
    auto_commit: bool = True
    date_format: str = DEFAULT_DATE_FORMAT
    num_width: int = DEFAULT_NUM_WIDTH
    page_size: int = DEFAULT_PAGE_SIZE
    transaction_active: bool = False
    savepoints: List[str] = field(default_factory=list)
    privileges: List[str] = field(default_factory=lambda: list(DEFAULT_PRIVILEGES))

    def to_dict(self) -> dict:
        return asdict(self)


def is_session_command(text: str) -> bool:
    """True if the first word names a session command"""
    words = text.strip().split(None, 1)
    return bool(words) and words[0].upper() in SESSION_KEYWORDS


class SessionManager:
    """Executes session commands against a SessionState"""

    def __init__(self, session_file: Optional[str] = None):
        self.session_file = session_file
        self.state = self._load()

    def _load(self) -> SessionState:
        """Load saved state, falling back to defaults"""
        if not self.session_file or not os.path.exists(self.session_file):
            return SessionState()

        try:
            with open(self.session_file, 'r') as f:
                saved = json.load(f)
            return SessionState(**saved)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.session_file, e)
            return SessionState()

    def save(self) -> None:
        """Persist state if a session file is configured"""
        if not self.session_file:
            return
        with open(self.session_file, 'w') as f:
            json.dump(self.state.to_dict(), f, indent=2)

    def get_session(self) -> SessionState:
        """Copy of the current state"""
        return SessionState(**self.state.to_dict())

    def execute(self, command: str) -> str:
        """
        Execute one session command

        Args:
            command: Command text, e.g. 'SET AUTOCOMMIT OFF'

        Returns:
            Output line; unknown commands produce an SP2-0042 line
        """
        text = command.strip()
        if text.endswith(STATEMENT_TERMINATORS):
            text = text[:-1].rstrip()
        words = text.upper().split()
        logger.debug("Session command: %s", words)

        if words == ['COMMIT']:
            self._end_transaction()
            return 'Commit complete.'

        if words == ['ROLLBACK']:
            self._end_transaction()
            return 'Rollback complete.'

        if len(words) == 2 and words[0] == 'SAVEPOINT':
            self.state.savepoints.append(words[1])
            self.state.transaction_active = True
            self.save()
            return f"Savepoint {words[1]} created."

        if len(words) == 3 and words[:2] == ['SET', 'AUTOCOMMIT'] and words[2] in ('ON', 'OFF'):
            self.state.auto_commit = words[2] == 'ON'
            self.save()
            return f"AUTOCOMMIT is {words[2]}."

        if len(words) == 3 and words[:2] == ['SET', 'PAGESIZE'] and words[2].isdigit():
            self.state.page_size = int(words[2])
            self.save()
            return f"PAGESIZE {self.state.page_size}"

        if words == ['SHOW', 'USER']:
            return f'USER is "{self.state.current_schema}"'

        if words == ['SHOW', 'AUTOCOMMIT']:
            return f"AUTOCOMMIT {'ON' if self.state.auto_commit else 'OFF'}"

        return f'{SP2_UNKNOWN_COMMAND}: unknown command "{command.strip()}" - rest of line ignored.'

    def _end_transaction(self) -> None:
        self.state.transaction_active = False
        self.state.savepoints = []
        self.save()
