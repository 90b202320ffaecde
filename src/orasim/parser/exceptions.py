"""
Parser Exceptions - Custom exceptions for parsing errors
"""

from typing import Optional
from ..constants import ERROR_MESSAGES, ORA_INVALID_STATEMENT, ORA_MISSING_EXPRESSION


class OraSimError(Exception):
    """Base class for all errors reported with an ORA code"""

    def __init__(self, code: str, detail: Optional[str] = None):
        self.code = code
        self.message = ERROR_MESSAGES.get(code, "")
        self.detail = detail
        super().__init__(str(self))

    def __str__(self):
        text = f"{self.code}: {self.message}"
        if self.detail:
            text += f": {self.detail}"
        return text


class OraSimParseError(OraSimError):
    """Base class for parsing errors"""
    pass


class OraSimInvalidStatementError(OraSimParseError):
    """Statement does not match any supported statement kind"""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(ORA_INVALID_STATEMENT, detail)


class OraSimSyntaxError(OraSimParseError):
    """Statement kind was recognised but its shape does not match the grammar"""

    def __init__(self, code: str = ORA_MISSING_EXPRESSION, reason: Optional[str] = None):
        # reason is kept for logging only; the wire text carries the bare code
        self.reason = reason
        super().__init__(code)
