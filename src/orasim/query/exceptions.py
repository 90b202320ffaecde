"""
Execution Exceptions - Errors raised while executing a parsed statement
"""

from ..constants import ORA_TABLE_NOT_FOUND, ORA_NAME_ALREADY_USED, ORA_DIVISOR_IS_ZERO
from ..parser.exceptions import OraSimError


class OraSimExecutionError(OraSimError):
    """Base class for execution errors"""
    pass


class OraSimTableNotFoundError(OraSimExecutionError):
    """Referenced table is absent from the catalog"""

    def __init__(self, table_name: str = None):
        super().__init__(ORA_TABLE_NOT_FOUND, table_name)


class OraSimDuplicateObjectError(OraSimExecutionError):
    """Name already used by an existing table"""

    def __init__(self, table_name: str):
        super().__init__(ORA_NAME_ALREADY_USED, table_name)


class OraSimDivideByZeroError(OraSimExecutionError):
    """Division by zero in a DUAL expression"""

    def __init__(self):
        super().__init__(ORA_DIVISOR_IS_ZERO)
