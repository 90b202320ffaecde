"""
OraSim - Simulator Constants
Constants for error codes, dialect defaults, and plan estimation.
"""

# Error Codes
ORA_INVALID_STATEMENT = "ORA-00900"
ORA_MISSING_EXPRESSION = "ORA-00936"
ORA_MISSING_RIGHT_PAREN = "ORA-00907"
ORA_TABLE_NOT_FOUND = "ORA-00942"
ORA_NAME_ALREADY_USED = "ORA-00955"
ORA_DIVISOR_IS_ZERO = "ORA-01476"
ORA_INTERNAL_ERROR = "ORA-00600"
SP2_UNKNOWN_COMMAND = "SP2-0042"

# Fixed prose per code (matched verbatim by callers)
ERROR_MESSAGES = {
    ORA_INVALID_STATEMENT: "invalid SQL statement",
    ORA_MISSING_EXPRESSION: "missing expression",
    ORA_MISSING_RIGHT_PAREN: "missing right parenthesis",
    ORA_TABLE_NOT_FOUND: "table or view does not exist",
    ORA_NAME_ALREADY_USED: "name is already used by an existing object",
    ORA_DIVISOR_IS_ZERO: "divisor is equal to zero",
    ORA_INTERNAL_ERROR: "internal error code",
}

# Statement terminators stripped before parsing
STATEMENT_TERMINATORS = (";", "/")

# Column defaults
DEFAULT_COLUMN_TYPE = "VARCHAR2"
DEFAULT_COLUMN_LENGTH = 255

# DUAL pseudo-table
DUAL_TABLE = "DUAL"
SCHEMA_USER = "ORACLE_SIM"

# Plan Estimation
PLAN_ROWS_PER_COST_UNIT = 100
PLAN_BYTES_PER_ROW = 100
PLAN_TIME_PLACEHOLDER = "00:00:01"

# Session Defaults
DEFAULT_DATE_FORMAT = "DD-MON-YY"
DEFAULT_NUM_WIDTH = 10
DEFAULT_PAGE_SIZE = 14
DEFAULT_PRIVILEGES = ["CREATE TABLE", "CREATE INDEX", "SELECT", "INSERT", "UPDATE", "DELETE"]

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
