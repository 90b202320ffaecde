"""
Query Engine - Main interface for executing SQL statements
"""

import logging
import time

from ..parser.normalizer import normalize, strip_terminator
from ..parser.parser import Parser
from ..parser.exceptions import OraSimError, OraSimSyntaxError
from ..catalog.catalog import Catalog
from ..constants import ORA_MISSING_RIGHT_PAREN
from .executor import Executor
from .result import QueryResult


logger = logging.getLogger(__name__)


class QueryEngine:
    """Coordinates normalization, parsing and execution of one statement at a time"""

    def __init__(self, catalog: Catalog = None):
        self.catalog = catalog if catalog is not None else Catalog()
        self.executor = Executor(self.catalog)

    def execute_sql(self, sql: str) -> QueryResult:
        """
        Execute a SQL statement

        Args:
            sql: Statement text, optionally ending in ';' or '/'

        Returns:
            QueryResult; expected failures come back with success=False
            and an ORA error string rather than as exceptions
        """
        start = time.perf_counter()

        try:
            raw = strip_terminator(sql)
            normalized = normalize(raw)
            logger.debug("Normalized statement: %s", normalized)

            stmt = Parser.parse_sql(normalized, raw)
            result = self.executor.execute(stmt)
        except OraSimError as e:
            if isinstance(e, OraSimSyntaxError) and e.reason:
                logger.debug("Shape mismatch (%s): %s", e.code, e.reason)
            result = QueryResult.failure(str(e))
        except Exception as e:
            logger.exception("Internal error executing statement: %s", sql)
            return QueryResult.failure(f"{ORA_MISSING_RIGHT_PAREN}: {e}", execution_time=0)

        result.execution_time = round((time.perf_counter() - start) * 1000, 3)
        return result
