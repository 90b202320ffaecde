import logging
import threading
from typing import List, Dict, Any, Optional

from ..catalog.catalog import Catalog
from ..query.engine import QueryEngine
from ..session.session_manager import SessionManager


logger = logging.getLogger(__name__)


class SimulatorManager:
    """
    Owns one catalog, its engine and the session state for the web API

    Requests run on Flask worker threads; the lock keeps at most one
    statement in flight against the catalog.
    """

    def __init__(self, session_file: Optional[str] = None):
        self.catalog = Catalog()
        self.engine = QueryEngine(self.catalog)
        self.session = SessionManager(session_file)
        self.lock = threading.Lock()

    def execute(self, sql: str) -> Dict[str, Any]:
        with self.lock:
            result = self.engine.execute_sql(sql)
        return result.to_dict()

    def execute_session_command(self, command: str) -> str:
        with self.lock:
            return self.session.execute(command)

    def get_tables(self) -> List[Dict[str, Any]]:
        """Schema browser feed"""
        with self.lock:
            return [table.to_dict() for table in self.catalog.list_tables()]

    def get_table(self, name: str) -> Optional[Dict[str, Any]]:
        with self.lock:
            table = self.catalog.get_table(name)
            return table.to_dict(include_rows=True) if table else None

    def get_session(self) -> Dict[str, Any]:
        with self.lock:
            return self.session.get_session().to_dict()

    def reset(self) -> Dict[str, Any]:
        with self.lock:
            info = self.catalog.get_catalog_info()
            self.catalog.clear()
        logger.info("Catalog reset via API (%d tables dropped)", info['table_count'])
        return info
