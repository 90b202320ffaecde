"""
Catalog Module - In-memory table registry
Stores and retrieves tables by case-insensitive name.
"""

import logging
from typing import Dict, List, Optional
from .schema import Table


logger = logging.getLogger(__name__)


class Catalog:
    """
    Registry of all tables for one simulator instance

    Not synchronized: callers must keep at most one statement in flight
    per catalog. Separate catalogs share no state.
    """

    def __init__(self):
        self.tables: Dict[str, Table] = {}

    def create_table(self, table: Table) -> bool:
        """
        Register a new table

        Args:
            table: Table definition (name already upper-cased)

        Returns:
            True if successful, False if the name is taken
        """
        if table.name in self.tables:
            logger.info("Table '%s' already exists", table.name)
            return False

        self.tables[table.name] = table
        logger.info("Created table '%s'", table.name)
        return True

    def get_table(self, table_name: str) -> Optional[Table]:
        """
        Get table by name

        Args:
            table_name: Name of table to retrieve, any case

        Returns:
            Table or None if not found
        """
        return self.tables.get(table_name.upper())

    def has_table(self, table_name: str) -> bool:
        return table_name.upper() in self.tables

    def list_tables(self) -> List[Table]:
        """Get all tables in creation order"""
        return list(self.tables.values())

    def table_names(self) -> List[str]:
        """Get list of all table names"""
        return list(self.tables.keys())

    def drop_table(self, table_name: str) -> bool:
        """
        Remove table from catalog

        Args:
            table_name: Name of table to drop

        Returns:
            True if successful, False otherwise
        """
        name = table_name.upper()
        if name not in self.tables:
            logger.info("Table '%s' not found", name)
            return False

        del self.tables[name]
        logger.info("Dropped table '%s'", name)
        return True

    def clear(self) -> None:
        """Remove every table (session reset)"""
        count = len(self.tables)
        self.tables.clear()
        logger.info("Cleared catalog (%d tables removed)", count)

    def get_catalog_info(self) -> dict:
        """Get catalog statistics"""
        return {
            "table_count": len(self.tables),
            "tables": self.table_names(),
            "row_count": sum(len(table.rows) for table in self.tables.values()),
            "index_count": sum(len(table.indexes) for table in self.tables.values()),
        }
