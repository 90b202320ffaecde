"""
Query Executor - Executes parsed statements against the catalog
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from ..parser.ast import *
from ..catalog.catalog import Catalog
from ..catalog.schema import Table, Column, Index, IndexType, Row
from ..constants import SCHEMA_USER
from ..types.value import parse_literal, strip_quotes
from .evaluator import evaluate_where, filter_rows
from .planner import estimate
from .result import QueryResult
from .exceptions import (OraSimTableNotFoundError, OraSimDuplicateObjectError,
                         OraSimDivideByZeroError)


logger = logging.getLogger(__name__)

DUAL_ARITHMETIC = re.compile(r'^(\d+)\s*([+\-*/])\s*(\d+)$')


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def current_date() -> str:
    """SYSDATE: today's UTC date as YYYY-MM-DD"""
    return datetime.now(timezone.utc).date().isoformat()


def current_timestamp() -> str:
    """SYSTIMESTAMP: UTC instant with millisecond precision and a Z suffix"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def evaluate_default(column: Column) -> Any:
    """Value a column receives when INSERT leaves it out"""
    if column.default_expression == 'CURRENT_TIMESTAMP':
        return current_timestamp()
    elif column.default_expression == 'USER':
        return SCHEMA_USER
    return column.default_value


class Executor:
    """Executes typed statements; one method per statement kind"""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def execute(self, stmt: Statement) -> QueryResult:
        """Route a statement to its executor"""
        logger.debug("Executing %s", type(stmt).__name__)
        if isinstance(stmt, SelectStatement):
            return self.execute_select(stmt)
        elif isinstance(stmt, InsertStatement):
            return self.execute_insert(stmt)
        elif isinstance(stmt, UpdateStatement):
            return self.execute_update(stmt)
        elif isinstance(stmt, DeleteStatement):
            return self.execute_delete(stmt)
        elif isinstance(stmt, CreateTableStatement):
            return self.execute_create_table(stmt)
        elif isinstance(stmt, DropTableStatement):
            return self.execute_drop_table(stmt)
        elif isinstance(stmt, CreateIndexStatement):
            return self.execute_create_index(stmt)
        elif isinstance(stmt, DescribeStatement):
            return self.execute_describe(stmt)
        elif isinstance(stmt, DualStatement):
            return self.execute_dual(stmt)
        else:
            raise TypeError(f"Unsupported statement: {type(stmt).__name__}")

    def _get_table(self, table_name: str, detail: str = None) -> Table:
        """Look up a table or raise ORA-00942 naming it"""
        table = self.catalog.get_table(table_name)
        if table is None:
            raise OraSimTableNotFoundError(detail if detail is not None else table_name)
        return table

    def execute_select(self, stmt: SelectStatement) -> QueryResult:
        """Execute SELECT: filter first, then project"""
        table = self._get_table(stmt.table_name)
        rows = filter_rows(table.rows, stmt.where_clause)

        if stmt.columns == ['*']:
            columns = table.column_names
        else:
            columns = list(stmt.columns)

        data = [{name: row.get(name) for name in columns} for row in rows]

        return QueryResult(
            success=True,
            data=data,
            columns=columns,
            row_count=len(data),
            execution_plan=estimate(stmt.kind.value, table.name, len(rows))
        )

    def execute_insert(self, stmt: InsertStatement) -> QueryResult:
        """Execute INSERT of a single VALUES row"""
        table = self._get_table(stmt.table_name)
        columns = stmt.columns if stmt.columns is not None else table.column_names

        # Positional; surplus values are dropped, unmatched columns stay absent
        row: Row = {}
        for column, raw in zip(columns, stmt.values):
            row[column] = parse_literal(raw)

        for column in table.columns:
            if column.name in row:
                continue
            value = evaluate_default(column)
            if value is not None:
                row[column.name] = value

        table.rows.append(row)
        return QueryResult(success=True, message='1 row created.', row_count=1)

    def execute_update(self, stmt: UpdateStatement) -> QueryResult:
        """Execute UPDATE; every matching row gets every assignment"""
        table = self._get_table(stmt.table_name)

        updated = 0
        for row in table.rows:
            if not evaluate_where(stmt.where_clause, row):
                continue
            for assignment in stmt.assignments:
                row[assignment.column] = parse_literal(assignment.value)
            updated += 1

        return QueryResult(success=True, message=f"{_plural(updated, 'row')} updated.",
                           row_count=updated)

    def execute_delete(self, stmt: DeleteStatement) -> QueryResult:
        """Execute DELETE"""
        table = self._get_table(stmt.table_name)

        kept = [row for row in table.rows if not evaluate_where(stmt.where_clause, row)]
        deleted = len(table.rows) - len(kept)
        table.rows[:] = kept

        return QueryResult(success=True, message=f"{_plural(deleted, 'row')} deleted.",
                           row_count=deleted)

    def execute_create_table(self, stmt: CreateTableStatement) -> QueryResult:
        """Execute CREATE TABLE"""
        if self.catalog.has_table(stmt.table_name):
            raise OraSimDuplicateObjectError(stmt.table_name)

        columns = [Column(
            name=col_def.name,
            data_type=col_def.data_type,
            nullable=col_def.nullable,
            length=col_def.length,
            precision=col_def.precision,
            scale=col_def.scale,
            default_value=col_def.default_value,
            default_expression=col_def.default_expression
        ) for col_def in stmt.columns]

        self.catalog.create_table(Table(name=stmt.table_name, columns=columns))
        return QueryResult(success=True, message=f"Table {stmt.table_name} created.",
                           row_count=0)

    def execute_drop_table(self, stmt: DropTableStatement) -> QueryResult:
        """Execute DROP TABLE"""
        name = stmt.table_name.upper()
        if not self.catalog.drop_table(name):
            raise OraSimTableNotFoundError(name)
        return QueryResult(success=True, message=f"Table {name} dropped.", row_count=0)

    def execute_create_index(self, stmt: CreateIndexStatement) -> QueryResult:
        """Execute CREATE [UNIQUE] INDEX; column names are not validated"""
        table = self._get_table(stmt.table_name)
        table.indexes.append(Index(
            name=stmt.index_name.upper(),
            columns=list(stmt.columns),
            unique=stmt.unique,
            index_type=IndexType.BTREE
        ))
        return QueryResult(success=True, message=f"Index {stmt.index_name} created.",
                           row_count=0)

    def execute_describe(self, stmt: DescribeStatement) -> QueryResult:
        """Execute DESC[RIBE]"""
        table = self._get_table(stmt.table_name, stmt.table_name.upper())

        data = [{
            'Name': col.name,
            'Null?': '' if col.nullable else 'NOT NULL',
            'Type': col.declared_type,
        } for col in table.columns]

        return QueryResult(success=True, data=data, columns=['Name', 'Null?', 'Type'],
                           row_count=len(data))

    def execute_dual(self, stmt: DualStatement) -> QueryResult:
        """Evaluate one scalar expression against DUAL"""
        expression = stmt.expression
        value = self.evaluate_dual_expression(expression)
        return QueryResult(success=True, data=[{expression: value}], columns=[expression],
                           row_count=1)

    def evaluate_dual_expression(self, expression: str) -> Any:
        """SYSDATE, SYSTIMESTAMP, USER, <int> <op> <int>, else a pass-through literal"""
        keyword = expression.upper()

        if keyword == 'SYSDATE':
            return current_date()
        elif keyword == 'SYSTIMESTAMP':
            return current_timestamp()
        elif keyword == 'USER':
            return SCHEMA_USER

        match = DUAL_ARITHMETIC.match(expression)
        if match:
            left, operator, right = int(match.group(1)), match.group(2), int(match.group(3))
            if operator == '+':
                return left + right
            elif operator == '-':
                return left - right
            elif operator == '*':
                return left * right
            if right == 0:
                raise OraSimDivideByZeroError()
            if left % right == 0:
                return left // right
            return left / right

        return strip_quotes(expression)
