"""
AST Nodes - Typed statement representation for the simulator dialect
"""

from dataclasses import dataclass, field
from typing import List, Optional, Any
from enum import Enum


@dataclass
class Node:
    """Base AST node"""
    pass


class StatementKind(Enum):
    """The nine supported statement kinds"""
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CREATE_TABLE = "CREATE TABLE"
    DROP_TABLE = "DROP TABLE"
    CREATE_INDEX = "CREATE INDEX"
    DESCRIBE = "DESCRIBE"
    DUAL = "DUAL"


@dataclass
class Condition(Node):
    """Atomic comparison: column op value"""
    column: str  # upper-cased column name
    operator: str  # =, !=, <>, <, >, <=, >=
    value: str  # literal text with surrounding quotes stripped


@dataclass
class WhereClause(Node):
    """
    Flat WHERE clause

    Conditions are joined by connectors; connectors[i] sits between
    conditions[i] and conditions[i + 1].
    """
    conditions: List[Condition]
    connectors: List[str] = field(default_factory=list)  # 'AND' / 'OR'


@dataclass
class Statement(Node):
    """Base statement"""
    kind = None


@dataclass
class SelectStatement(Statement):
    """SELECT cols FROM table [WHERE cond]"""
    columns: List[str]  # ['*'] or upper-cased item texts
    table_name: str  # as written
    where_clause: Optional[WhereClause] = None
    kind = StatementKind.SELECT


@dataclass
class InsertStatement(Statement):
    """INSERT INTO table [(cols)] VALUES (vals)"""
    table_name: str
    columns: Optional[List[str]] = None  # None means declared column order
    values: List[str] = field(default_factory=list)  # raw value texts
    kind = StatementKind.INSERT


@dataclass
class Assignment(Node):
    """column = literal in an UPDATE SET list"""
    column: str
    value: str  # raw literal text


@dataclass
class UpdateStatement(Statement):
    """UPDATE table SET col=val, ... [WHERE cond]"""
    table_name: str
    assignments: List[Assignment] = field(default_factory=list)
    where_clause: Optional[WhereClause] = None
    kind = StatementKind.UPDATE


@dataclass
class DeleteStatement(Statement):
    """DELETE FROM table [WHERE cond]"""
    table_name: str
    where_clause: Optional[WhereClause] = None
    kind = StatementKind.DELETE


@dataclass
class ColumnDefinition(Node):
    """Column definition in CREATE TABLE"""
    name: str
    data_type: str  # base type name, e.g. 'VARCHAR', 'DECIMAL'
    nullable: bool = True
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    default_value: Any = None
    default_expression: Optional[str] = None  # CURRENT_TIMESTAMP or USER


@dataclass
class CreateTableStatement(Statement):
    """CREATE TABLE name (col defs)"""
    table_name: str
    columns: List[ColumnDefinition] = field(default_factory=list)
    kind = StatementKind.CREATE_TABLE


@dataclass
class DropTableStatement(Statement):
    """DROP TABLE name"""
    table_name: str
    kind = StatementKind.DROP_TABLE


@dataclass
class CreateIndexStatement(Statement):
    """CREATE [UNIQUE] INDEX name ON table (cols)"""
    index_name: str
    table_name: str
    columns: List[str] = field(default_factory=list)
    unique: bool = False
    kind = StatementKind.CREATE_INDEX


@dataclass
class DescribeStatement(Statement):
    """DESC[RIBE] table"""
    table_name: str
    kind = StatementKind.DESCRIBE


@dataclass
class DualStatement(Statement):
    """SELECT expr FROM DUAL"""
    expression: str  # original, un-normalized expression text
    kind = StatementKind.DUAL
