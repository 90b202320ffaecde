"""
Schema Module - Table, column, index and constraint definitions
Defines the in-memory representation of simulated tables.
"""

from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
from datetime import datetime


Row = Dict[str, Any]


class IndexType(Enum):
    """Index kinds (only BTREE is produced by CREATE INDEX)"""
    BTREE = "BTREE"
    HASH = "HASH"
    BITMAP = "BITMAP"


class ConstraintType(Enum):
    """Constraint kinds"""
    PRIMARY_KEY = "PRIMARY KEY"
    FOREIGN_KEY = "FOREIGN KEY"
    UNIQUE = "UNIQUE"
    CHECK = "CHECK"
    NOT_NULL = "NOT NULL"


@dataclass(frozen=True)
class Column:
    """Column metadata definition"""
    name: str
    data_type: str
    nullable: bool = True
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    default_value: Any = None
    default_expression: Optional[str] = None

    @property
    def declared_type(self) -> str:
        """Type as written in CREATE TABLE, size group re-attached"""
        if self.length is not None:
            return f"{self.data_type}({self.length})"
        if self.precision is not None:
            if self.scale is not None:
                return f"{self.data_type}({self.precision},{self.scale})"
            return f"{self.data_type}({self.precision})"
        return self.data_type

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'data_type': self.declared_type,
            'nullable': self.nullable,
            'default_value': self.default_expression or self.default_value,
        }


@dataclass
class Index:
    """Index metadata; column names are not validated against the table"""
    name: str
    columns: List[str]
    unique: bool = False
    index_type: IndexType = IndexType.BTREE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'columns': list(self.columns),
            'unique': self.unique,
            'type': self.index_type.value,
        }


@dataclass
class Constraint:
    """Constraint metadata (modelled, not populated by any statement)"""
    name: str
    constraint_type: ConstraintType
    columns: List[str]
    referenced_table: Optional[str] = None
    referenced_columns: Optional[List[str]] = None


@dataclass
class Table:
    """Table definition plus its rows"""
    name: str
    columns: List[Column]
    rows: List[Row] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    created: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self.name = self.name.upper()

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    def to_dict(self, include_rows: bool = False) -> Dict[str, Any]:
        """Plain representation for the schema browser"""
        info = {
            'name': self.name,
            'columns': [col.to_dict() for col in self.columns],
            'row_count': len(self.rows),
            'indexes': [index.to_dict() for index in self.indexes],
            'created': self.created.isoformat(timespec='seconds'),
        }
        if include_rows:
            info['rows'] = [dict(row) for row in self.rows]
        return info

    def __repr__(self) -> str:
        """String representation of table schema"""
        cols = []
        for col in self.columns:
            null_str = "" if col.nullable else " NOT NULL"
            cols.append(f"  {col.name} {col.declared_type}{null_str}")

        cols_str = ",\n".join(cols)
        return f"Table: {self.name}\nColumns:\n{cols_str}"
