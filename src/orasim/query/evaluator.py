"""
Expression Evaluator - WHERE clause predicates over in-memory rows
"""

from typing import List, Optional
from ..catalog.schema import Row
from ..parser.ast import Condition, WhereClause
from ..parser.lexer import TokenType
from ..types.value import Value


def evaluate_condition(condition: Condition, row: Row) -> bool:
    """Evaluate one atomic comparison against a row"""
    return Value.of(row.get(condition.column)).compare(condition.value, condition.operator)


def _disjuncts(where: WhereClause) -> List[List[Condition]]:
    """Group conditions into AND-chains separated by OR"""
    groups = [[where.conditions[0]]]
    for connector, condition in zip(where.connectors, where.conditions[1:]):
        if connector == TokenType.OR:
            groups.append([condition])
        else:
            groups[-1].append(condition)
    return groups


def evaluate_where(where: Optional[WhereClause], row: Row) -> bool:
    """
    Evaluate a WHERE clause against a row

    AND binds tighter than OR; both short-circuit left to right.
    An absent clause matches every row.
    """
    if where is None or not where.conditions:
        return True
    return any(all(evaluate_condition(condition, row) for condition in group)
               for group in _disjuncts(where))


def filter_rows(rows: List[Row], where: Optional[WhereClause]) -> List[Row]:
    """Rows for which the WHERE clause holds, in storage order"""
    return [row for row in rows if evaluate_where(where, row)]
