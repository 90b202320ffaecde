"""
Query Planner - Synthetic execution plan estimates
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any
from ..constants import PLAN_ROWS_PER_COST_UNIT, PLAN_BYTES_PER_ROW, PLAN_TIME_PLACEHOLDER


@dataclass
class ExecutionPlan:
    """Single plan node; the estimate depends on row count only"""
    operation: str
    object_name: str
    cost: int
    cardinality: int
    bytes: int
    time: str = PLAN_TIME_PLACEHOLDER
    children: List['ExecutionPlan'] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        plan = {
            'operation': self.operation,
            'object': self.object_name,
            'cost': self.cost,
            'cardinality': self.cardinality,
            'bytes': self.bytes,
            'time': self.time,
        }
        if self.children:
            plan['children'] = [child.to_dict() for child in self.children]
        return plan

    def __repr__(self):
        return (f"ExecutionPlan({self.operation}, {self.object_name}, "
                f"cost={self.cost}, rows={self.cardinality})")


def estimate(operation: str, object_name: str, rows: int) -> ExecutionPlan:
    """
    Build the plan for a statement that scanned `rows` rows

    Args:
        operation: Statement kind label, e.g. 'SELECT'
        object_name: Table name
        rows: Number of rows the statement produced before projection
    """
    return ExecutionPlan(
        operation=f"{operation.upper()} STATEMENT",
        object_name=object_name.upper(),
        cost=max(1, rows // PLAN_ROWS_PER_COST_UNIT),
        cardinality=rows,
        bytes=rows * PLAN_BYTES_PER_ROW,
    )
