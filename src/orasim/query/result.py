"""
Query Result - Structured outcome of one statement
"""

from dataclasses import dataclass
from typing import List, Dict, Any, Optional
from .planner import ExecutionPlan


@dataclass
class QueryResult:
    """Outcome of a statement; message is meaningful on success, error otherwise"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    columns: Optional[List[str]] = None
    row_count: Optional[int] = None
    execution_time: Optional[float] = None  # milliseconds
    execution_plan: Optional[ExecutionPlan] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str, execution_time: Optional[float] = None) -> 'QueryResult':
        return cls(success=False, error=error, execution_time=execution_time)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for JSON output; absent fields are omitted"""
        result = {'success': self.success}
        if self.data is not None:
            result['data'] = self.data
        if self.columns is not None:
            result['columns'] = self.columns
        if self.row_count is not None:
            result['rowCount'] = self.row_count
        if self.execution_time is not None:
            result['executionTime'] = self.execution_time
        if self.execution_plan is not None:
            result['executionPlan'] = self.execution_plan.to_dict()
        if self.message is not None:
            result['message'] = self.message
        if self.error is not None:
            result['error'] = self.error
        return result
