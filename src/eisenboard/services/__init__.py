"""Services module for eisenboard - Business logic layer."""

from .ordering_service import OrderingEngine
from .task_service import TaskService, task_service_scope

__all__ = [
    "OrderingEngine",
    "TaskService",
    "task_service_scope",
]
