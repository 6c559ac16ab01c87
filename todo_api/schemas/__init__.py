from .task import CreateTaskInput, TaskRead, UpdateTaskInput

__all__ = ["CreateTaskInput", "TaskRead", "UpdateTaskInput"]
