"""
Storage abstraction layer.
Provides a clean interface for task persistence that can be swapped out.
"""
from .interface import TaskStore
from .sqlite_storage import SQLiteTaskStore

__all__ = ['TaskStore', 'SQLiteTaskStore']
