"""WebアプリケーションとCLIで共有するTodoリスト保存層"""

from .config import Config, StorageConfig
from .models import Todo, TodoList
from .persistence import TodoPersistence, create_persistence
from .repository import SQLitePersistence
from .session_persistence import SessionPersistence

__all__ = [
    "Config",
    "StorageConfig",
    "Todo",
    "TodoList",
    "TodoPersistence",
    "create_persistence",
    "SQLitePersistence",
    "SessionPersistence",
]
