from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class Todo:
    """Todoアイテムの表現。idは所属するTodoList内で一意。"""

    id: int
    title: str
    done: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        return cls(id=data["id"], title=data["title"], done=bool(data["done"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "done": self.done}


@dataclass(slots=True)
class TodoList:
    """タイトル付きのTodoの並び。"""

    id: int
    title: str
    todos: List[Todo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TodoList":
        """保存済みdictから独立したコピーを作る（ネストした参照は共有しない）"""
        return cls(
            id=data["id"],
            title=data["title"],
            todos=[Todo.from_dict(todo) for todo in data["todos"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "todos": [todo.to_dict() for todo in self.todos],
        }

    @property
    def is_done(self) -> bool:
        """Todoが1件以上あり、すべて完了していればTrue。空のリストは未完了扱い。"""
        return len(self.todos) > 0 and all(todo.done for todo in self.todos)

    @property
    def has_undone_todos(self) -> bool:
        return any(not todo.done for todo in self.todos)
