"""セッション状態に保存するTodoリスト

コレクションはセッションが所有し、ストアはその参照を保持するため変更は即座に
セッションへ反映される。読み出しは常に新しい ``TodoList``/``Todo`` を返し、
セッション状態への参照は外に出さない。
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, MutableMapping, Optional

from .copying import deep_copy
from .ids import next_id, reserve_ids
from .models import Todo, TodoList
from .persistence import TodoPersistence
from .seed_data import SEED_DATA
from .sort import sort_todo_lists, sort_todos

logger = logging.getLogger(__name__)

SESSION_KEY = "todo_lists"

StoredList = Dict[str, Any]
StoredTodo = Dict[str, Any]


def _find_todo_list(todo_lists: List[StoredList], todo_list_id: int) -> Optional[StoredList]:
    return next((item for item in todo_lists if item["id"] == todo_list_id), None)


def _find_todo(
    todo_lists: List[StoredList], todo_list_id: int, todo_id: int
) -> Optional[StoredTodo]:
    todo_list = _find_todo_list(todo_lists, todo_list_id)
    if todo_list is None:
        return None
    return next((todo for todo in todo_list["todos"] if todo["id"] == todo_id), None)


def _stored_ids(todo_lists: List[StoredList]) -> Iterator[int]:
    for todo_list in todo_lists:
        yield todo_list["id"]
        for todo in todo_list["todos"]:
            yield todo["id"]


def _index_of(items: List[Dict[str, Any]], item_id: int) -> int:
    for index, item in enumerate(items):
        if item["id"] == item_id:
            return index
    return -1


class SessionPersistence(TodoPersistence):
    """セッションベースのTodoリスト管理"""

    def __init__(self, session: MutableMapping[str, Any]):
        todo_lists = session.get(SESSION_KEY)
        if todo_lists is None:
            todo_lists = deep_copy(SEED_DATA)
            logger.info("Seeded session with %d todo lists", len(todo_lists))
        session[SESSION_KEY] = todo_lists
        self._todo_lists: List[StoredList] = todo_lists
        reserve_ids(_stored_ids(todo_lists))

    def create_todo_list(self, title: str) -> bool:
        todo_list_id = next_id()
        self._todo_lists.append({"title": title, "id": todo_list_id, "todos": []})
        logger.debug("Created todo list %d: %s", todo_list_id, title)
        return True

    def sorted_todo_lists(self) -> List[TodoList]:
        todo_lists = [TodoList.from_dict(item) for item in self._todo_lists]
        undone = [item for item in todo_lists if not item.is_done]
        done = [item for item in todo_lists if item.is_done]
        return sort_todo_lists(undone, done)

    def sorted_todos(self, todo_list: TodoList) -> List[Todo]:
        undone = [todo for todo in todo_list.todos if not todo.done]
        done = [todo for todo in todo_list.todos if todo.done]
        return deep_copy(sort_todos(undone, done))

    def load_todo_list(self, todo_list_id: int) -> Optional[TodoList]:
        todo_list = _find_todo_list(self._todo_lists, todo_list_id)
        return TodoList.from_dict(todo_list) if todo_list is not None else None

    def load_todo(self, todo_list_id: int, todo_id: int) -> Optional[Todo]:
        todo = _find_todo(self._todo_lists, todo_list_id, todo_id)
        return Todo.from_dict(todo) if todo is not None else None

    def toggle_done_todo(self, todo_list_id: int, todo_id: int) -> bool:
        todo = _find_todo(self._todo_lists, todo_list_id, todo_id)
        if todo is None:
            logger.warning("Todo %s not found in list %s", todo_id, todo_list_id)
            return False

        todo["done"] = not todo["done"]
        logger.debug("Toggled todo %d in list %d to %s", todo_id, todo_list_id, todo["done"])
        return True

    def delete_todo(self, todo_list_id: int, todo_id: int) -> bool:
        todo_list = _find_todo_list(self._todo_lists, todo_list_id)
        if todo_list is None:
            logger.warning("Todo list %s not found", todo_list_id)
            return False

        index = _index_of(todo_list["todos"], todo_id)
        if index == -1:
            logger.warning("Todo %s not found in list %s", todo_id, todo_list_id)
            return False

        del todo_list["todos"][index]
        logger.debug("Deleted todo %d from list %d", todo_id, todo_list_id)
        return True

    def delete_todo_list(self, todo_list_id: int) -> bool:
        index = _index_of(self._todo_lists, todo_list_id)
        if index == -1:
            logger.warning("Todo list %s not found", todo_list_id)
            return False

        del self._todo_lists[index]
        logger.debug("Deleted todo list %d", todo_list_id)
        return True

    def mark_all_done(self, todo_list_id: int) -> bool:
        todo_list = _find_todo_list(self._todo_lists, todo_list_id)
        if todo_list is None:
            logger.warning("Todo list %s not found", todo_list_id)
            return False

        for todo in todo_list["todos"]:
            todo["done"] = True
        return True

    def add_new_todo(self, todo_list_id: int, title: str) -> bool:
        todo_list = _find_todo_list(self._todo_lists, todo_list_id)
        if todo_list is None:
            logger.warning("Todo list %s not found", todo_list_id)
            return False

        todo_list["todos"].append({"id": next_id(), "title": title, "done": False})
        return True

    def rename_todo_list(self, todo_list_id: int, new_title: str) -> bool:
        todo_list = _find_todo_list(self._todo_lists, todo_list_id)
        if todo_list is None:
            logger.warning("Todo list %s not found", todo_list_id)
            return False

        todo_list["title"] = new_title
        return True

    def is_unique_list(self, title: str) -> bool:
        return not any(todo_list["title"] == title for todo_list in self._todo_lists)

    def is_unique_constraint_violation(self, error: BaseException) -> bool:
        """セッション保存では制約違反は発生しないため常にFalse"""
        return False


__all__ = ["SessionPersistence", "SESSION_KEY"]
