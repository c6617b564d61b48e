"""全バックエンド共通の並び順

未完了が先、完了が後。各グループ内はタイトル順（大文字小文字を区別しない）。
"""

from __future__ import annotations

from typing import Iterable, List, TypeVar

from .models import Todo, TodoList

T = TypeVar("T", Todo, TodoList)


def _by_title(items: Iterable[T]) -> List[T]:
    return sorted(items, key=lambda item: item.title.casefold())


def sort_todo_lists(undone: Iterable[TodoList], done: Iterable[TodoList]) -> List[TodoList]:
    return _by_title(undone) + _by_title(done)


def sort_todos(undone: Iterable[Todo], done: Iterable[Todo]) -> List[Todo]:
    return _by_title(undone) + _by_title(done)


__all__ = ["sort_todo_lists", "sort_todos"]
