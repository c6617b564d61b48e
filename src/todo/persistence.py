"""Todoリスト保存バックエンドの共通インターフェース

``SessionPersistence`` はセッション状態に、``SQLitePersistence`` はデータベースに
Todoリストを保存する。どちらを使うかは :func:`create_persistence` で組み立て時に決める。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, MutableMapping, Optional

from .models import Todo, TodoList

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


class TodoPersistence(ABC):
    """ユーザーのTodoリストに対するCRUD・照会操作"""

    @abstractmethod
    def create_todo_list(self, title: str) -> bool:
        """空のTodoリストを作成。成功時はTrue。"""

    def is_done_todo_list(self, todo_list: TodoList) -> bool:
        return todo_list.is_done

    def has_undone_todos(self, todo_list: TodoList) -> bool:
        return todo_list.has_undone_todos

    @abstractmethod
    def sorted_todo_lists(self) -> List[TodoList]:
        """全リストのコピー（未完了リストが先、各グループはタイトル順）"""

    @abstractmethod
    def sorted_todos(self, todo_list: TodoList) -> List[Todo]:
        """リスト内Todoのコピー（未完了Todoが先、各グループはタイトル順）"""

    @abstractmethod
    def load_todo_list(self, todo_list_id: int) -> Optional[TodoList]:
        """リストのコピー。見つからなければNone。"""

    @abstractmethod
    def load_todo(self, todo_list_id: int, todo_id: int) -> Optional[Todo]:
        """Todoのコピー。リストかTodoが見つからなければNone。"""

    @abstractmethod
    def toggle_done_todo(self, todo_list_id: int, todo_id: int) -> bool:
        """完了フラグを反転。リストかTodoが見つからなければFalse。"""

    @abstractmethod
    def delete_todo(self, todo_list_id: int, todo_id: int) -> bool:
        """Todoを削除。リストかTodoが見つからなければFalse。"""

    @abstractmethod
    def delete_todo_list(self, todo_list_id: int) -> bool:
        """リストを所属Todoごと削除。見つからなければFalse。"""

    @abstractmethod
    def mark_all_done(self, todo_list_id: int) -> bool:
        """リスト内のTodoをすべて完了にする。リストが見つからなければFalse。"""

    @abstractmethod
    def add_new_todo(self, todo_list_id: int, title: str) -> bool:
        """未完了のTodoを末尾に追加。リストが見つからなければFalse。"""

    @abstractmethod
    def rename_todo_list(self, todo_list_id: int, new_title: str) -> bool:
        """リスト名を変更。リストが見つからなければFalse。"""

    @abstractmethod
    def is_unique_list(self, title: str) -> bool:
        """同じタイトル（大文字小文字を区別）のリストがなければTrue"""

    @abstractmethod
    def is_unique_constraint_violation(self, error: BaseException) -> bool:
        """``error`` がUNIQUE制約違反ならTrue"""


def create_persistence(
    config: "Config", session: Optional[MutableMapping[str, Any]] = None
) -> TodoPersistence:
    """``config.storage.backend`` で指定されたバックエンドを生成

    Args:
        config: アプリケーション設定
        session: セッション状態（``session`` バックエンドでは必須）

    Raises:
        ValueError: バックエンド名が不明、またはセッションが渡されていない場合
    """
    backend = config.storage.backend.lower()
    if backend == "session":
        if session is None:
            raise ValueError("The session backend requires a session mapping")
        from .session_persistence import SessionPersistence

        return SessionPersistence(session)
    if backend == "sqlite":
        from .repository import SQLitePersistence

        return SQLitePersistence(
            db_path=config.storage.db_path, username=config.storage.username
        )

    logger.error("Unknown storage backend: %s", config.storage.backend)
    raise ValueError(f"Unknown storage backend: {config.storage.backend}")


__all__ = ["TodoPersistence", "create_persistence"]
