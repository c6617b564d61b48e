from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import List, Optional

from .models import Todo, TodoList
from .persistence import TodoPersistence
from .sort import sort_todo_lists, sort_todos

logger = logging.getLogger(__name__)


class SQLitePersistence(TodoPersistence):
    """SQLiteベースのTodoリスト管理。セッション版と同じインターフェース。"""

    def __init__(self, db_path: Optional[Path] = None, username: str = "admin"):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "todo_lists.db"
        env_path = os.getenv("TODO_LISTS_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.username = username
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _initialize(self) -> None:
        """スキーマ初期化（todolists / todos テーブル）"""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todolists (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    username TEXT NOT NULL,
                    UNIQUE (username, title)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    done BOOLEAN NOT NULL DEFAULT 0,
                    list_id INTEGER NOT NULL REFERENCES todolists(id) ON DELETE CASCADE,
                    username TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_list ON todos(list_id)")
            conn.commit()

    @staticmethod
    def _row_to_todo(row: sqlite3.Row) -> Todo:
        return Todo(id=row["id"], title=row["title"], done=bool(row["done"]))

    def _fetch_todos(self, conn: sqlite3.Connection, todo_list_id: int) -> List[Todo]:
        rows = conn.execute(
            "SELECT * FROM todos WHERE list_id = ? AND username = ? ORDER BY id",
            (todo_list_id, self.username),
        ).fetchall()
        return [self._row_to_todo(row) for row in rows]

    def _row_to_list(self, conn: sqlite3.Connection, row: sqlite3.Row) -> TodoList:
        return TodoList(
            id=row["id"],
            title=row["title"],
            todos=self._fetch_todos(conn, row["id"]),
        )

    def create_todo_list(self, title: str) -> bool:
        """Todoリストを作成。タイトル重複時はsqlite3.IntegrityErrorを送出する。"""
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO todolists (title, username) VALUES (?, ?)",
                (title, self.username),
            )
            conn.commit()
        logger.debug("Created todo list %d: %s", cursor.lastrowid, title)
        return cursor.rowcount > 0

    def sorted_todo_lists(self) -> List[TodoList]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM todolists WHERE username = ? ORDER BY id",
                (self.username,),
            ).fetchall()
            todo_lists = [self._row_to_list(conn, row) for row in rows]
        undone = [item for item in todo_lists if not item.is_done]
        done = [item for item in todo_lists if item.is_done]
        return sort_todo_lists(undone, done)

    def sorted_todos(self, todo_list: TodoList) -> List[Todo]:
        with self._connect() as conn:
            todos = self._fetch_todos(conn, todo_list.id)
        undone = [todo for todo in todos if not todo.done]
        done = [todo for todo in todos if todo.done]
        return sort_todos(undone, done)

    def load_todo_list(self, todo_list_id: int) -> Optional[TodoList]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM todolists WHERE id = ? AND username = ?",
                (todo_list_id, self.username),
            ).fetchone()
            return self._row_to_list(conn, row) if row else None

    def load_todo(self, todo_list_id: int, todo_id: int) -> Optional[Todo]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM todos WHERE id = ? AND list_id = ? AND username = ?",
                (todo_id, todo_list_id, self.username),
            ).fetchone()
        return self._row_to_todo(row) if row else None

    def toggle_done_todo(self, todo_list_id: int, todo_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE todos SET done = NOT done
                WHERE id = ? AND list_id = ? AND username = ?
                """,
                (todo_id, todo_list_id, self.username),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_todo(self, todo_list_id: int, todo_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM todos WHERE id = ? AND list_id = ? AND username = ?",
                (todo_id, todo_list_id, self.username),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_todo_list(self, todo_list_id: int) -> bool:
        """リストを削除（所属するTodoはON DELETE CASCADEで削除される）"""
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM todolists WHERE id = ? AND username = ?",
                (todo_list_id, self.username),
            )
            conn.commit()
            return cursor.rowcount > 0

    def mark_all_done(self, todo_list_id: int) -> bool:
        if not self._list_exists(todo_list_id):
            return False
        with self._connect() as conn:
            conn.execute(
                "UPDATE todos SET done = 1 WHERE list_id = ? AND username = ?",
                (todo_list_id, self.username),
            )
            conn.commit()
        return True

    def add_new_todo(self, todo_list_id: int, title: str) -> bool:
        if not self._list_exists(todo_list_id):
            return False
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO todos (title, done, list_id, username) VALUES (?, 0, ?, ?)",
                (title, todo_list_id, self.username),
            )
            conn.commit()
        return True

    def rename_todo_list(self, todo_list_id: int, new_title: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE todolists SET title = ? WHERE id = ? AND username = ?",
                (new_title, todo_list_id, self.username),
            )
            conn.commit()
            return cursor.rowcount > 0

    def is_unique_list(self, title: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM todolists WHERE title = ? AND username = ?",
                (title, self.username),
            ).fetchone()
        return row is None

    def is_unique_constraint_violation(self, error: BaseException) -> bool:
        return isinstance(error, sqlite3.IntegrityError) and "UNIQUE constraint failed" in str(
            error
        )

    def _list_exists(self, todo_list_id: int) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM todolists WHERE id = ? AND username = ?",
                (todo_list_id, self.username),
            ).fetchone()
        return row is not None
