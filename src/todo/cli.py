#!/usr/bin/env python3
"""
Todoリスト管理CLI - SQLiteバックエンドを操作するコマンドラインインターフェース

Usage:
    python -m src.todo.cli [--config PATH] [--db-path PATH] [--username NAME] lists [--format json|text]
    python -m src.todo.cli show --list-id ID [--format json|text]
    python -m src.todo.cli create-list --title "タイトル"
    python -m src.todo.cli rename-list --list-id ID --title "新タイトル"
    python -m src.todo.cli delete-list --list-id ID
    python -m src.todo.cli add --list-id ID --title "タイトル"
    python -m src.todo.cli toggle --list-id ID --id TODO_ID
    python -m src.todo.cli complete-all --list-id ID
    python -m src.todo.cli delete --list-id ID --id TODO_ID
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config, StorageConfig
from .logger import setup_logger
from .models import Todo, TodoList
from .persistence import TodoPersistence, create_persistence


def format_todo_text(todo: Todo) -> str:
    """Todoをテキスト形式で整形"""
    mark = "x" if todo.done else " "
    return f"  [{mark}] {todo.id}: {todo.title}"


def format_list_text(todo_list: TodoList) -> str:
    """Todoリストをテキスト形式で整形"""
    done_count = sum(todo.done for todo in todo_list.todos)
    status = "done" if todo_list.is_done else "open"
    return f"[{todo_list.id}] {todo_list.title} ({done_count}/{len(todo_list.todos)}, {status})"


def format_list_json(todo_list: TodoList, todos: Optional[List[Todo]] = None) -> Dict[str, Any]:
    """Todoリストを辞書形式に変換"""
    data = todo_list.to_dict()
    if todos is not None:
        data["todos"] = [todo.to_dict() for todo in todos]
    data["done"] = todo_list.is_done
    return data


def _not_found(message: str) -> int:
    print(f"Error: {message}が見つかりません。", file=sys.stderr)
    return 1


def _print_result(output_format: str, payload: Dict[str, Any], text: str) -> None:
    if output_format == "json":
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(text)


def cmd_lists(store: TodoPersistence, output_format: str) -> int:
    """Todoリスト一覧を表示（未完了→完了、タイトル順）"""
    todo_lists = store.sorted_todo_lists()
    if output_format == "json":
        print(json.dumps([format_list_json(item) for item in todo_lists], ensure_ascii=False))
    elif not todo_lists:
        print("Todoリストは登録されていません。")
    else:
        for item in todo_lists:
            print(format_list_text(item))
    return 0


def cmd_show(store: TodoPersistence, todo_list_id: int, output_format: str) -> int:
    """Todoリストの内容を表示"""
    todo_list = store.load_todo_list(todo_list_id)
    if todo_list is None:
        return _not_found(f"ID {todo_list_id} のTodoリスト")

    todos = store.sorted_todos(todo_list)
    if output_format == "json":
        print(json.dumps(format_list_json(todo_list, todos), ensure_ascii=False))
    else:
        print(format_list_text(todo_list))
        for todo in todos:
            print(format_todo_text(todo))
    return 0


def cmd_create_list(store: TodoPersistence, title: str, output_format: str) -> int:
    """Todoリストを作成"""
    title = title.strip()
    if not title:
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1
    if not store.is_unique_list(title):
        print(f"Error: タイトル「{title}」は既に使われています。", file=sys.stderr)
        return 1

    try:
        store.create_todo_list(title)
    except Exception as exc:
        if store.is_unique_constraint_violation(exc):
            print(f"Error: タイトル「{title}」は既に使われています。", file=sys.stderr)
        else:
            print(f"Error: Todoリスト作成に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(output_format, {"created": True, "title": title}, f"作成しました: {title}")
    return 0


def cmd_rename_list(
    store: TodoPersistence, todo_list_id: int, title: str, output_format: str
) -> int:
    """Todoリストの名前を変更"""
    title = title.strip()
    if not title:
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1

    existing = store.load_todo_list(todo_list_id)
    if existing is None:
        return _not_found(f"ID {todo_list_id} のTodoリスト")
    if existing.title != title and not store.is_unique_list(title):
        print(f"Error: タイトル「{title}」は既に使われています。", file=sys.stderr)
        return 1

    try:
        store.rename_todo_list(todo_list_id, title)
    except Exception as exc:
        if store.is_unique_constraint_violation(exc):
            print(f"Error: タイトル「{title}」は既に使われています。", file=sys.stderr)
        else:
            print(f"Error: Todoリスト名の変更に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(
        output_format,
        {"renamed": True, "id": todo_list_id, "title": title},
        f"名前を変更しました: [{todo_list_id}] {title}",
    )
    return 0


def cmd_delete_list(store: TodoPersistence, todo_list_id: int, output_format: str) -> int:
    """Todoリストを削除"""
    try:
        if not store.delete_todo_list(todo_list_id):
            return _not_found(f"ID {todo_list_id} のTodoリスト")
    except Exception as exc:
        print(f"Error: Todoリスト削除に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(
        output_format,
        {"deleted": True, "id": todo_list_id},
        f"削除しました: ID {todo_list_id}",
    )
    return 0


def cmd_add(store: TodoPersistence, todo_list_id: int, title: str, output_format: str) -> int:
    """Todoを追加"""
    title = title.strip()
    if not title:
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1

    try:
        if not store.add_new_todo(todo_list_id, title):
            return _not_found(f"ID {todo_list_id} のTodoリスト")
    except Exception as exc:
        print(f"Error: Todo追加に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(
        output_format,
        {"added": True, "list_id": todo_list_id, "title": title},
        f"追加しました: {title}",
    )
    return 0


def cmd_toggle(store: TodoPersistence, todo_list_id: int, todo_id: int, output_format: str) -> int:
    """Todoの完了状態を切り替える"""
    try:
        if not store.toggle_done_todo(todo_list_id, todo_id):
            return _not_found(f"ID {todo_id} のTodo")
        todo = store.load_todo(todo_list_id, todo_id)
    except Exception as exc:
        print(f"Error: Todo更新に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(output_format, todo.to_dict(), f"切り替えました:{format_todo_text(todo)}")
    return 0


def cmd_complete_all(store: TodoPersistence, todo_list_id: int, output_format: str) -> int:
    """リスト内のTodoをすべて完了にする"""
    try:
        if not store.mark_all_done(todo_list_id):
            return _not_found(f"ID {todo_list_id} のTodoリスト")
    except Exception as exc:
        print(f"Error: Todo完了処理に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(
        output_format,
        {"completed": True, "id": todo_list_id},
        f"すべて完了しました: ID {todo_list_id}",
    )
    return 0


def cmd_delete(store: TodoPersistence, todo_list_id: int, todo_id: int, output_format: str) -> int:
    """Todoを削除"""
    try:
        if not store.delete_todo(todo_list_id, todo_id):
            return _not_found(f"ID {todo_id} のTodo")
    except Exception as exc:
        print(f"Error: Todo削除に失敗しました: {exc}", file=sys.stderr)
        return 1

    _print_result(
        output_format,
        {"deleted": True, "list_id": todo_list_id, "id": todo_id},
        f"削除しました: ID {todo_id}",
    )
    return 0


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Todoリスト管理CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: data/todo_lists.db）",
    )
    parser.add_argument(
        "--username",
        help="操作対象のユーザー名（デフォルト: 設定ファイルのstorage.username）",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="設定ファイルのパス（デフォルト: config/app_config.yaml）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    parser_lists = subparsers.add_parser("lists", help="Todoリスト一覧を表示")
    _add_format_argument(parser_lists)

    parser_show = subparsers.add_parser("show", help="Todoリストの内容を表示")
    parser_show.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    _add_format_argument(parser_show)

    parser_create = subparsers.add_parser("create-list", help="Todoリストを作成")
    parser_create.add_argument("--title", required=True, help="Todoリストのタイトル")
    _add_format_argument(parser_create)

    parser_rename = subparsers.add_parser("rename-list", help="Todoリストの名前を変更")
    parser_rename.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    parser_rename.add_argument("--title", required=True, help="新しいタイトル")
    _add_format_argument(parser_rename)

    parser_delete_list = subparsers.add_parser("delete-list", help="Todoリストを削除")
    parser_delete_list.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    _add_format_argument(parser_delete_list)

    parser_add = subparsers.add_parser("add", help="Todoを追加")
    parser_add.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    parser_add.add_argument("--title", required=True, help="Todoのタイトル")
    _add_format_argument(parser_add)

    parser_toggle = subparsers.add_parser("toggle", help="Todoの完了状態を切り替える")
    parser_toggle.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    parser_toggle.add_argument("--id", type=int, required=True, help="TodoのID")
    _add_format_argument(parser_toggle)

    parser_complete = subparsers.add_parser("complete-all", help="Todoをすべて完了にする")
    parser_complete.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    _add_format_argument(parser_complete)

    parser_delete = subparsers.add_parser("delete", help="Todoを削除")
    parser_delete.add_argument("--list-id", type=int, required=True, help="TodoリストのID")
    parser_delete.add_argument("--id", type=int, required=True, help="TodoのID")
    _add_format_argument(parser_delete)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    config = Config.load(Path(args.config) if args.config else None)
    setup_logger(log_level=config.log_level, log_file=config.log_file)

    # CLIは常にSQLiteバックエンドを操作する
    config.storage = StorageConfig(
        backend="sqlite",
        db_path=args.db_path or config.storage.db_path,
        username=args.username or config.storage.username,
    )
    store = create_persistence(config)

    if args.command == "lists":
        return cmd_lists(store, args.format)
    elif args.command == "show":
        return cmd_show(store, args.list_id, args.format)
    elif args.command == "create-list":
        return cmd_create_list(store, args.title, args.format)
    elif args.command == "rename-list":
        return cmd_rename_list(store, args.list_id, args.title, args.format)
    elif args.command == "delete-list":
        return cmd_delete_list(store, args.list_id, args.format)
    elif args.command == "add":
        return cmd_add(store, args.list_id, args.title, args.format)
    elif args.command == "toggle":
        return cmd_toggle(store, args.list_id, args.id, args.format)
    elif args.command == "complete-all":
        return cmd_complete_all(store, args.list_id, args.format)
    elif args.command == "delete":
        return cmd_delete(store, args.list_id, args.id, args.format)
    else:
        print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
