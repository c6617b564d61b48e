import sqlite3

import pytest

from src.todo.repository import SQLitePersistence


@pytest.fixture
def repo(tmp_path):
    return SQLitePersistence(db_path=tmp_path / "todo_lists.db")


def list_id(repo, title):
    return next(item.id for item in repo.sorted_todo_lists() if item.title == title)


def test_todo_list_crud_cycle(repo):
    assert repo.create_todo_list("Work") is True
    work_id = list_id(repo, "Work")

    assert repo.add_new_todo(work_id, "Write report") is True
    assert repo.add_new_todo(work_id, "answer mail") is True

    work = repo.load_todo_list(work_id)
    assert [todo.title for todo in work.todos] == ["Write report", "answer mail"]
    assert all(todo.done is False for todo in work.todos)

    report = work.todos[0]
    assert repo.toggle_done_todo(work_id, report.id) is True
    assert repo.load_todo(work_id, report.id).done is True
    assert [todo.title for todo in repo.sorted_todos(work)] == ["answer mail", "Write report"]

    assert repo.rename_todo_list(work_id, "Office") is True
    assert repo.load_todo_list(work_id).title == "Office"

    assert repo.delete_todo(work_id, report.id) is True
    assert repo.load_todo(work_id, report.id) is None

    assert repo.delete_todo_list(work_id) is True
    assert repo.load_todo_list(work_id) is None
    assert repo.sorted_todo_lists() == []


def test_duplicate_title_raises_unique_violation(repo):
    repo.create_todo_list("Home")
    assert repo.is_unique_list("Home") is False
    assert repo.is_unique_list("home") is True

    with pytest.raises(sqlite3.IntegrityError) as excinfo:
        repo.create_todo_list("Home")

    assert repo.is_unique_constraint_violation(excinfo.value) is True
    assert repo.is_unique_constraint_violation(ValueError("boom")) is False


def test_delete_todo_list_cascades_to_todos(repo, tmp_path):
    repo.create_todo_list("Home")
    home_id = list_id(repo, "Home")
    repo.add_new_todo(home_id, "Feed the cats")

    repo.delete_todo_list(home_id)

    with sqlite3.connect(tmp_path / "todo_lists.db") as conn:
        remaining = conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0]
    assert remaining == 0


def test_mark_all_done_and_sorting(repo):
    for title in ["beta", "Alpha", "gamma"]:
        repo.create_todo_list(title)
    alpha_id = list_id(repo, "Alpha")
    repo.add_new_todo(alpha_id, "one")
    repo.add_new_todo(alpha_id, "two")

    assert repo.mark_all_done(alpha_id) is True

    ordered = repo.sorted_todo_lists()
    assert [item.title for item in ordered] == ["beta", "gamma", "Alpha"]
    assert repo.is_done_todo_list(ordered[-1]) is True
    assert repo.is_done_todo_list(ordered[0]) is False


def test_missing_ids_return_false_or_none(repo):
    assert repo.load_todo_list(99999) is None
    assert repo.load_todo(99999, 1) is None
    assert repo.toggle_done_todo(99999, 1) is False
    assert repo.delete_todo(99999, 1) is False
    assert repo.delete_todo_list(99999) is False
    assert repo.mark_all_done(99999) is False
    assert repo.add_new_todo(99999, "New") is False
    assert repo.rename_todo_list(99999, "New") is False
    assert repo.sorted_todo_lists() == []


def test_lists_are_scoped_per_user(tmp_path):
    db_path = tmp_path / "todo_lists.db"
    alice = SQLitePersistence(db_path=db_path, username="alice")
    bob = SQLitePersistence(db_path=db_path, username="bob")

    alice.create_todo_list("Shared title")
    assert bob.is_unique_list("Shared title") is True
    assert bob.create_todo_list("Shared title") is True

    alice_list = alice.sorted_todo_lists()[0]
    assert bob.load_todo_list(alice_list.id) is None
    assert bob.delete_todo_list(alice_list.id) is False


def test_db_path_from_environment(tmp_path, monkeypatch):
    db_path = tmp_path / "nested" / "env.db"
    monkeypatch.setenv("TODO_LISTS_DB_PATH", str(db_path))

    repo = SQLitePersistence()

    assert repo.db_path == db_path
    assert db_path.exists()


def test_rename_to_taken_title_raises_unique_violation(repo):
    repo.create_todo_list("A")
    repo.create_todo_list("B")
    b_id = list_id(repo, "B")

    with pytest.raises(sqlite3.IntegrityError) as excinfo:
        repo.rename_todo_list(b_id, "A")

    assert repo.is_unique_constraint_violation(excinfo.value) is True
    assert repo.load_todo_list(b_id).title == "B"


def test_rename_to_own_title(repo):
    repo.create_todo_list("A")
    a_id = list_id(repo, "A")

    assert repo.rename_todo_list(a_id, "A") is True
    assert repo.load_todo_list(a_id).title == "A"
