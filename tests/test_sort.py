from src.todo.models import Todo, TodoList
from src.todo.sort import sort_todo_lists, sort_todos


def test_sort_todos_groups_undone_before_done():
    undone = [Todo(id=1, title="b"), Todo(id=2, title="A")]
    done = [Todo(id=3, title="C", done=True), Todo(id=4, title="a", done=True)]

    result = sort_todos(undone, done)

    assert [todo.id for todo in result] == [2, 1, 4, 3]


def test_sort_todo_lists_is_case_insensitive_and_stable():
    undone = [
        TodoList(id=1, title="work"),
        TodoList(id=2, title="Home"),
        TodoList(id=3, title="WORK"),
    ]

    result = sort_todo_lists(undone, [])

    assert [item.id for item in result] == [2, 1, 3]


def test_sort_does_not_mutate_inputs():
    undone = [Todo(id=1, title="z"), Todo(id=2, title="a")]
    sort_todos(undone, [])
    assert [todo.id for todo in undone] == [1, 2]
