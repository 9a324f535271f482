"""Tests for the to-do list."""

import pytest

from farmledger.domain.errors import NotFoundError, ValidationError


def test_add_and_toggle(todo_service):
    todo_id = todo_service.add_todo("Fix fence")

    assert todo_service.get_todo(todo_id).completed is False
    assert todo_service.toggle_todo(todo_id) is True
    assert todo_service.get_todo(todo_id).completed is True
    assert todo_service.toggle_todo(todo_id) is False


def test_blank_task_rejected(todo_service):
    with pytest.raises(ValidationError, match="Task cannot be empty"):
        todo_service.add_todo("   ")


def test_list_todos(todo_service, sample_farm):
    all_todos = todo_service.list_todos()
    pending = todo_service.list_todos(include_completed=False)

    assert [todo.id for todo in all_todos] == [sample_farm["done"], sample_farm["fence"]]
    assert [todo.task for todo in pending] == ["Fix the north fence"]


def test_missing_todo(todo_service):
    with pytest.raises(NotFoundError, match="To-do 5 not found"):
        todo_service.toggle_todo(5)
    with pytest.raises(NotFoundError):
        todo_service.delete_todo(5)


def test_delete_todo(todo_service):
    todo_id = todo_service.add_todo("Sell calves")

    todo_service.delete_todo(todo_id)

    assert todo_service.get_todo(todo_id) is None
