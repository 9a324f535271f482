"""To-do domain service."""

import logging
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.entities import Todo
from farmledger.domain.errors import NotFoundError, todo_not_found
from farmledger.domain.validation import require_text

logger = logging.getLogger(__name__)


class TodoService:
    """Service for managing the farm to-do list."""

    def __init__(self, db: Database):
        self.db = db

    def add_todo(self, task: str) -> int:
        """Add a to-do. Blank tasks are rejected."""
        todo_id = self.db.create_todo(require_text(task, "Task"))
        logger.debug("Added to-do %s", todo_id)
        return todo_id

    def get_todo(self, todo_id: int) -> Optional[Todo]:
        return self.db.get_todo(todo_id)

    def toggle_todo(self, todo_id: int) -> bool:
        """Flip a to-do's completed flag. Returns the new value."""
        todo = self.db.get_todo(todo_id)
        if todo is None:
            raise NotFoundError(todo_not_found(todo_id))
        completed = not todo.completed
        self.db.set_todo_completed(todo_id, completed)
        return completed

    def delete_todo(self, todo_id: int) -> None:
        if self.db.get_todo(todo_id) is None:
            raise NotFoundError(todo_not_found(todo_id))
        self.db.delete_todo(todo_id)
        logger.debug("Deleted to-do %s", todo_id)

    def list_todos(self, include_completed: bool = True) -> list[Todo]:
        """List to-dos, newest first."""
        todos = self.db.list_todos()
        if include_completed:
            return todos
        return [todo for todo in todos if not todo.completed]
