"""To-do list commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.todo import TodoService


@click.group()
def todo_group():
    """Manage the farm to-do list."""
    pass


@todo_group.command("add")
@click.argument("task")
@click.pass_context
def add_todo(ctx, task: str):
    """Add a task."""
    service = TodoService(ctx.obj["db"])
    try:
        todo_id = service.add_todo(task)
        click.echo(f"Added to-do {todo_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@todo_group.command("list")
@click.option("--pending", is_flag=True, help="Hide completed tasks")
@click.pass_context
def list_todos(ctx, pending: bool):
    """List tasks, newest first."""
    service = TodoService(ctx.obj["db"])
    todos = service.list_todos(include_completed=not pending)
    if not todos:
        click.echo("No to-dos found.")
        return

    for item in todos:
        mark = "x" if item.completed else " "
        click.echo(f"{item.id:>4}  [{mark}] {item.task}")


@todo_group.command("toggle")
@click.argument("todo_id", type=int)
@click.pass_context
def toggle_todo(ctx, todo_id: int):
    """Mark a task done, or not done if it already was."""
    service = TodoService(ctx.obj["db"])
    try:
        completed = service.toggle_todo(todo_id)
        click.echo(f"To-do {todo_id} marked {'done' if completed else 'not done'}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@todo_group.command("delete")
@click.argument("todo_id", type=int)
@click.pass_context
def delete_todo(ctx, todo_id: int):
    """Delete a task."""
    service = TodoService(ctx.obj["db"])
    try:
        service.delete_todo(todo_id)
        click.echo(f"Deleted to-do {todo_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register to-do commands with main CLI."""
    cli.add_command(todo_group, name="todo")
