#!/usr/bin/env python
"""
Todo List - Unified CLI

    todolist serve [--host HOST] [--port PORT]
    todolist add "Buy milk"
    todolist list
    todolist done <id> | undone <id> | delete <id>

Every command except ``serve`` talks to a running server (``--url``).
"""
import argparse
import sys
from datetime import datetime, timezone

from todolist.client import TodoClient
from todolist.config import settings
from todolist.exceptions import RPCError
from todolist.utils.observability import initialize_observability, Logger

logger = Logger(__name__)


def _print_task(task):
    mark = "x" if task.completed else " "
    created = datetime.fromtimestamp(task.created_at, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
    print(f"[{mark}] {task.id}  {created}  {task.text}")


def cmd_serve(args):
    """Run the HTTP server."""
    import uvicorn
    from todolist.api.main import create_app

    initialize_observability(
        environment=settings.observability.environment,
        log_level=settings.observability.log_level,
    )
    logger.log_event("server_starting", host=args.host, port=args.port)
    print(f"Todo service starting on {args.host}:{args.port}")
    print(f"Health check available at: http://localhost:{args.port}/health")
    print(f"TodoService available at: http://localhost:{args.port}/todolist.v1.TodoService/")

    uvicorn.run(create_app(), host=args.host, port=args.port)


def cmd_add(args):
    with TodoClient(args.url, timeout=settings.server.request_timeout_s) as client:
        _print_task(client.add_task(args.text).task)


def cmd_list(args):
    with TodoClient(args.url, timeout=settings.server.request_timeout_s) as client:
        tasks = client.get_tasks().tasks

    if not tasks:
        print("No tasks.")
        return

    for task in sorted(tasks, key=lambda t: t.created_at):
        _print_task(task)


def cmd_done(args):
    with TodoClient(args.url, timeout=settings.server.request_timeout_s) as client:
        _print_task(client.update_task(args.id, completed=True).task)


def cmd_undone(args):
    with TodoClient(args.url, timeout=settings.server.request_timeout_s) as client:
        _print_task(client.update_task(args.id, completed=False).task)


def cmd_delete(args):
    with TodoClient(args.url, timeout=settings.server.request_timeout_s) as client:
        deleted = client.delete_task(args.id).success
    print(f"Deleted {args.id}" if deleted else f"No task with id {args.id}")


def main():
    parser = argparse.ArgumentParser(description="Todo List Service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=settings.server.host)
    serve.add_argument("--port", type=int, default=settings.server.port)
    serve.set_defaults(func=cmd_serve)

    # Client commands
    client_opts = argparse.ArgumentParser(add_help=False)
    client_opts.add_argument("--url", default=settings.server.url, help="Server base URL")

    add = subparsers.add_parser("add", parents=[client_opts], help="Add a task")
    add.add_argument("text")
    add.set_defaults(func=cmd_add)

    list_ = subparsers.add_parser("list", parents=[client_opts], help="List tasks")
    list_.set_defaults(func=cmd_list)

    done = subparsers.add_parser("done", parents=[client_opts], help="Mark a task completed")
    done.add_argument("id")
    done.set_defaults(func=cmd_done)

    undone = subparsers.add_parser("undone", parents=[client_opts], help="Mark a task not completed")
    undone.add_argument("id")
    undone.set_defaults(func=cmd_undone)

    delete = subparsers.add_parser("delete", parents=[client_opts], help="Delete a task")
    delete.add_argument("id")
    delete.set_defaults(func=cmd_delete)

    args = parser.parse_args()
    try:
        args.func(args)
    except RPCError as e:
        print(f"error: {e.code.value}: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
