"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, TypeVar

import click

from rms.application.envelope import failure, success
from rms.domain.exceptions import DomainException

T = TypeVar("T")

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"]


def json_mode() -> bool:
    ctx = click.get_current_context(silent=True)
    return bool(ctx and ctx.find_root().obj and ctx.find_root().obj.get("json"))


def run(action: Callable[[], T]) -> T:
    """Invoke a handler, turning domain errors into CLI errors."""
    try:
        return action()
    except DomainException as exc:
        if json_mode():
            click.echo(json.dumps(failure(exc), indent=2))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(exc))


def emit(message: str, data: Any, render: Callable[[Any], None]) -> None:
    """Print either the JSON envelope or the human-readable rendering."""
    if json_mode():
        click.echo(json.dumps(success(message, data), indent=2))
    else:
        render(data)


def fmt_date(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"
