"""Translate domain failures into click errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from shopcore.domain.exceptions import DomainException


@contextmanager
def domain_errors() -> Iterator[None]:
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(f"[{exc.kind}] {exc}") from exc
