"""Translate domain errors into click exceptions with distinct exit codes."""

from __future__ import annotations

import click

from stockorders.domain.exceptions import DomainException, OutOfStockError


class OutOfStockClickException(click.ClickException):
    # Stock state, not malformed input
    exit_code = 3


def to_click_exception(exc: DomainException) -> click.ClickException:
    if isinstance(exc, OutOfStockError):
        return OutOfStockClickException(str(exc))
    return click.ClickException(str(exc))
