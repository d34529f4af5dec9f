"""Turns domain errors into CLI errors."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException, ValidationError


def cli_error(exc: DomainException) -> click.ClickException:
    """Build the ClickException for ``exc``, itemizing field errors if any."""
    message = str(exc)
    if isinstance(exc, ValidationError) and exc.errors:
        lines = [message]
        for field_name, messages in exc.errors.items():
            for text in messages:
                lines.append(f"  {field_name}: {text}")
        message = "\n".join(lines)
    return click.ClickException(message)
