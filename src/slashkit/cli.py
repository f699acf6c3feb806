from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional

import typer
import yaml

from .choices import Choice
from .config import SlashkitConfig, load_config
from .errors import SlashkitError, ValidationError
from .logging_utils import log_event, setup_logging
from .modals import modal_from_definition
from .responses import InteractionResponder, build_autocomplete_payload, build_modal_payload

logger = logging.getLogger("slashkit.cli")

app = typer.Typer(add_completion=False, help="Build and send interaction responses.")
modal_app = typer.Typer(add_completion=False, help="Modal dialogs.")
choices_app = typer.Typer(add_completion=False, help="Autocomplete choices.")
app.add_typer(modal_app, name="modal")
app.add_typer(choices_app, name="choices")


def raise_exit(message: str, *, cause: Optional[BaseException] = None) -> NoReturn:
    typer.echo(message, err=True)
    if cause is not None:
        raise typer.Exit(code=1) from cause
    raise typer.Exit(code=1)


def _echo_json(payload: dict[str, Any], *, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None))


def parse_choice_args(raw_choices: list[str]) -> list[Choice]:
    choices: list[Choice] = []
    for raw in raw_choices:
        name, sep, value = raw.partition("=")
        if not sep:
            raise ValidationError(f"choice {raw!r} must be NAME=VALUE")
        choices.append(Choice(name=name.strip(), value=value.strip()))
    return choices


async def _send_choices(
    config: SlashkitConfig,
    *,
    interaction_id: str,
    interaction_token: str,
    choices: list[Choice],
    rest_client_factory: Optional[Callable[[], Any]] = None,
) -> None:
    factory = rest_client_factory or config.create_rest_client
    async with factory() as rest:
        responder = InteractionResponder(
            interaction_id, interaction_token, rest, logger=logger
        )
        await responder.defer_choices(choices)


@modal_app.command("render")
def modal_render(
    path: Path = typer.Argument(..., help="YAML modal definition"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON output"),
) -> None:
    """Validate a modal definition and print its response body."""
    try:
        definition = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise_exit(f"Failed to read modal definition {path}: {exc}", cause=exc)
    try:
        modal = modal_from_definition(definition)
    except SlashkitError as exc:
        raise_exit(f"Invalid modal definition {path}: {exc}", cause=exc)
    _echo_json(build_modal_payload(modal), pretty=pretty)


@choices_app.command("render")
def choices_render(
    choices: list[str] = typer.Argument(..., help="Choices as NAME=VALUE"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON output"),
) -> None:
    """Print the autocomplete response body for the given choices."""
    try:
        payload = build_autocomplete_payload(parse_choice_args(choices))
    except SlashkitError as exc:
        raise_exit(str(exc), cause=exc)
    _echo_json(payload, pretty=pretty)


@choices_app.command("send")
def choices_send(
    choices: list[str] = typer.Argument(..., help="Choices as NAME=VALUE"),
    interaction_id: str = typer.Option(..., "--interaction-id", help="Interaction id"),
    token: str = typer.Option(..., "--token", help="Interaction token"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to slashkit.yml"
    ),
) -> None:
    """Send an autocomplete response for a pending interaction."""
    try:
        config = load_config(config_path)
        parsed = parse_choice_args(choices)
    except SlashkitError as exc:
        raise_exit(str(exc), cause=exc)
    setup_logging(config.log_level)
    try:
        asyncio.run(
            _send_choices(
                config,
                interaction_id=interaction_id,
                interaction_token=token,
                choices=parsed,
            )
        )
    except SlashkitError as exc:
        log_event(
            logger,
            logging.ERROR,
            "slashkit.cli.choices_send.failed",
            interaction_id=interaction_id,
            exc=exc,
        )
        raise_exit(f"Failed to send choices: {exc}", cause=exc)
    typer.echo(f"Sent {len(parsed)} choice(s) to interaction {interaction_id}")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
