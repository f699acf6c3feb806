from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from slashkit.choices import Choice
from slashkit.cli import _send_choices, app, parse_choice_args
from slashkit.config import SlashkitConfig
from slashkit.errors import ValidationError
from tests.conftest import RecordingExecutor

runner = CliRunner()

_MODAL_YAML = """\
custom_id: feedback
title: Send feedback
rows:
  - custom_id: subject
    label: Subject
    max_length: 80
    required: true
  - - id: body
      label: Details
      style: paragraph
      placeholder: Tell us more
"""


def test_modal_render_prints_modal_body(tmp_path: Path) -> None:
    path = tmp_path / "modal.yml"
    path.write_text(_MODAL_YAML, encoding="utf-8")

    result = runner.invoke(app, ["modal", "render", str(path)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["type"] == 9
    data = payload["data"]
    assert data["custom_id"] == "feedback"
    assert data["title"] == "Send feedback"
    assert len(data["components"]) == 2
    subject = data["components"][0]["components"][0]
    assert subject == {
        "type": 4,
        "custom_id": "subject",
        "style": 1,
        "label": "Subject",
        "required": True,
        "max_length": 80,
    }
    body = data["components"][1]["components"][0]
    assert body["style"] == 2
    assert body["placeholder"] == "Tell us more"


def test_modal_render_rejects_modal_without_rows(tmp_path: Path) -> None:
    path = tmp_path / "modal.yml"
    path.write_text("custom_id: empty\ntitle: Empty\nrows: []\n", encoding="utf-8")

    result = runner.invoke(app, ["modal", "render", str(path)])

    assert result.exit_code == 1
    assert "no action rows" in result.output


def test_modal_render_rejects_too_many_rows(tmp_path: Path) -> None:
    rows = "".join(f"  - custom_id: f{i}\n    label: Field {i}\n" for i in range(6))
    path = tmp_path / "modal.yml"
    path.write_text(f"custom_id: big\ntitle: Big\nrows:\n{rows}", encoding="utf-8")

    result = runner.invoke(app, ["modal", "render", str(path)])

    assert result.exit_code == 1
    assert "more than 5 action rows" in result.output


def test_modal_render_reports_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["modal", "render", str(tmp_path / "missing.yml")])
    assert result.exit_code == 1
    assert "Failed to read modal definition" in result.output


def test_choices_render_prints_autocomplete_body() -> None:
    result = runner.invoke(app, ["choices", "render", "Apple=apple", "Banana=banana"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "type": 8,
        "data": {
            "choices": [
                {"name": "Apple", "value": "apple"},
                {"name": "Banana", "value": "banana"},
            ]
        },
    }


def test_choices_render_rejects_malformed_choice() -> None:
    result = runner.invoke(app, ["choices", "render", "Apple"])
    assert result.exit_code == 1
    assert "NAME=VALUE" in result.output


def test_parse_choice_args_keeps_equals_in_value() -> None:
    assert parse_choice_args(["Expr = a=b"]) == [Choice("Expr", "a=b")]
    with pytest.raises(ValidationError):
        parse_choice_args(["=value"])


class _FakeRestClient(RecordingExecutor):
    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    async def __aenter__(self) -> "_FakeRestClient":
        return self

    async def __aexit__(self, *_exc_info: Any) -> None:
        self.closed = True


@pytest.mark.anyio
async def test_send_choices_submits_through_rest_client() -> None:
    fake = _FakeRestClient()

    await _send_choices(
        SlashkitConfig.from_raw({}),
        interaction_id="1100",
        interaction_token="tok",
        choices=[Choice("Apple", "apple")],
        rest_client_factory=lambda: fake,
    )

    assert fake.closed
    assert len(fake.calls) == 1
    route, body = fake.calls[0]
    assert route.path == "/interactions/1100/tok/callback"
    assert body == {
        "type": 8,
        "data": {"choices": [{"name": "Apple", "value": "apple"}]},
    }
