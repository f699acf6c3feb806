from __future__ import annotations

import asyncio
import logging

import pytest

from slashkit.choices import Choice
from slashkit.components import ActionRow, TextInput
from slashkit.errors import (
    InteractionAlreadyRespondedError,
    TransientTransportError,
    ValidationError,
)
from slashkit.modals import Modal
from slashkit.responses import (
    InteractionResponder,
    PendingResponse,
    RequestExecutor,
    Route,
    build_autocomplete_payload,
    interaction_callback_route,
)
from tests.conftest import RecordingExecutor


def test_recording_executor_satisfies_protocol(executor: RecordingExecutor) -> None:
    assert isinstance(executor, RequestExecutor)


def test_callback_route() -> None:
    route = interaction_callback_route("123", "abc")
    assert route == Route("POST", "/interactions/123/abc/callback")
    assert str(route) == "POST /interactions/123/abc/callback"
    with pytest.raises(ValidationError):
        interaction_callback_route("", "abc")
    with pytest.raises(ValidationError):
        interaction_callback_route("123", None)  # type: ignore[arg-type]


@pytest.mark.anyio
async def test_defer_choices_submits_exact_payload_once(
    executor: RecordingExecutor,
) -> None:
    responder = InteractionResponder("123", "abc", executor)
    pending = responder.defer_choices(
        [Choice("Apple", "apple"), Choice("Banana", "banana")]
    )
    assert executor.calls == []

    await pending

    assert executor.calls == [
        (
            Route("POST", "/interactions/123/abc/callback"),
            {
                "type": 8,
                "data": {
                    "choices": [
                        {"name": "Apple", "value": "apple"},
                        {"name": "Banana", "value": "banana"},
                    ]
                },
            },
        )
    ]


@pytest.mark.anyio
async def test_pending_response_sends_at_most_once(executor: RecordingExecutor) -> None:
    pending = InteractionResponder("1", "t", executor).defer_choices([Choice("a", 1)])
    first = pending.submit()
    assert pending.submitted is True
    assert pending.submit() is first
    await pending
    await pending
    assert len(executor.calls) == 1


@pytest.mark.anyio
async def test_submit_does_not_block(executor: RecordingExecutor) -> None:
    pending = InteractionResponder("1", "t", executor).defer_choices([])
    future = pending.submit()
    assert isinstance(future, asyncio.Future)
    assert await future is None
    assert executor.calls[0][1] == {"type": 8, "data": {"choices": []}}


def test_submit_requires_running_loop(executor: RecordingExecutor) -> None:
    pending = InteractionResponder("1", "t", executor).defer_choices([])
    with pytest.raises(RuntimeError):
        pending.submit()
    assert pending.submitted is False
    assert executor.calls == []


@pytest.mark.anyio
async def test_transport_errors_propagate_unchanged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    error = TransientTransportError("boom", status_code=503)
    executor = RecordingExecutor(error=error)
    pending = InteractionResponder("1", "t", executor).defer_choices([Choice("a", "a")])
    with caplog.at_level(logging.WARNING, logger="slashkit.responses"):
        with pytest.raises(TransientTransportError) as excinfo:
            await pending
    assert excinfo.value is error
    assert "slashkit.response.failed" in caplog.text


def test_second_response_is_rejected_locally(executor: RecordingExecutor) -> None:
    responder = InteractionResponder("1", "t", executor)
    assert responder.responded is False
    responder.defer_choices([Choice("a", "a")])
    assert responder.responded is True
    with pytest.raises(InteractionAlreadyRespondedError):
        responder.defer_choices([Choice("b", "b")])
    modal = Modal.create("m", "M").add_action_row(TextInput.create("x", "X")).build()
    with pytest.raises(InteractionAlreadyRespondedError):
        responder.reply_modal(modal)


def test_validation_failure_does_not_consume_interaction(
    executor: RecordingExecutor,
) -> None:
    responder = InteractionResponder("1", "t", executor)
    with pytest.raises(ValidationError):
        responder.defer_choices([Choice("a", "a"), None])  # type: ignore[list-item]
    assert responder.responded is False
    assert isinstance(responder.defer_choices([Choice("a", "a")]), PendingResponse)


def test_choice_list_limit() -> None:
    choices = [Choice(f"n{i}", i) for i in range(25)]
    assert len(build_autocomplete_payload(choices)["data"]["choices"]) == 25
    with pytest.raises(ValidationError, match="25"):
        build_autocomplete_payload(choices + [Choice("extra", "x")])
    with pytest.raises(ValidationError):
        build_autocomplete_payload(None)  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        build_autocomplete_payload(["raw"])  # type: ignore[list-item]


def test_pending_body_is_a_copy(executor: RecordingExecutor) -> None:
    pending = InteractionResponder("1", "t", executor).defer_choices([Choice("a", "a")])
    pending.body["data"]["choices"].clear()
    assert pending.body["data"]["choices"] == [{"name": "a", "value": "a"}]


def test_reply_modal_payload(executor: RecordingExecutor) -> None:
    modal = (
        Modal.create("m", "M")
        .add_action_rows(ActionRow.of(TextInput.create("x", "X")))
        .build()
    )
    pending = InteractionResponder("1", "t", executor).reply_modal(modal)
    assert pending.body == {"type": 9, "data": modal.to_dict()}
    assert pending.route == Route("POST", "/interactions/1/t/callback")


def test_reply_modal_requires_built_modal(executor: RecordingExecutor) -> None:
    builder = Modal.create("m", "M")
    with pytest.raises(ValidationError):
        InteractionResponder("1", "t", executor).reply_modal(builder)  # type: ignore[arg-type]


def test_reply_modal_cannot_send_an_empty_modal(executor: RecordingExecutor) -> None:
    responder = InteractionResponder("1", "t", executor)
    with pytest.raises(ValidationError):
        responder.reply_modal(Modal("m", "", ()))
    assert not responder.responded
