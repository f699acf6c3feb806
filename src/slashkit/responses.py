"""Terminal interaction responses.

An :class:`InteractionResponder` turns a choice list or a modal into a
callback request body and hands it to a :class:`RequestExecutor`. Each
responder produces at most one response; the platform treats the
interaction token as single-use.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Generator, Iterable, Optional, Protocol, runtime_checkable

from .checks import check_none_none, check_not_blank
from .choices import Choice
from .constants import (
    AUTOCOMPLETE_MAX_CHOICES,
    RESPONSE_TYPE_AUTOCOMPLETE_RESULT,
    RESPONSE_TYPE_MODAL,
)
from .errors import InteractionAlreadyRespondedError, ValidationError
from .logging_utils import log_event
from .modals import Modal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    method: str
    path: str

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


def interaction_callback_route(interaction_id: str, interaction_token: str) -> Route:
    check_not_blank(interaction_id, "interaction_id")
    check_not_blank(interaction_token, "interaction_token")
    return Route("POST", f"/interactions/{interaction_id}/{interaction_token}/callback")


@runtime_checkable
class RequestExecutor(Protocol):
    """Sends a request body to a route; retries and rate limits are its concern."""

    async def submit(self, route: Route, body: dict[str, Any]) -> None:
        """Send ``body`` to ``route``, raising ``TransportError`` on failure."""


def build_autocomplete_payload(choices: Iterable[Choice]) -> dict[str, Any]:
    collected = check_none_none(choices, "choices")
    for choice in collected:
        if not isinstance(choice, Choice):
            raise ValidationError(
                f"choices may only contain Choice, got {type(choice).__name__}"
            )
    if len(collected) > AUTOCOMPLETE_MAX_CHOICES:
        raise ValidationError(
            f"autocomplete responses may not offer more than {AUTOCOMPLETE_MAX_CHOICES} "
            f"choices (got {len(collected)})"
        )
    return {
        "type": RESPONSE_TYPE_AUTOCOMPLETE_RESULT,
        "data": {"choices": [choice.to_dict() for choice in collected]},
    }


def build_modal_payload(modal: Modal) -> dict[str, Any]:
    if not isinstance(modal, Modal):
        raise ValidationError(f"modal must be a Modal, got {type(modal).__name__}")
    return {"type": RESPONSE_TYPE_MODAL, "data": modal.to_dict()}


class PendingResponse:
    """Handle for a response that has been built but not necessarily sent.

    Awaiting the handle sends the request and resolves to ``None``;
    :meth:`submit` schedules it on the running loop without waiting. Either
    way the request is sent at most once per handle.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        route: Route,
        body: dict[str, Any],
        *,
        logger: logging.Logger = logger,
    ) -> None:
        self._executor = executor
        self._route = route
        self._body = body
        self._logger = logger
        self._future: Optional[asyncio.Future[None]] = None

    @property
    def route(self) -> Route:
        return self._route

    @property
    def body(self) -> dict[str, Any]:
        return copy.deepcopy(self._body)

    @property
    def submitted(self) -> bool:
        return self._future is not None

    def submit(self) -> "asyncio.Future[None]":
        if self._future is None:
            # Raises RuntimeError outside a running loop, before _send() is created.
            self._future = asyncio.get_running_loop().create_task(self._send())
        return self._future

    def __await__(self) -> Generator[Any, None, None]:
        return self.submit().__await__()

    async def _send(self) -> None:
        log_event(
            self._logger,
            logging.DEBUG,
            "slashkit.response.submit",
            route=str(self._route),
            response_type=self._body.get("type"),
        )
        try:
            await self._executor.submit(self._route, self._body)
        except Exception as exc:
            log_event(
                self._logger,
                logging.WARNING,
                "slashkit.response.failed",
                route=str(self._route),
                response_type=self._body.get("type"),
                exc=exc,
            )
            raise
        log_event(
            self._logger,
            logging.INFO,
            "slashkit.response.submitted",
            route=str(self._route),
            response_type=self._body.get("type"),
        )


class InteractionResponder:
    def __init__(
        self,
        interaction_id: str,
        interaction_token: str,
        executor: RequestExecutor,
        *,
        logger: logging.Logger = logger,
    ) -> None:
        self._route = interaction_callback_route(interaction_id, interaction_token)
        self._interaction_id = interaction_id
        self._executor = executor
        self._logger = logger
        self._responded = False

    @classmethod
    def for_interaction(
        cls,
        interaction: Any,
        executor: RequestExecutor,
        *,
        logger: logging.Logger = logger,
    ) -> "InteractionResponder":
        """Build a responder from anything exposing ``interaction_id`` and ``token``."""
        return cls(
            interaction.interaction_id,
            interaction.token,
            executor,
            logger=logger,
        )

    @property
    def route(self) -> Route:
        return self._route

    @property
    def responded(self) -> bool:
        return self._responded

    def defer_choices(self, choices: Iterable[Choice]) -> PendingResponse:
        return self._respond(build_autocomplete_payload(choices))

    def reply_modal(self, modal: Modal) -> PendingResponse:
        return self._respond(build_modal_payload(modal))

    def _respond(self, body: dict[str, Any]) -> PendingResponse:
        if self._responded:
            log_event(
                self._logger,
                logging.WARNING,
                "slashkit.response.rejected",
                interaction_id=self._interaction_id,
                response_type=body.get("type"),
            )
            raise InteractionAlreadyRespondedError(
                f"interaction {self._interaction_id} has already been responded to"
            )
        self._responded = True
        return PendingResponse(self._executor, self._route, body, logger=self._logger)
