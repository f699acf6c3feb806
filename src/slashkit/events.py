from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, TypeVar

from .choices import Choice
from .constants import INTERACTION_TYPE_APPLICATION_COMMAND, INTERACTION_TYPE_AUTOCOMPLETE
from .errors import DecodingError
from .interactions import (
    ChannelRef,
    CommandInteraction,
    CommandInteractionRecord,
    OptionMapping,
)
from .modals import Modal
from .responses import InteractionResponder, PendingResponse, RequestExecutor


class CommandInteractionFacade:
    """Forwards the :class:`CommandInteraction` queries to an underlying record."""

    def __init__(self, interaction: CommandInteraction) -> None:
        self._interaction = interaction

    @property
    def interaction(self) -> CommandInteraction:
        return self._interaction

    @property
    def channel(self) -> ChannelRef:
        return self._interaction.channel

    @property
    def name(self) -> str:
        return self._interaction.name

    @property
    def subcommand_name(self) -> Optional[str]:
        return self._interaction.subcommand_name

    @property
    def subcommand_group(self) -> Optional[str]:
        return self._interaction.subcommand_group

    @property
    def command_id(self) -> int:
        return self._interaction.command_id

    @property
    def options(self) -> tuple[OptionMapping, ...]:
        return self._interaction.options

    @property
    def command_string(self) -> str:
        return self._interaction.command_string

    def get_option(self, name: str) -> Optional[OptionMapping]:
        for option in self.options:
            if option.name == name:
                return option
        return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} command={self.command_string!r}>"


_EventT = TypeVar("_EventT", bound="_RespondableEvent")


class _RespondableEvent(CommandInteractionFacade):
    interaction_type: int

    def __init__(
        self, interaction: CommandInteraction, responder: InteractionResponder
    ) -> None:
        super().__init__(interaction)
        self._responder = responder

    @property
    def responder(self) -> InteractionResponder:
        return self._responder

    @classmethod
    def from_payload(
        cls: type[_EventT],
        payload: dict[str, Any],
        executor: RequestExecutor,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> _EventT:
        record = CommandInteractionRecord.from_payload(payload)
        if record.interaction_type != cls.interaction_type:
            raise DecodingError(
                f"{cls.__name__} expects interaction type {cls.interaction_type}, "
                f"got {record.interaction_type}"
            )
        kwargs = {"logger": logger} if logger is not None else {}
        return cls(record, InteractionResponder.for_interaction(record, executor, **kwargs))


class CommandAutocompleteEvent(_RespondableEvent):
    """A user is typing into a command option that offers suggestions."""

    interaction_type = INTERACTION_TYPE_AUTOCOMPLETE

    @property
    def focused_option(self) -> Optional[OptionMapping]:
        for option in self.options:
            if option.focused:
                return option
        return None

    def defer_choices(self, choices: Iterable[Choice]) -> PendingResponse:
        return self._responder.defer_choices(choices)


class SlashCommandEvent(_RespondableEvent):
    """A fully submitted command invocation."""

    interaction_type = INTERACTION_TYPE_APPLICATION_COMMAND

    def reply_modal(self, modal: Modal) -> PendingResponse:
        return self._responder.reply_modal(modal)
