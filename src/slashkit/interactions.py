from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from .constants import (
    INTERACTION_TYPE_APPLICATION_COMMAND,
    INTERACTION_TYPE_AUTOCOMPLETE,
    INTERACTION_TYPE_MODAL_SUBMIT,
    OPTION_TYPE_SUB_COMMAND,
    OPTION_TYPE_SUB_COMMAND_GROUP,
)
from .errors import DecodingError


def _as_id(value: object) -> str | None:
    if value is None:
        return None
    token = str(value).strip()
    return token or None


def extract_interaction_id(interaction_payload: dict[str, Any]) -> Optional[str]:
    return _as_id(interaction_payload.get("id"))


def extract_interaction_token(interaction_payload: dict[str, Any]) -> Optional[str]:
    return _as_id(interaction_payload.get("token"))


def extract_application_id(interaction_payload: dict[str, Any]) -> Optional[str]:
    return _as_id(interaction_payload.get("application_id"))


def extract_channel_id(interaction_payload: dict[str, Any]) -> Optional[str]:
    channel_id = _as_id(interaction_payload.get("channel_id"))
    if channel_id:
        return channel_id
    channel = interaction_payload.get("channel")
    if isinstance(channel, dict):
        return _as_id(channel.get("id"))
    return None


def extract_guild_id(interaction_payload: dict[str, Any]) -> Optional[str]:
    return _as_id(interaction_payload.get("guild_id"))


def extract_user_id(interaction_payload: dict[str, Any]) -> Optional[str]:
    member = interaction_payload.get("member")
    if isinstance(member, dict):
        member_user = member.get("user")
        if isinstance(member_user, dict):
            user_id = _as_id(member_user.get("id"))
            if user_id:
                return user_id
    user = interaction_payload.get("user")
    if isinstance(user, dict):
        return _as_id(user.get("id"))
    return None


def is_command_interaction(interaction_payload: dict[str, Any]) -> bool:
    return interaction_payload.get("type") == INTERACTION_TYPE_APPLICATION_COMMAND


def is_autocomplete_interaction(interaction_payload: dict[str, Any]) -> bool:
    return interaction_payload.get("type") == INTERACTION_TYPE_AUTOCOMPLETE


def is_modal_submit_interaction(interaction_payload: dict[str, Any]) -> bool:
    return interaction_payload.get("type") == INTERACTION_TYPE_MODAL_SUBMIT


def _walk_subcommands(raw_options: Any) -> tuple[list[tuple[int, str]], list[Any]]:
    """Follow nested subcommand/group options down to the leaf options.

    Returns the ``(option_type, name)`` steps taken and the leaf option list.
    """
    steps: list[tuple[int, str]] = []
    current = raw_options if isinstance(raw_options, list) else []
    while current and isinstance(current[0], dict):
        first = current[0]
        option_type = first.get("type")
        if option_type not in (OPTION_TYPE_SUB_COMMAND, OPTION_TYPE_SUB_COMMAND_GROUP):
            break
        name = first.get("name")
        if isinstance(name, str) and name:
            steps.append((option_type, name))
        nested = first.get("options")
        current = nested if isinstance(nested, list) else []
    return steps, current


def extract_command_path_and_options(
    interaction_payload: dict[str, Any],
) -> tuple[tuple[str, ...], dict[str, Any]]:
    data = interaction_payload.get("data")
    if not isinstance(data, dict):
        return (), {}

    root_name = data.get("name")
    if not isinstance(root_name, str) or not root_name:
        return (), {}

    steps, leaf_options = _walk_subcommands(data.get("options"))
    path = [root_name, *(name for _option_type, name in steps)]

    parsed_options: dict[str, Any] = {}
    for item in leaf_options:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name:
            continue
        parsed_options[name] = item.get("value")

    return tuple(path), parsed_options


def extract_modal_values(interaction_payload: dict[str, Any]) -> dict[str, Optional[str]]:
    """Return ``{custom_id: value}`` for every text input in a modal submission."""
    data = interaction_payload.get("data")
    if not isinstance(data, dict):
        return {}
    rows = data.get("components")
    if not isinstance(rows, list):
        return {}
    values: dict[str, Optional[str]] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        children = row.get("components")
        if not isinstance(children, list):
            # Label-wrapped layouts nest a single child under "component".
            child = row.get("component")
            children = [child] if isinstance(child, dict) else []
        for child in children:
            if not isinstance(child, dict):
                continue
            custom_id = _as_id(child.get("custom_id"))
            if not custom_id:
                continue
            value = child.get("value")
            values[custom_id] = value if isinstance(value, str) else None
    return values


@dataclass(frozen=True)
class ChannelRef:
    """Channel an interaction was triggered from."""

    channel_id: Optional[str]
    guild_id: Optional[str] = None


@dataclass(frozen=True)
class OptionMapping:
    """A resolved leaf option of a command invocation."""

    name: str
    type: int
    value: Any = None
    focused: bool = False

    def as_string(self) -> str:
        return "" if self.value is None else str(self.value)

    def as_int(self) -> int:
        try:
            return int(self.value)
        except (TypeError, ValueError) as exc:
            raise DecodingError(
                f"option {self.name!r} is not an integer: {self.value!r}"
            ) from exc

    def as_float(self) -> float:
        try:
            return float(self.value)
        except (TypeError, ValueError) as exc:
            raise DecodingError(
                f"option {self.name!r} is not a number: {self.value!r}"
            ) from exc

    def as_bool(self) -> bool:
        if isinstance(self.value, bool):
            return self.value
        if isinstance(self.value, str) and self.value.lower() in {"true", "false"}:
            return self.value.lower() == "true"
        raise DecodingError(f"option {self.name!r} is not a boolean: {self.value!r}")


def compose_command_string(
    name: str, subcommand_group: Optional[str], subcommand_name: Optional[str]
) -> str:
    parts = [f"/{name}"]
    if subcommand_group:
        parts.append(subcommand_group)
    if subcommand_name:
        parts.append(subcommand_name)
    return " ".join(parts)


@runtime_checkable
class CommandInteraction(Protocol):
    """Read-only view of a command invocation.

    Any event or record that can answer these queries satisfies the protocol;
    callers must not depend on the concrete type behind it.
    """

    @property
    def channel(self) -> ChannelRef:
        """Channel the command was used in."""

    @property
    def name(self) -> str:
        """Top-level command name."""

    @property
    def subcommand_name(self) -> Optional[str]:
        """Invoked subcommand, if any."""

    @property
    def subcommand_group(self) -> Optional[str]:
        """Invoked subcommand group, if any."""

    @property
    def command_id(self) -> int:
        """Platform id of the invoked command."""

    @property
    def options(self) -> tuple[OptionMapping, ...]:
        """Leaf options in the order the user supplied them."""

    @property
    def command_string(self) -> str:
        """Human-readable invocation, e.g. ``/config roles add``."""


def _parse_options(raw_options: list[Any]) -> tuple[OptionMapping, ...]:
    parsed: list[OptionMapping] = []
    for item in raw_options:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        option_type = item.get("type")
        if not isinstance(name, str) or not name or not isinstance(option_type, int):
            continue
        parsed.append(
            OptionMapping(
                name=name,
                type=option_type,
                value=item.get("value"),
                focused=bool(item.get("focused", False)),
            )
        )
    return tuple(parsed)


@dataclass(frozen=True)
class CommandInteractionRecord:
    """Command invocation decoded from an interaction payload."""

    interaction_id: str
    token: str
    interaction_type: int
    name: str
    command_id: int
    channel: ChannelRef
    application_id: Optional[str] = None
    user_id: Optional[str] = None
    subcommand_group: Optional[str] = None
    subcommand_name: Optional[str] = None
    options: tuple[OptionMapping, ...] = field(default_factory=tuple)

    @property
    def command_string(self) -> str:
        return compose_command_string(
            self.name, self.subcommand_group, self.subcommand_name
        )

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CommandInteractionRecord":
        if not isinstance(payload, dict):
            raise DecodingError("interaction payload must be a mapping")
        interaction_type = payload.get("type")
        if interaction_type not in (
            INTERACTION_TYPE_APPLICATION_COMMAND,
            INTERACTION_TYPE_AUTOCOMPLETE,
        ):
            raise DecodingError(
                f"interaction type {interaction_type!r} is not a command interaction"
            )
        interaction_id = extract_interaction_id(payload)
        if not interaction_id:
            raise DecodingError("interaction payload is missing id")
        token = extract_interaction_token(payload)
        if not token:
            raise DecodingError("interaction payload is missing token")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise DecodingError("interaction payload is missing data")
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise DecodingError("interaction payload is missing command name")
        try:
            command_id = int(data.get("id"))  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise DecodingError("interaction payload has no valid command id") from exc

        subcommand_group: Optional[str] = None
        subcommand_name: Optional[str] = None
        steps, leaf_options = _walk_subcommands(data.get("options"))
        for option_type, step_name in steps:
            if option_type == OPTION_TYPE_SUB_COMMAND_GROUP:
                subcommand_group = step_name
            else:
                subcommand_name = step_name

        return cls(
            interaction_id=interaction_id,
            token=token,
            interaction_type=interaction_type,
            name=name,
            command_id=command_id,
            channel=ChannelRef(
                channel_id=extract_channel_id(payload),
                guild_id=extract_guild_id(payload),
            ),
            application_id=extract_application_id(payload),
            user_id=extract_user_id(payload),
            subcommand_group=subcommand_group,
            subcommand_name=subcommand_name,
            options=_parse_options(leaf_options),
        )


@dataclass(frozen=True)
class ModalSubmission:
    """Values a user entered into a modal, keyed by text input custom_id."""

    interaction_id: str
    token: str
    custom_id: str
    values: dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ModalSubmission":
        if not isinstance(payload, dict) or not is_modal_submit_interaction(payload):
            raise DecodingError("payload is not a modal submission")
        interaction_id = extract_interaction_id(payload)
        token = extract_interaction_token(payload)
        if not interaction_id or not token:
            raise DecodingError("modal submission is missing id or token")
        data = payload.get("data")
        custom_id = _as_id(data.get("custom_id")) if isinstance(data, dict) else None
        if not custom_id:
            raise DecodingError("modal submission is missing custom_id")
        return cls(
            interaction_id=interaction_id,
            token=token,
            custom_id=custom_id,
            values=extract_modal_values(payload),
        )
