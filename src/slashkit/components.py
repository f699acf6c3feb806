from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from .checks import (
    check_bounded_int,
    check_max_length,
    check_none_none,
    check_not_blank,
    check_optional_text,
    flatten_args,
)
from .constants import (
    ACTION_ROW_MAX_COMPONENTS,
    COMPONENT_TYPE_ACTION_ROW,
    COMPONENT_TYPE_TEXT_INPUT,
    CUSTOM_ID_MAX_LENGTH,
    TEXT_INPUT_LABEL_MAX_LENGTH,
    TEXT_INPUT_MAX_LENGTH,
    TEXT_INPUT_PLACEHOLDER_MAX_LENGTH,
)
from .errors import DecodingError, ValidationError

# Wire value older payloads use for "no bound" on min_length/max_length.
LEGACY_UNSET_LENGTH = -1


class TextInputStyle(Enum):
    SHORT = 1
    PARAGRAPH = 2

    @classmethod
    def from_key(cls, key: Any) -> "TextInputStyle":
        if isinstance(key, bool) or not isinstance(key, int):
            raise DecodingError(f"text input style must be an integer, got {key!r}")
        try:
            return cls(key)
        except ValueError as exc:
            raise DecodingError(f"unknown text input style {key!r}") from exc

    @classmethod
    def coerce(cls, value: Any) -> "TextInputStyle":
        """Accept a member, its name (``"short"``) or its wire code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValidationError(f"unknown text input style {value!r}") from exc
        try:
            return cls.from_key(value)
        except DecodingError as exc:
            raise ValidationError(str(exc)) from exc


@dataclass(frozen=True)
class TextInput:
    """A single-line or multi-line text field shown inside a modal.

    ``min_length`` and ``max_length`` are ``None`` when the field has no bound;
    unset bounds are left out of the wire record entirely.
    """

    custom_id: str
    style: TextInputStyle
    label: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    required: bool = False
    value: Optional[str] = None
    placeholder: Optional[str] = None

    @property
    def type(self) -> int:
        return COMPONENT_TYPE_TEXT_INPUT

    @classmethod
    def create(
        cls,
        custom_id: str,
        label: str,
        *,
        style: Union[TextInputStyle, str, int] = TextInputStyle.SHORT,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        required: bool = False,
        value: Optional[str] = None,
        placeholder: Optional[str] = None,
    ) -> "TextInput":
        check_not_blank(custom_id, "custom_id")
        check_max_length(custom_id, "custom_id", CUSTOM_ID_MAX_LENGTH)
        check_not_blank(label, "label")
        check_max_length(label, "label", TEXT_INPUT_LABEL_MAX_LENGTH)
        min_length = check_bounded_int(
            min_length, "min_length", minimum=0, maximum=TEXT_INPUT_MAX_LENGTH
        )
        max_length = check_bounded_int(
            max_length, "max_length", minimum=1, maximum=TEXT_INPUT_MAX_LENGTH
        )
        if min_length is not None and max_length is not None:
            if min_length > max_length:
                raise ValidationError(
                    f"min_length ({min_length}) may not exceed max_length ({max_length})"
                )
        if not isinstance(required, bool):
            raise ValidationError("required must be a boolean")
        return cls(
            custom_id=custom_id,
            style=TextInputStyle.coerce(style),
            label=label,
            min_length=min_length,
            max_length=max_length,
            required=required,
            value=check_optional_text(value, "value", TEXT_INPUT_MAX_LENGTH),
            placeholder=check_optional_text(
                placeholder, "placeholder", TEXT_INPUT_PLACEHOLDER_MAX_LENGTH
            ),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TextInput":
        return decode_text_input(data)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": COMPONENT_TYPE_TEXT_INPUT,
            "custom_id": self.custom_id,
            "style": self.style.value,
            "label": self.label,
            "required": self.required,
        }
        if self.min_length is not None:
            payload["min_length"] = self.min_length
        if self.max_length is not None:
            payload["max_length"] = self.max_length
        if self.value is not None:
            payload["value"] = self.value
        if self.placeholder is not None:
            payload["placeholder"] = self.placeholder
        return payload


@dataclass
class TextInputDraft:
    """Mutable accumulator used while decoding a wire record.

    Only the decode path mutates a draft; :meth:`freeze` hands back the
    immutable :class:`TextInput`.
    """

    custom_id: str
    style: TextInputStyle
    label: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    required: bool = False
    value: Optional[str] = None
    placeholder: Optional[str] = None

    def set_required(self, required: bool) -> "TextInputDraft":
        self.required = required
        return self

    def set_value(self, value: Optional[str]) -> "TextInputDraft":
        self.value = value
        return self

    def set_placeholder(self, placeholder: Optional[str]) -> "TextInputDraft":
        self.placeholder = placeholder
        return self

    def freeze(self) -> TextInput:
        return TextInput(
            custom_id=self.custom_id,
            style=self.style,
            label=self.label,
            min_length=self.min_length,
            max_length=self.max_length,
            required=self.required,
            value=self.value,
            placeholder=self.placeholder,
        )


def _decode_optional_str(record: Mapping[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodingError(f"text input {key} must be a string, got {value!r}")
    return value


def _decode_length(record: Mapping[str, Any], key: str) -> Optional[int]:
    value = record.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodingError(f"text input {key} must be an integer, got {value!r}")
    if value == LEGACY_UNSET_LENGTH:
        return None
    return value


def decode_text_input(record: Mapping[str, Any]) -> TextInput:
    if not isinstance(record, Mapping):
        raise DecodingError("text input record must be a mapping")
    component_type = record.get("type", COMPONENT_TYPE_TEXT_INPUT)
    if component_type != COMPONENT_TYPE_TEXT_INPUT:
        raise DecodingError(
            f"expected component type {COMPONENT_TYPE_TEXT_INPUT}, got {component_type!r}"
        )
    custom_id = record.get("custom_id")
    if not isinstance(custom_id, str) or not custom_id.strip():
        raise DecodingError("text input record is missing custom_id")
    if record.get("style") is None:
        raise DecodingError(f"text input {custom_id!r} is missing style")

    draft = TextInputDraft(
        custom_id=custom_id,
        style=TextInputStyle.from_key(record["style"]),
        label=_decode_optional_str(record, "label"),
        min_length=_decode_length(record, "min_length"),
        max_length=_decode_length(record, "max_length"),
    )
    required = record.get("required", False)
    if not isinstance(required, bool):
        raise DecodingError(
            f"text input required must be a boolean, got {required!r}"
        )
    draft.set_required(required)
    draft.set_value(_decode_optional_str(record, "value"))
    draft.set_placeholder(_decode_optional_str(record, "placeholder"))
    return draft.freeze()


ActionRowChild = TextInput


@dataclass(frozen=True)
class ActionRow:
    """An ordered row of up to five interactive components."""

    components: tuple[ActionRowChild, ...]

    def __post_init__(self) -> None:
        components = check_none_none(self.components, "components")
        if not components:
            raise ValidationError("action row must contain at least one component")
        if len(components) > ACTION_ROW_MAX_COMPONENTS:
            raise ValidationError(
                f"action row may not contain more than {ACTION_ROW_MAX_COMPONENTS} "
                f"components (got {len(components)})"
            )
        for component in components:
            if not isinstance(component, TextInput):
                raise ValidationError(
                    f"unsupported action row component {type(component).__name__}"
                )
        object.__setattr__(self, "components", tuple(components))

    @classmethod
    def of(cls, *components: Union[ActionRowChild, Iterable[ActionRowChild]]) -> "ActionRow":
        return cls(tuple(flatten_args(components, TextInput)))

    @property
    def type(self) -> int:
        return COMPONENT_TYPE_ACTION_ROW

    def __iter__(self) -> Iterator[ActionRowChild]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActionRow":
        return decode_action_row(data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": COMPONENT_TYPE_ACTION_ROW,
            "components": [component.to_dict() for component in self.components],
        }


def decode_component(record: Mapping[str, Any]) -> ActionRowChild:
    if not isinstance(record, Mapping):
        raise DecodingError("component record must be a mapping")
    component_type = record.get("type")
    if component_type == COMPONENT_TYPE_TEXT_INPUT:
        return decode_text_input(record)
    raise DecodingError(f"unsupported component type {component_type!r}")


def decode_action_row(record: Mapping[str, Any]) -> ActionRow:
    if not isinstance(record, Mapping):
        raise DecodingError("action row record must be a mapping")
    if record.get("type") != COMPONENT_TYPE_ACTION_ROW:
        raise DecodingError(
            f"expected component type {COMPONENT_TYPE_ACTION_ROW}, got {record.get('type')!r}"
        )
    children = record.get("components")
    if not isinstance(children, list) or not children:
        raise DecodingError("action row record has no components")
    decoded = [decode_component(child) for child in children]
    try:
        return ActionRow(tuple(decoded))
    except ValidationError as exc:
        raise DecodingError(f"invalid action row: {exc}") from exc
