from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from .checks import check_max_length, check_none_none, check_not_blank, flatten_args
from .components import ActionRow, ActionRowChild, TextInput, decode_action_row
from .constants import CUSTOM_ID_MAX_LENGTH, MODAL_MAX_ACTION_ROWS, MODAL_TITLE_MAX_LENGTH
from .errors import DecodingError, ValidationError


def _check_custom_id(custom_id: Any) -> str:
    check_not_blank(custom_id, "custom_id")
    check_max_length(custom_id, "custom_id", CUSTOM_ID_MAX_LENGTH)
    return custom_id


def _check_title(title: Any) -> str:
    check_not_blank(title, "title")
    check_max_length(title, "title", MODAL_TITLE_MAX_LENGTH)
    return title


@dataclass(frozen=True)
class Modal:
    """A dialog made of one to five action rows of text inputs."""

    custom_id: str
    title: str
    action_rows: tuple[ActionRow, ...]

    def __post_init__(self) -> None:
        _check_custom_id(self.custom_id)
        _check_title(self.title)
        rows = check_none_none(self.action_rows, "action_rows")
        for row in rows:
            if not isinstance(row, ActionRow):
                raise ValidationError(
                    f"action_rows may only contain ActionRow, got {type(row).__name__}"
                )
        if not rows:
            raise ValidationError("Cannot make a modal with no action rows")
        if len(rows) > MODAL_MAX_ACTION_ROWS:
            raise ValidationError(
                f"Cannot make a modal with more than {MODAL_MAX_ACTION_ROWS} "
                f"action rows (got {len(rows)})"
            )
        object.__setattr__(self, "action_rows", tuple(rows))

    @staticmethod
    def create(custom_id: str, title: str) -> "ModalBuilder":
        return ModalBuilder(custom_id, title)

    def create_copy(self) -> "ModalBuilder":
        return ModalBuilder(self.custom_id, self.title).add_action_rows(
            self.action_rows
        )

    @property
    def components(self) -> tuple[ActionRowChild, ...]:
        return tuple(component for row in self.action_rows for component in row)

    def to_dict(self) -> dict[str, Any]:
        return {
            "custom_id": self.custom_id,
            "title": self.title,
            "components": [row.to_dict() for row in self.action_rows],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Modal":
        return decode_modal(data)


class ModalBuilder:
    """Accumulates action rows for a :class:`Modal`.

    ``custom_id`` and ``title`` are checked on every call that sets them.
    The row count is only checked by :meth:`build`. Building does not consume
    the builder.
    """

    def __init__(self, custom_id: str, title: str) -> None:
        self._custom_id = _check_custom_id(custom_id)
        self._title = _check_title(title)
        self._rows: list[ActionRow] = []

    @property
    def custom_id(self) -> str:
        return self._custom_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def action_rows(self) -> list[ActionRow]:
        return list(self._rows)

    def set_id(self, custom_id: str) -> "ModalBuilder":
        self._custom_id = _check_custom_id(custom_id)
        return self

    def set_title(self, title: str) -> "ModalBuilder":
        self._title = _check_title(title)
        return self

    def add_action_rows(
        self, *rows: Union[ActionRow, Iterable[ActionRow]]
    ) -> "ModalBuilder":
        collected = check_none_none(flatten_args(rows, ActionRow), "action_rows")
        for row in collected:
            if not isinstance(row, ActionRow):
                raise ValidationError(
                    f"action_rows may only contain ActionRow, got {type(row).__name__}"
                )
        self._rows.extend(collected)
        return self

    def add_action_row(
        self, *components: Union[ActionRowChild, Iterable[ActionRowChild]]
    ) -> "ModalBuilder":
        return self.add_action_rows(ActionRow.of(*components))

    def build(self) -> Modal:
        return Modal(
            custom_id=self._custom_id,
            title=self._title,
            action_rows=tuple(self._rows),
        )


def decode_modal(record: Mapping[str, Any]) -> Modal:
    if not isinstance(record, Mapping):
        raise DecodingError("modal record must be a mapping")
    rows_raw = record.get("components")
    if not isinstance(rows_raw, list):
        raise DecodingError("modal record has no components")
    rows = [decode_action_row(row) for row in rows_raw]
    try:
        return (
            ModalBuilder(record.get("custom_id"), record.get("title"))  # type: ignore[arg-type]
            .add_action_rows(rows)
            .build()
        )
    except ValidationError as exc:
        raise DecodingError(f"invalid modal record: {exc}") from exc


def _text_input_from_definition(raw: Any, *, row: int, index: int) -> TextInput:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"rows[{row}][{index}] must be a mapping")
    custom_id = raw.get("custom_id", raw.get("id"))
    return TextInput.create(
        custom_id,
        raw.get("label"),
        style=raw.get("style", "short"),
        min_length=raw.get("min_length"),
        max_length=raw.get("max_length"),
        required=raw.get("required", False),
        value=raw.get("value"),
        placeholder=raw.get("placeholder"),
    )


def modal_from_definition(definition: Mapping[str, Any]) -> Modal:
    """Build a modal from a plain mapping, e.g. one loaded from YAML.

    The mapping holds ``custom_id``, ``title`` and ``rows``: a list of rows,
    each a list of text input mappings (or a single mapping for a one-input
    row). Styles may be given by name (``short``/``paragraph``) or code.
    """
    if not isinstance(definition, Mapping):
        raise ValidationError("modal definition must be a mapping")
    builder = ModalBuilder(definition.get("custom_id"), definition.get("title"))  # type: ignore[arg-type]
    rows: Optional[Any] = definition.get("rows")
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        raise ValidationError("rows must be a list")
    for row_index, row in enumerate(rows):
        entries = row if isinstance(row, list) else [row]
        builder.add_action_row(
            [
                _text_input_from_definition(entry, row=row_index, index=index)
                for index, entry in enumerate(entries)
            ]
        )
    return builder.build()
