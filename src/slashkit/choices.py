from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from .checks import check_max_length, check_not_blank
from .constants import CHOICE_NAME_MAX_LENGTH
from .errors import DecodingError, ValidationError

ChoiceValue = Union[str, int, float]


@dataclass(frozen=True)
class Choice:
    """A name/value suggestion offered in an autocomplete response.

    Numeric values are kept as-is but always travel as strings on the wire.
    """

    name: str
    value: ChoiceValue

    def __post_init__(self) -> None:
        check_not_blank(self.name, "choice name")
        check_max_length(self.name, "choice name", CHOICE_NAME_MAX_LENGTH)
        if isinstance(self.value, bool) or not isinstance(
            self.value, (str, int, float)
        ):
            raise ValidationError(
                f"choice value must be a string or number, got {type(self.value).__name__}"
            )

    def as_string(self) -> str:
        return str(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.as_string()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Choice":
        if not isinstance(data, Mapping):
            raise DecodingError("choice record must be a mapping")
        try:
            return cls(name=data.get("name"), value=data.get("value"))  # type: ignore[arg-type]
        except ValidationError as exc:
            raise DecodingError(f"invalid choice record: {exc}") from exc
