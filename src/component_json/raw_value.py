from __future__ import annotations

from component_json.errors import ArgumentError


class RawValue:
    """A string rendered without quotes when serialized.

    Serializing the key ``someKey`` with ``RawValue("Value")`` produces
    ``{"someKey":Value}``. The caller must make sure the text is a real
    JavaScript expression in the page that consumes it.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str | None) -> None:
        if value is None or value.strip() == "":
            raise ArgumentError("value", "Argument 'value' may not be null or empty.")
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawValue):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((RawValue, self._value))

    def __repr__(self) -> str:
        return f"RawValue({self._value!r})"

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_value"):
            raise AttributeError("RawValue is immutable")
        object.__setattr__(self, name, value)


__all__ = ["RawValue"]
