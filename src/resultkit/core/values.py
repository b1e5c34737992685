"""
Tagged value model for heterogeneous named-value maps.

JSON-like input (a request body, a config document, a CLI ``--file``) is
converted once into a closed sum of value kinds. Consumers then recover the
Python type through accessors that return Results, so a kind mismatch is an
``Err(ParseError)`` instead of a runtime cast failure.

Examples:
    >>> doc = from_python({"email": "a@b.io", "age": 30}).unwrap()
    >>> doc.as_map().unwrap()["age"].as_int()
    Ok(30)
    >>> doc.as_map().unwrap()["email"].as_int().is_err()
    True
    >>> from_python({"tags": {1, 2}}).unwrap_err().path
    '$.tags'

Tags:
    tagged-union, sum-type, parsing, resultkit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from resultkit.core.errors import ParseError
from resultkit.core.result import Err, Ok, Result


class _ValueBase:
    """Shared accessors; each kind overrides the one that matches it."""

    __slots__ = ()

    kind: str = "value"

    def _mismatch(self, wanted: str) -> Err[ParseError]:
        return Err(ParseError(f"expected {wanted}, got {self.kind}"))

    def as_str(self) -> Result[str, ParseError]:
        return self._mismatch("string")

    def as_int(self) -> Result[int, ParseError]:
        return self._mismatch("integer")

    def as_float(self) -> Result[float, ParseError]:
        return self._mismatch("float")

    def as_bool(self) -> Result[bool, ParseError]:
        return self._mismatch("bool")

    def as_list(self) -> Result[tuple[Value, ...], ParseError]:
        return self._mismatch("list")

    def as_map(self) -> Result[dict[str, Value], ParseError]:
        return self._mismatch("map")

    def render(self) -> Result[str, ParseError]:
        """Text form of a scalar; containers have none."""
        return Err(ParseError(f"cannot render {self.kind} as text"))


@dataclass(frozen=True, slots=True)
class StrValue(_ValueBase):
    value: str
    kind = "string"

    def as_str(self) -> Result[str, ParseError]:
        return Ok(self.value)

    def render(self) -> Result[str, ParseError]:
        return Ok(self.value)

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class IntValue(_ValueBase):
    value: int
    kind = "integer"

    def as_int(self) -> Result[int, ParseError]:
        return Ok(self.value)

    def as_float(self) -> Result[float, ParseError]:
        return Ok(float(self.value))

    def render(self) -> Result[str, ParseError]:
        return Ok(str(self.value))

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class FloatValue(_ValueBase):
    value: float
    kind = "float"

    def as_float(self) -> Result[float, ParseError]:
        return Ok(self.value)

    def render(self) -> Result[str, ParseError]:
        return Ok(repr(self.value))

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class BoolValue(_ValueBase):
    value: bool
    kind = "bool"

    def as_bool(self) -> Result[bool, ParseError]:
        return Ok(self.value)

    def render(self) -> Result[str, ParseError]:
        return Ok("true" if self.value else "false")

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class ListValue(_ValueBase):
    items: tuple[Value, ...]
    kind = "list"

    def as_list(self) -> Result[tuple[Value, ...], ParseError]:
        return Ok(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class MapValue(_ValueBase):
    # Stored as ordered pairs so the value stays hashable.
    entries: tuple[tuple[str, Value], ...]
    kind = "map"

    def as_map(self) -> Result[dict[str, Value], ParseError]:
        return Ok(dict(self.entries))

    def get(self, key: str) -> Value | None:
        for name, value in self.entries:
            if name == key:
                return value
        return None

    def to_python(self) -> dict[str, Any]:
        return {name: value.to_python() for name, value in self.entries}


Value = StrValue | IntValue | FloatValue | BoolValue | ListValue | MapValue


def from_python(obj: Any, path: str = "$") -> Result[Value, ParseError]:
    """
    Convert JSON-like Python data into a tagged ``Value``.

    ``bool`` is checked before ``int`` since it is a subclass. Map keys must be
    strings. The first unsupported element fails the whole conversion with a
    ParseError naming its path.
    """
    if isinstance(obj, bool):
        return Ok(BoolValue(obj))
    if isinstance(obj, int):
        return Ok(IntValue(obj))
    if isinstance(obj, float):
        return Ok(FloatValue(obj))
    if isinstance(obj, str):
        return Ok(StrValue(obj))
    if isinstance(obj, (list, tuple)):
        items = []
        for index, item in enumerate(obj):
            match from_python(item, f"{path}[{index}]"):
                case Ok(value):
                    items.append(value)
                case Err() as err:
                    return err
        return Ok(ListValue(tuple(items)))
    if isinstance(obj, Mapping):
        entries = []
        for key, item in obj.items():
            if not isinstance(key, str):
                return Err(ParseError(f"map key must be a string, got {type(key).__name__}", path=path))
            match from_python(item, f"{path}.{key}"):
                case Ok(value):
                    entries.append((key, value))
                case Err() as err:
                    return err
        return Ok(MapValue(tuple(entries)))
    return Err(ParseError(f"unsupported value type {type(obj).__name__}", path=path))


__all__ = [
    "Value",
    "StrValue",
    "IntValue",
    "FloatValue",
    "BoolValue",
    "ListValue",
    "MapValue",
    "from_python",
]
