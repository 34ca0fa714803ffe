"""Repository state snapshot and its canonical textual encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from gitwatch.exceptions import StateFileError

# Placeholder name carrying the leading success flag.
RETRIEVED_STATE_NAME = "GIT_RETRIEVED_STATE"

# Revision substituted when HEAD cannot be resolved.
NOTFOUND_SENTINEL = "GIT-NOTFOUND"

PropertyValue = str | bool


def render_value(value: PropertyValue) -> str:
    """Render a property value the way CMake's configure_file would see it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


@dataclass(frozen=True)
class Snapshot:
    """Ordered capture of the tracked repository properties at one point in time.

    ``properties`` keeps the extraction order; equality is structural, so two
    snapshots are equal only if every name and value matches in sequence.
    """

    success: bool
    properties: tuple[tuple[str, PropertyValue], ...] = field(default_factory=tuple)

    def names(self) -> list[str]:
        return [name for name, _ in self.properties]

    def get(self, name: str) -> PropertyValue:
        for key, value in self.properties:
            if key == name:
                return value
        raise KeyError(name)

    def as_list(self) -> list[str]:
        """Flatten to ``[success, value1, value2, ...]`` as strings."""
        return [render_value(self.success), *(render_value(v) for _, v in self.properties)]

    def serialize(self) -> str:
        """Return the canonical encoding written to and compared with the state file."""
        return json.dumps(self.as_list(), separators=(",", ":"))

    def template_values(self) -> dict[str, str]:
        """Map every placeholder name to its rendered value."""
        values = {RETRIEVED_STATE_NAME: render_value(self.success)}
        values.update((name, render_value(value)) for name, value in self.properties)
        return values

    @classmethod
    def deserialize(cls, text: str, names: list[str]) -> Snapshot:
        """Decode a persisted state back into a snapshot with the given property names.

        Raises StateFileError if the text is not a flat string list of the
        expected length. Booleans come back as the strings ``"true"``/``"false"``
        except for the success flag.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"State file is not valid: {exc}"
            raise StateFileError(msg) from exc
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            msg = "State file must contain a flat list of strings"
            raise StateFileError(msg)
        if len(data) != len(names) + 1:
            msg = f"State file has {len(data)} entries, expected {len(names) + 1}"
            raise StateFileError(msg)
        if data[0] not in ("true", "false"):
            msg = f"Invalid success flag in state file: {data[0]!r}"
            raise StateFileError(msg)
        return cls(
            success=data[0] == "true",
            properties=tuple(zip(names, data[1:], strict=True)),
        )
