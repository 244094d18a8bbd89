"""Dataclasses describing keystrokes, commands, and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Union

ANY_MODE = "*"

_KEY_ALIASES = {
    "esc": "Escape",
    "escape": "Escape",
    "<esc>": "Escape",
}
_COMMAND_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def _normalize_key(key: str) -> str:
    return _KEY_ALIASES.get(key.lower(), key) if len(key) > 1 else key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press handed to the dispatcher."""

    key: str
    modifiers: tuple[str, ...] = ()
    text: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = _normalize_key(self.key)
        modifiers = _normalize_modifiers(self.modifiers)
        if len(key) == 1:
            # the character already encodes shift
            modifiers = tuple(m for m in modifiers if m != "shift")
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", modifiers)

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @property
    def is_plain(self) -> bool:
        """True when no command modifier (ctrl/alt/meta) is held."""

        return not _COMMAND_MODIFIERS.intersection(self.modifiers)

    @property
    def character(self) -> str | None:
        """Printable character this stroke would type, if any."""

        if not self.is_plain:
            return None
        candidate = self.text if self.text is not None else self.key
        if len(candidate) == 1 and candidate.isprintable():
            return candidate
        return None

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        """Parse ``"ctrl+v"``-style chords; a lone ``"+"`` is the plus key."""

        if chord == "+" or "+" not in chord[:-1]:
            return cls(chord)
        *modifiers, key = chord.split("+")
        return cls(key or "+", tuple(modifiers))


@dataclass(frozen=True, slots=True)
class Motion:
    """Cursor motion; ``direction`` is the signed step."""

    unit: Literal["char", "line", "word"]
    direction: int


@dataclass(frozen=True, slots=True)
class ModeSwitch:
    target: Literal["normal", "insert"]


@dataclass(frozen=True, slots=True)
class OperatorArm:
    """First or second key of a two-key operator chord."""

    key: str


@dataclass(frozen=True, slots=True)
class Suppress:
    """Consume the key without any document effect."""


@dataclass(frozen=True, slots=True)
class Passthrough:
    """Leave the key to the surface's default handling."""


Command = Union[Motion, ModeSwitch, OperatorArm, Suppress, Passthrough]


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a single key in one mode (or every mode) with a command."""

    id: str
    mode: str
    key: KeyStroke
    command: Command
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if isinstance(self.key, str):
            object.__setattr__(self, "key", KeyStroke.parse(self.key))

    @property
    def key_signature(self) -> str:
        return self.key.token


__all__ = [
    "ANY_MODE",
    "KeyStroke",
    "Motion",
    "ModeSwitch",
    "OperatorArm",
    "Suppress",
    "Passthrough",
    "Command",
    "Binding",
]
