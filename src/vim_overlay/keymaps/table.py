"""Dispatch table mapping (mode, key) to tagged commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from vim_overlay.runtime.telemetry import span

from .models import ANY_MODE, Binding, Command, KeyStroke, Passthrough, Suppress

_PASSTHROUGH = Passthrough()
_SUPPRESS = Suppress()


@dataclass(slots=True)
class TableStats:
    """Lightweight snapshot describing table state."""

    binding_count: int
    modes: tuple[str, ...]
    suppressed_count: int


class KeymapConflictError(RuntimeError):
    """Raised when a new binding collides with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class DispatchTable:
    """Owns bindings and resolves keystrokes against the current mode.

    Resolution order: bindings registered for every mode (``"*"``), then the
    bindings of the given mode, then the ``suppress_in`` fallback for plain
    printable characters, and finally passthrough.
    """

    def __init__(
        self,
        *,
        suppressed_characters: str = "",
        suppress_in: str = "normal",
        logger_name: str | None = None,
    ) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, str]] = {}
        self._suppressed = frozenset(suppressed_characters)
        self._suppress_in = suppress_in
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._remove_binding(conflict)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._remove_binding(existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._mode_index.setdefault(binding.mode, {})[
                binding.key_signature
            ] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._remove_binding(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._mode_index.get(mode, {}).values():
            yield self._bindings[binding_id]

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        """Bindings sharing the key in the same mode, or across ``"*"``."""

        if binding.mode == ANY_MODE:
            modes: Iterable[str] = tuple(self._mode_index)
        else:
            modes = (binding.mode, ANY_MODE)
        conflicts: list[Binding] = []
        for mode in modes:
            match_id = self._mode_index.get(mode, {}).get(binding.key_signature)
            if match_id is not None and match_id != binding.id:
                conflicts.append(self._bindings[match_id])
        return conflicts

    def lookup(self, mode: str, key: KeyStroke) -> Optional[Binding]:
        token = key.token
        for bucket in (ANY_MODE, mode):
            binding_id = self._mode_index.get(bucket, {}).get(token)
            if binding_id is not None:
                return self._bindings[binding_id]
        return None

    def resolve(self, mode: str, key: KeyStroke) -> Command:
        """Map a keystroke to the command it triggers in ``mode``."""

        binding = self.lookup(mode, key)
        if binding is not None:
            return binding.command
        if mode == self._suppress_in and key.is_plain and key.key in self._suppressed:
            return _SUPPRESS
        return _PASSTHROUGH

    def stats(self) -> TableStats:
        return TableStats(
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._mode_index)),
            suppressed_count=len(self._suppressed),
        )

    def _remove_binding(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        if mode_bucket.get(binding.key_signature) == binding.id:
            mode_bucket.pop(binding.key_signature, None)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)


__all__ = [
    "DispatchTable",
    "KeymapConflictError",
    "TableStats",
]
