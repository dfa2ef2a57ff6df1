"""Keymap registry responsible for storing bindings per keymap mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from edit_engine.runtime.telemetry import span

from .models import Binding


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a token another binding owns."""

    def __init__(self, binding: Binding, conflict: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{conflict.id}'"
            f" on {binding.mode}:{binding.token}"
        )
        self.binding = binding
        self.conflict = conflict


class KeymapRegistry:
    """Owns binding metadata, indexed by mode and token."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, str]] = {}
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
            conflict = self.detect_conflict(binding)
            if conflict is not None and not replace:
                handle.add_metadata("conflict", conflict.id)
                raise KeymapConflictError(binding, conflict)

            if replace:
                if conflict is not None:
                    self._remove_binding(conflict)
                existing = self._bindings.get(binding.id)
                if existing is not None:
                    self._remove_binding(existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._mode_index.setdefault(binding.mode, {})[binding.token] = binding.id
            self._touch()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._remove_binding(binding)
        self._touch()
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._mode_index.get(mode, {}).values():
            yield self._bindings[binding_id]

    def resolve(self, mode: str, token: str) -> Optional[Binding]:
        binding_id = self._mode_index.get(mode, {}).get(token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def detect_conflict(self, binding: Binding) -> Optional[Binding]:
        owner = self._mode_index.get(binding.mode, {}).get(binding.token)
        if owner is None or owner == binding.id:
            return None
        return self._bindings[owner]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._mode_index)),
        )

    def _remove_binding(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        tokens = self._mode_index.get(binding.mode)
        if not tokens:
            return
        if tokens.get(binding.token) == binding.id:
            tokens.pop(binding.token)
        if not tokens:
            self._mode_index.pop(binding.mode, None)

    def _touch(self) -> None:
        self._revision += 1


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
