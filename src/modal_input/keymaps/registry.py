"""Registry storing action builders and the bindings that reference them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Sequence

from modal_input.modes.mode import Mode
from modal_input.runtime.telemetry import span

from .models import ActionBuilder, Binding


@dataclass(slots=True)
class RegistryStats:
    builder_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding would shadow an existing one in the same context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns builders and bindings, indexed by keymap mode and key signature."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._builders: Dict[str, ActionBuilder] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[Mode, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_builder(self, builder_id: str) -> ActionBuilder:
        try:
            return self._builders[builder_id]
        except KeyError as exc:
            raise KeyError(f"Builder '{builder_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_builder(
        self, builder: ActionBuilder, *, replace: bool = False
    ) -> ActionBuilder:
        if not replace and builder.id in self._builders:
            raise ValueError(f"Builder '{builder.id}' already registered")
        self._builders[builder.id] = builder
        return builder

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            metadata={"binding_id": binding.id, "mode": binding.mode.value},
        ) as handle:
            if binding.builder_id not in self._builders:
                handle.add_metadata("missing_builder", binding.builder_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown builder "
                    f"'{binding.builder_id}'"
                )

            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)

            existing = self._bindings.get(binding.id)
            if existing and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in [*conflicts, *([existing] if existing else [])]:
                self._unindex(stale)
                self._bindings.pop(stale.id, None)

            self._bindings[binding.id] = binding
            self._index(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        self._unindex(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[Mode] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(mode, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            builder_count=len(self._builders),
            binding_count=len(self._bindings),
            modes=tuple(sorted(mode.value for mode in self._mode_index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        conflicts: list[Binding] = []
        bucket = self._mode_index.get(binding.mode, {}).get(binding.key_signature, set())
        for match_id in sorted(bucket):
            if match_id in ignored:
                continue
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def _index(self, binding: Binding) -> None:
        by_signature = self._mode_index.setdefault(binding.mode, {})
        by_signature.setdefault(binding.key_signature, set()).add(binding.id)

    def _unindex(self, binding: Binding) -> None:
        by_signature = self._mode_index.get(binding.mode)
        if not by_signature:
            return
        bucket = by_signature.get(binding.key_signature)
        if bucket is None:
            return
        bucket.discard(binding.id)
        if not bucket:
            by_signature.pop(binding.key_signature, None)
        if not by_signature:
            self._mode_index.pop(binding.mode, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Two bindings overlap unless some flag is required with opposite values."""

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    if bool(left.when) != bool(right.when):
        return False
    return dict(left_map) == dict(right_map)


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
