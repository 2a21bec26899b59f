"""Trie-based resolution of token sequences against the registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from modal_input.modes.mode import Mode

from .models import ActionBuilder, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))


@dataclass(slots=True)
class KeymapTrie:
    mode: Mode
    root: TrieNode = field(default_factory=TrieNode)

    def add_binding(self, binding: Binding) -> None:
        node = self.root
        for token in binding.sequence.tokens:
            node = node.child(token)
        node.bindings.append(binding.id)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    builder: ActionBuilder


@dataclass(frozen=True, slots=True)
class Resolution:
    """``match`` completes a binding, ``pending`` is a strict prefix of one."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Builds one trie per keymap mode, rebuilt when the registry changes."""

    def __init__(self, registry: KeymapRegistry) -> None:
        self._registry = registry
        self._cache: Dict[Mode, tuple[int, KeymapTrie]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        mode: Mode,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> Resolution:
        node = self._trie(mode).root
        for token in tokens:
            child = node.children.get(token)
            if child is None:
                return Resolution(status="miss")
            node = child

        match = self._select_match(node, context or {})
        if match is not None:
            return Resolution(status="match", match=match)

        next_expected = node.next_tokens()
        if next_expected:
            return Resolution(status="pending", next_expected=next_expected)
        return Resolution(status="miss")

    def reset(self, mode: Optional[Mode] = None) -> None:
        if mode is None:
            self._cache.clear()
        else:
            self._cache.pop(mode, None)

    def _trie(self, mode: Mode) -> KeymapTrie:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        trie = KeymapTrie(mode=mode)
        for binding in self._registry.iter_bindings(mode):
            trie.add_binding(binding)
        self._cache[mode] = (revision, trie)
        return trie

    def _select_match(
        self, node: TrieNode, context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [
            self._registry.get_binding(binding_id) for binding_id in node.bindings
        ]
        allowed = [binding for binding in candidates if binding.allows(context)]
        if not allowed:
            return None
        allowed.sort(key=lambda binding: (-binding.priority, binding.id))
        best = allowed[0]
        return ResolutionMatch(
            binding=best, builder=self._registry.get_builder(best.builder_id)
        )


__all__ = ["KeymapResolver", "Resolution", "ResolutionMatch"]
