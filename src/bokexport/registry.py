"""Keyed registries that collapse repeated entities into one record."""

from __future__ import annotations

import hashlib
from typing import Callable, Dict, Generic, Hashable, Iterator, List, Protocol, TypeVar


class SupportsBacklinks(Protocol):
    @property
    def backlinks(self) -> List[int]:
        ...


K = TypeVar("K", bound=Hashable)
P = TypeVar("P", bound=SupportsBacklinks)


def text_key(text: str) -> str:
    """Return the deduplication key for a free-text entity."""

    return hashlib.md5(text.strip().encode("utf-8"), usedforsecurity=False).hexdigest()


class DedupRegistry(Generic[K, P]):
    """Map a content-derived key to one canonical payload.

    Payloads are created on the first ``upsert`` of a key; every ``upsert``
    appends the referencing node id to the payload's backlinks. Iteration
    follows first-insertion order.
    """

    def __init__(self) -> None:
        self._entries: Dict[K, P] = {}

    def upsert(self, key: K, factory: Callable[[], P], node_id: int) -> P:
        payload = self._entries.get(key)
        if payload is None:
            payload = factory()
            self._entries[key] = payload
        payload.backlinks.append(node_id)
        return payload

    def get(self, key: K) -> P | None:
        return self._entries.get(key)

    def all(self) -> List[P]:
        return list(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[P]:
        return iter(self._entries.values())


__all__ = ["DedupRegistry", "SupportsBacklinks", "text_key"]
