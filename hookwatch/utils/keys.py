# hookwatch/utils/keys.py
# Round-robin API key pool. The cursor starts at a random offset so that
# several deployments sharing one pool do not all hit the same key first.

from __future__ import annotations
import random
from typing import List, Optional, Sequence

from ..config import ConfigError


class KeyPool:
    def __init__(self, keys: Sequence[str], start: Optional[int] = None, rng: random.Random | None = None):
        self._keys: List[str] = [k for k in keys if k]
        if not self._keys:
            raise ConfigError("Key pool needs at least one API key.")
        if start is None:
            start = (rng or random).randrange(len(self._keys))
        self._cursor = start % len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def cursor(self) -> int:
        return self._cursor

    def next(self) -> str:
        """Return the current key and advance, wrapping at the end."""
        key = self._keys[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._keys)
        return key
