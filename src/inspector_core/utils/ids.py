"""
inspector_core.utils.ids

Short random identifiers for events and state scopes.

Responsibilities:
- Generate fixed-length ids from base-64/62/36 alphabets.
- Provide an injectable id strategy so callers (and tests) control id generation.

Id formats:
- `random_id()`: 10 symbols of base62 (digits + upper + lower case letters).
- `random_id_short()`: 6 symbols of base62.
"""

from __future__ import annotations

import itertools
import random
import threading
from typing import Protocol

# Slicing this alphabet yields base36 (digits + upper), base62 and base64.
_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"

DEFAULT_ID_LENGTH = 10
SHORT_ID_LENGTH = 6


class IdGenerator(Protocol):
    def random_id(self) -> str: ...

    def random_id_short(self) -> str: ...


class RandomIdGenerator:
    """
    Random ids drawn from the base62 alphabet.

    Pass a seeded `random.Random` for reproducible sequences; the default uses the
    OS entropy source.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        length: int = DEFAULT_ID_LENGTH,
        short_length: int = SHORT_ID_LENGTH,
    ) -> None:
        if length < 1 or short_length < 1:
            raise ValueError("id lengths must be positive")
        self._rng = rng or random.SystemRandom()
        self._length = length
        self._short_length = short_length

    def random_id(self) -> str:
        # Collision probability per pair is 1 / 62**10 at the default length.
        return _draw(self._rng, 62, self._length)

    def random_id_short(self) -> str:
        return _draw(self._rng, 62, self._short_length)


class SequentialIdGenerator:
    """
    Deterministic ids (`<prefix>1`, `<prefix>2`, ...). Thread-safe.
    """

    def __init__(self, prefix: str = "id_") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def random_id(self) -> str:
        with self._lock:
            return f"{self._prefix}{next(self._counter)}"

    def random_id_short(self) -> str:
        return self.random_id()


class IdHelper:
    _rng = random.SystemRandom()

    @staticmethod
    def get_base64(length: int) -> str:
        return _draw(IdHelper._rng, 64, length)

    @staticmethod
    def get_base62(length: int) -> str:
        return _draw(IdHelper._rng, 62, length)

    @staticmethod
    def get_base36(length: int) -> str:
        return _draw(IdHelper._rng, 36, length)

    @staticmethod
    def random_id() -> str:
        return IdHelper.get_base62(DEFAULT_ID_LENGTH)

    @staticmethod
    def random_id_short() -> str:
        return IdHelper.get_base62(SHORT_ID_LENGTH)


def _draw(rng: random.Random, base: int, length: int) -> str:
    symbols = _ALPHABET[:base]
    return "".join(rng.choice(symbols) for _ in range(length))


_default_generator: IdGenerator = RandomIdGenerator()


def new_event_id() -> str:
    # Default factory for `LogEvent.id` when neither the caller nor an observer supplied one.
    return _default_generator.random_id()


# --- Module Notes -----------------------------------------------------------
# Observers and sinks accept an `ids: IdGenerator` argument; only events constructed
# directly without an id fall back to `new_event_id`.
