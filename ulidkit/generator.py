from __future__ import annotations

import secrets
from datetime import datetime, timezone
from threading import RLock
from typing import Callable

from ulidkit.ulid import ULID


def current_timestamp() -> int:
    """Milliseconds since the Unix epoch"""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def random_byte() -> int:
    return secrets.randbits(8)


class Generator:
    """Binds a clock and an entropy source so ULIDs can be made without arguments"""

    clock: Callable[[], int] = staticmethod(current_timestamp)
    entropy: Callable[[], int] = staticmethod(random_byte)

    def __init__(
            self,
            clock: Callable[[], int] | None = None,
            entropy: Callable[[], int] | None = None,
    ):
        if clock:
            self.clock = clock
        if entropy:
            self.entropy = entropy
        self.lock = RLock()

    def __str__(self) -> str:
        return f'{self.__class__.__name__}(clock={self.clock!r}, entropy={self.entropy!r})'

    __repr__ = __str__

    def new(self) -> ULID:
        # A stateful entropy source must not be shared mid-ULID
        with self.lock:
            return ULID.new(self.clock(), self.entropy)

    def new_str(self) -> str:
        return self.new().marshal()


_default = Generator()


def new() -> str:
    return _default.new_str()
