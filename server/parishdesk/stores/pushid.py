"""Chronologically ordered, collision resistant keys.

Keys follow the layout the Firebase clients use for ``push()``: eight
characters of millisecond timestamp followed by twelve random characters,
drawn from an alphabet whose ASCII order matches its numeric order. Keys
generated in the same millisecond increment the random part so that
lexical order always equals generation order within a process.
"""

from __future__ import annotations

import secrets
import threading
import time

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"

_lock = threading.Lock()
_last_push_time = 0
_last_rand_chars: list[int] = [0] * 12


def generate_push_id(now_ms: int | None = None) -> str:
    global _last_push_time

    with _lock:
        now = int(time.time() * 1000) if now_ms is None else now_ms
        # never step backwards, otherwise ordering breaks when the clock is adjusted
        now = max(now, _last_push_time)
        duplicate_time = now == _last_push_time
        _last_push_time = now

        time_chars = [""] * 8
        for index in range(7, -1, -1):
            time_chars[index] = PUSH_CHARS[now % 64]
            now //= 64
        if now != 0:
            raise ValueError("Timestamp does not fit in eight push characters")

        if not duplicate_time:
            for index in range(12):
                _last_rand_chars[index] = secrets.randbelow(64)
        else:
            index = 11
            while index >= 0 and _last_rand_chars[index] == 63:
                _last_rand_chars[index] = 0
                index -= 1
            if index < 0:
                raise ValueError("Push id space exhausted for this millisecond")
            _last_rand_chars[index] += 1

        return "".join(time_chars) + "".join(PUSH_CHARS[value] for value in _last_rand_chars)
