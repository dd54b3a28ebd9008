"""
UTF-8 string codec for the C boundary.

Python ``str`` values are encoded into NUL-terminated UTF-8 scratch buffers
borrowed from a shared pool, and native NUL-terminated UTF-8 strings are
decoded back into ``str``. Decoding never frees native memory; the caller
owns that through the matching free function.

Justification: ctypes ``c_char_p`` conversion of ``bytes`` allocates a fresh
copy per call. Pooled ``c_char`` arrays are reused across calls, and the
``EncodedBuffer`` context manager returns them on every exit path.
"""

from __future__ import annotations

import ctypes
import threading
from typing import Any

from .exceptions import InteropError, StateError, ValidationError

__all__ = ["BufferPool", "EncodedBuffer", "decode", "encode", "get_buffer_pool"]

_MIN_CAPACITY = 64
_MAX_RETAINED_PER_CAPACITY = 8
# Larger buffers are handed out but dropped on return instead of kept idle
_MAX_RETAINED_CAPACITY = 1 << 20


class BufferPool:
    """
    Thread-safe pool of ``c_char`` scratch buffers.

    Capacities are rounded up to powers of two so buffers are reusable
    across inputs of similar size. At most ``max_retained`` idle buffers are
    kept per capacity.

    Attributes
    ----------
    outstanding : int
        Buffers rented and not yet given back.
    retained : int
        Idle buffers held for reuse.
    """

    def __init__(
        self,
        *,
        min_capacity: int = _MIN_CAPACITY,
        max_retained: int = _MAX_RETAINED_PER_CAPACITY,
        max_retained_capacity: int = _MAX_RETAINED_CAPACITY,
    ):
        self._min_capacity = min_capacity
        self._max_retained = max_retained
        self._max_retained_capacity = max_retained_capacity
        self._lock = threading.Lock()
        self._idle: dict[int, list[ctypes.Array]] = {}
        self._rented: dict[int, ctypes.Array] = {}

    def _capacity_for(self, size: int) -> int:
        if size <= self._min_capacity:
            return self._min_capacity
        return 1 << (size - 1).bit_length()

    def rent(self, size: int) -> ctypes.Array:
        """Borrow a buffer of at least ``size`` bytes."""
        capacity = self._capacity_for(size)
        with self._lock:
            bucket = self._idle.get(capacity)
            buffer = bucket.pop() if bucket else None
            if buffer is None:
                buffer = ctypes.create_string_buffer(capacity)
            self._rented[id(buffer)] = buffer
        return buffer

    def give_back(self, buffer: ctypes.Array) -> None:
        """Return a buffer obtained from ``rent()``.

        Raises
        ------
            StateError: If the buffer is not currently rented from this pool.
        """
        with self._lock:
            key = id(buffer)
            if key not in self._rented:
                raise StateError("Buffer was not rented from this pool", code="POOL_MISMATCH")
            del self._rented[key]
            capacity = len(buffer)
            if capacity > self._max_retained_capacity:
                return
            bucket = self._idle.setdefault(capacity, [])
            if len(bucket) < self._max_retained:
                bucket.append(buffer)

    @property
    def outstanding(self) -> int:
        with self._lock:
            return len(self._rented)

    @property
    def retained(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._idle.values())

    def clear(self) -> None:
        """Drop all idle buffers. Rented buffers are unaffected."""
        with self._lock:
            self._idle.clear()

    def __repr__(self) -> str:
        return f"BufferPool(outstanding={self.outstanding}, retained={self.retained})"


_pool = BufferPool()


def get_buffer_pool() -> BufferPool:
    """Return the process-wide scratch buffer pool."""
    return _pool


class EncodedBuffer:
    """
    A pooled NUL-terminated UTF-8 buffer.

    Pass ``buffer`` to a ``c_char_p`` argument. Release exactly once, best
    with ``with encode(text) as buf:``; further ``release()`` calls are no-ops.

    Attributes
    ----------
    length : int
        UTF-8 byte count plus the terminating zero byte.
    """

    __slots__ = ("_buffer", "_pool", "length")

    def __init__(self, buffer: ctypes.Array, length: int, pool: BufferPool):
        self._buffer: ctypes.Array | None = buffer
        self._pool = pool
        self.length = length

    @property
    def buffer(self) -> ctypes.Array:
        if self._buffer is None:
            raise StateError("EncodedBuffer has been released")
        return self._buffer

    @property
    def released(self) -> bool:
        return self._buffer is None

    def to_bytes(self) -> bytes:
        """Copy of the encoded bytes, terminator included."""
        return self.buffer.raw[: self.length]

    def release(self) -> None:
        """Give the buffer back to its pool. Idempotent."""
        buffer, self._buffer = self._buffer, None
        if buffer is not None:
            self._pool.give_back(buffer)

    def __enter__(self) -> EncodedBuffer:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._buffer is None else f"length={self.length}"
        return f"EncodedBuffer({state})"


def _to_utf8(text: str) -> bytes:
    if not isinstance(text, str):
        raise ValidationError(
            f"Expected str, got {type(text).__name__}",
            details={"type": type(text).__name__},
        )
    if "\x00" in text:
        # The native side would silently stop at the first NUL
        raise ValidationError(
            "Text must not contain NUL characters", details={"position": text.index("\x00")}
        )
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValidationError(
            f"Text is not encodable as UTF-8: {exc.reason}",
            details={"start": exc.start, "end": exc.end},
        ) from exc


def encode(text: str, pool: BufferPool | None = None) -> EncodedBuffer:
    """Encode ``text`` into a pooled NUL-terminated UTF-8 buffer.

    Raises
    ------
        ValidationError: If ``text`` is not a str, contains NUL or lone surrogates.
    """
    data = _to_utf8(text)
    pool = pool or _pool
    size = len(data)
    buffer = pool.rent(size + 1)
    ctypes.memmove(buffer, data, size)
    buffer[size] = b"\x00"
    return EncodedBuffer(buffer, size + 1, pool)


def _address(ptr: Any) -> int:
    """Normalize a raw pointer (int, None or c_void_p) to an int address."""
    if ptr is None:
        return 0
    if isinstance(ptr, int):
        return ptr
    if isinstance(ptr, ctypes.c_void_p):
        return ptr.value or 0
    raise InteropError(f"Unsupported pointer type: {type(ptr).__name__}")


def decode(ptr: Any) -> str:
    """Decode a native NUL-terminated UTF-8 string.

    Returns "" for a NULL pointer. Reads up to, not including, the first
    zero byte. Does not free ``ptr``.

    Raises
    ------
        InteropError: If the bytes are not valid UTF-8.
    """
    address = _address(ptr)
    if not address:
        return ""
    raw = ctypes.string_at(address)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InteropError(
            "Native string is not valid UTF-8",
            details={"start": exc.start, "end": exc.end, "length": len(raw)},
        ) from exc
