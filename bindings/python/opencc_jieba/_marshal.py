"""
Marshaling of native string arrays and keyword/weight triples.

Justification: the native side returns raw ``char**`` and ``double*``
arrays; walking them needs ``ctypes.cast`` to typed pointers. Nothing here
frees memory except ``KeywordWeightResult.release()``, which owns the one
combined free call for the triple.
"""

from __future__ import annotations

import ctypes
from collections.abc import Callable
from typing import Any, NamedTuple

from ._codec import _address, decode
from .exceptions import InteropError, StateError

__all__ = [
    "KeywordWeightResult",
    "WeightedKeyword",
    "decode_string_array",
    "decode_weighted_array",
]

_CharPtrArray = ctypes.POINTER(ctypes.c_void_p)
_DoubleArray = ctypes.POINTER(ctypes.c_double)


class WeightedKeyword(NamedTuple):
    """A keyword and its relevance weight, as ranked by the native extractor."""

    keyword: str
    weight: float


def decode_string_array(ptr: Any) -> list[str]:
    """Decode a NULL-terminated array of UTF-8 C strings.

    Returns [] for a NULL array. Order is preserved.
    """
    address = _address(ptr)
    if not address:
        return []

    items = ctypes.cast(address, _CharPtrArray)
    words: list[str] = []
    i = 0
    while True:
        element = items[i]
        if not element:
            break
        words.append(decode(element))
        i += 1
    return words


def decode_weighted_array(count: int, strings_ptr: Any, weights_ptr: Any) -> list[WeightedKeyword]:
    """Zip ``count`` strings and ``count`` doubles into ``WeightedKeyword`` pairs.

    Raises
    ------
        InteropError: If ``count`` is non-zero but either array is NULL.
    """
    if count <= 0:
        return []

    strings_address = _address(strings_ptr)
    weights_address = _address(weights_ptr)
    if not strings_address or not weights_address:
        raise InteropError(
            "Native keyword result has entries but a NULL array",
            details={
                "count": count,
                "keywords_null": not strings_address,
                "weights_null": not weights_address,
            },
        )

    strings = ctypes.cast(strings_address, _CharPtrArray)
    weights = ctypes.cast(weights_address, _DoubleArray)
    return [WeightedKeyword(decode(strings[i]), weights[i]) for i in range(count)]


class KeywordWeightResult:
    """
    Owner of one ``keywords_and_weights`` output triple.

    The count, the keyword array and the weight array share one lifetime and
    are freed together by ``free_fn(keywords, weights, count)``. ``release()``
    runs that call at most once, and only when both arrays are non-NULL.

    Use as a context manager so release happens even if ``pairs()`` raises::

        with KeywordWeightResult(n, kw, w, lib.opencc_jieba_free_keywords_and_weights) as result:
            return result.pairs()
    """

    __slots__ = ("count", "_keywords", "_weights", "_free_fn", "_released")

    def __init__(
        self,
        count: int,
        keywords_ptr: Any,
        weights_ptr: Any,
        free_fn: Callable[[int, int, int], None],
    ):
        self.count = count
        self._keywords = _address(keywords_ptr)
        self._weights = _address(weights_ptr)
        self._free_fn = free_fn
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def pairs(self) -> list[WeightedKeyword]:
        """Marshal the triple into ``WeightedKeyword`` pairs in native order."""
        if self._released:
            raise StateError("Keyword result has already been released")
        return decode_weighted_array(self.count, self._keywords, self._weights)

    def release(self) -> None:
        """Free the triple through the combined native call. Idempotent."""
        if self._released:
            return
        self._released = True
        if self._keywords and self._weights:
            self._free_fn(self._keywords, self._weights, self.count)

    def __enter__(self) -> KeywordWeightResult:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"KeywordWeightResult(count={self.count}, released={self._released})"
