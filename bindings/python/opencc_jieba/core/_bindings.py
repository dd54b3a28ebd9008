"""
FFI bindings for the OpenCC/Jieba instance.

Justification: Provides C API call wrappers that handle ctypes memory
management (pooled input buffers, byref out-params, casting of returned
pointers) and pair every native output with its matching free function in a
``finally`` block, so callers only ever see plain Python values.

Each wrapper takes the loaded library and a live, non-NULL handle; state
checks belong to the caller.
"""

import ctypes
from typing import Any

from .._bindings import check
from .._codec import decode, encode
from .._marshal import KeywordWeightResult, WeightedKeyword, decode_string_array


def call_new(lib: Any) -> int:
    """Call opencc_jieba_new and return the handle (0 if NULL)."""
    return lib.opencc_jieba_new() or 0


def call_delete(lib: Any, ptr: int) -> None:
    """Destroy the native instance."""
    lib.opencc_jieba_delete(ptr)


def call_convert(lib: Any, ptr: int, text: str, config: bytes, punctuation: bool) -> str:
    """Call opencc_jieba_convert and return the converted text ("" if NULL).

    ``config`` must be one of the pre-encoded names from ``config.resolve``.
    """
    with encode(text) as text_buf:
        out = lib.opencc_jieba_convert(ptr, text_buf.buffer, config, punctuation)
        try:
            return decode(out)
        finally:
            if out:
                lib.opencc_jieba_free_string(out)


def call_zho_check(lib: Any, ptr: int, text: str) -> int:
    """Call opencc_jieba_zho_check and return the native code unchanged."""
    with encode(text) as text_buf:
        return lib.opencc_jieba_zho_check(ptr, text_buf.buffer)


def call_cut(lib: Any, ptr: int, text: str, hmm: bool) -> list[str]:
    """Call opencc_jieba_cut and return the segments ([] if NULL)."""
    with encode(text) as text_buf:
        out = lib.opencc_jieba_cut(ptr, text_buf.buffer, hmm)
        try:
            return decode_string_array(out)
        finally:
            if out:
                lib.opencc_jieba_free_string_array(out)


def call_cut_and_join(lib: Any, ptr: int, text: str, hmm: bool, delimiter: str) -> str:
    """Call opencc_jieba_cut_and_join and return the joined text ("" if NULL)."""
    with encode(text) as text_buf, encode(delimiter) as delimiter_buf:
        out = lib.opencc_jieba_cut_and_join(ptr, text_buf.buffer, hmm, delimiter_buf.buffer)
        try:
            return decode(out)
        finally:
            if out:
                lib.opencc_jieba_free_string(out)


def call_keywords(lib: Any, ptr: int, text: str, top_k: int, method: str) -> list[str]:
    """Call opencc_jieba_keywords and return keywords by relevance ([] if NULL)."""
    with encode(text) as text_buf, encode(method) as method_buf:
        out = lib.opencc_jieba_keywords(ptr, text_buf.buffer, top_k, method_buf.buffer)
        try:
            return decode_string_array(out)
        finally:
            if out:
                lib.opencc_jieba_free_string_array(out)


def call_keywords_and_weights(
    lib: Any, ptr: int, text: str, top_k: int, method: str
) -> list[WeightedKeyword]:
    """Call opencc_jieba_keywords_and_weights and return (keyword, weight) pairs.

    The triple is freed by one opencc_jieba_free_keywords_and_weights call,
    on success, on a non-zero result code, and if marshaling raises.

    Raises
    ------
        NativeOperationError: If the native call returns a non-zero code.
    """
    out_len = ctypes.c_size_t()
    out_keywords = ctypes.c_void_p()
    out_weights = ctypes.c_void_p()

    with encode(text) as text_buf, encode(method) as method_buf:
        code = lib.opencc_jieba_keywords_and_weights(
            ptr,
            text_buf.buffer,
            top_k,
            method_buf.buffer,
            ctypes.byref(out_len),
            ctypes.byref(out_keywords),
            ctypes.byref(out_weights),
        )

    with KeywordWeightResult(
        out_len.value,
        out_keywords,
        out_weights,
        lib.opencc_jieba_free_keywords_and_weights,
    ) as result:
        check(code, {"operation": "keywords_and_weights", "method": method, "top_k": top_k})
        return result.pairs()
