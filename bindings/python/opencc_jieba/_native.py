"""
ctypes signatures for the opencc_jieba_capi C API.

Every exported function used by the bindings is listed in ``SIGNATURES`` as
``name -> (argtypes, restype)``. Pointer results are declared ``c_void_p``
rather than ``c_char_p``: ctypes would otherwise copy the string and drop the
address, leaving nothing to pass to the matching free function.
"""

import ctypes
import sys
from typing import Any

__all__ = [
    "C_INT_MAX",
    "LIB_BASENAME",
    "SIGNATURES",
    "SIZE_T_MAX",
    "library_filename",
    "setup_signatures",
]

LIB_BASENAME = "opencc_jieba_capi"

_HANDLE = ctypes.c_void_p

# Largest values the integer parameters accept; ctypes wraps anything above silently
C_INT_MAX = 2 ** (8 * ctypes.sizeof(ctypes.c_int) - 1) - 1
SIZE_T_MAX = 2 ** (8 * ctypes.sizeof(ctypes.c_size_t)) - 1

SIGNATURES: dict[str, tuple[list[Any], Any]] = {
    # Lifecycle
    "opencc_jieba_new": ([], _HANDLE),
    "opencc_jieba_delete": ([_HANDLE], None),
    # OpenCC
    "opencc_jieba_convert": (
        [_HANDLE, ctypes.c_char_p, ctypes.c_char_p, ctypes.c_bool],
        ctypes.c_void_p,
    ),
    "opencc_jieba_zho_check": ([_HANDLE, ctypes.c_char_p], ctypes.c_int),
    # Jieba segmentation
    "opencc_jieba_cut": ([_HANDLE, ctypes.c_char_p, ctypes.c_bool], ctypes.c_void_p),
    "opencc_jieba_cut_and_join": (
        [_HANDLE, ctypes.c_char_p, ctypes.c_bool, ctypes.c_char_p],
        ctypes.c_void_p,
    ),
    # Jieba keywords
    "opencc_jieba_keywords": (
        [_HANDLE, ctypes.c_char_p, ctypes.c_int, ctypes.c_char_p],
        ctypes.c_void_p,
    ),
    "opencc_jieba_keywords_and_weights": (
        [
            _HANDLE,
            ctypes.c_char_p,
            ctypes.c_size_t,  # top_k
            ctypes.c_char_p,  # method
            ctypes.POINTER(ctypes.c_size_t),  # out_len
            ctypes.POINTER(ctypes.c_void_p),  # out_keywords
            ctypes.POINTER(ctypes.c_void_p),  # out_weights
        ],
        ctypes.c_int,
    ),
    # Deallocation
    "opencc_jieba_free_string": ([ctypes.c_void_p], None),
    "opencc_jieba_free_string_array": ([ctypes.c_void_p], None),
    "opencc_jieba_free_keywords_and_weights": (
        [ctypes.c_void_p, ctypes.c_void_p, ctypes.c_size_t],
        None,
    ),
}


def setup_signatures(lib: Any) -> None:
    """Install argtypes/restype for every function in ``SIGNATURES``.

    Raises
    ------
        AttributeError: If the library does not export one of the functions.
    """
    for name, (argtypes, restype) in SIGNATURES.items():
        fn = getattr(lib, name)
        fn.argtypes = argtypes
        fn.restype = restype


def library_filename(platform: str | None = None) -> str:
    """Return the platform-specific shared library file name.

    Shared by the runtime loader and the wheel build hook, so the bundled
    file and the looked-up file always have the same name.
    """
    platform = platform or sys.platform
    if platform == "win32":
        return f"{LIB_BASENAME}.dll"
    if platform == "darwin":
        return f"lib{LIB_BASENAME}.dylib"
    return f"lib{LIB_BASENAME}.so"
