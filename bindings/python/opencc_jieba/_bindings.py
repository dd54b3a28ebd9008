"""
Shared library loading and result-code checking.

The native ``opencc_jieba_capi`` library is loaded lazily on first use and
cached for the life of the process. Signatures are installed once, right
after loading, by ``_native.setup_signatures``.

Search order:

1. ``OPENCC_JIEBA_LIB`` - explicit path to the library file
2. The package directory (wheels built with ``OPENCC_JIEBA_CAPI_DIR`` bundle it)
3. The system loader (``ctypes.util.find_library``)
"""

import ctypes
import ctypes.util
import os
import threading
from pathlib import Path
from typing import Any

from ._logging import scoped_logger
from ._native import LIB_BASENAME, library_filename, setup_signatures
from .exceptions import LibraryNotFoundError, NativeOperationError

__all__ = ["LIB_ENV_VAR", "check", "get_lib", "library_filename", "library_candidates"]

logger = scoped_logger("loader")
native_logger = scoped_logger("native")

LIB_ENV_VAR = "OPENCC_JIEBA_LIB"

_lib: Any = None
_lib_lock = threading.Lock()


def library_candidates() -> list[str]:
    """List the locations tried by ``get_lib()``, in order."""
    candidates = []
    explicit = os.environ.get(LIB_ENV_VAR)
    if explicit:
        candidates.append(explicit)
    candidates.append(str(Path(__file__).resolve().parent / library_filename()))
    found = ctypes.util.find_library(LIB_BASENAME)
    if found:
        candidates.append(found)
    return candidates


def _load() -> Any:
    tried: dict[str, str] = {}
    for candidate in library_candidates():
        try:
            lib = ctypes.CDLL(candidate)
        except OSError as exc:
            tried[candidate] = str(exc)
            continue
        try:
            setup_signatures(lib)
        except AttributeError as exc:
            # An older build lacking part of the API
            tried[candidate] = str(exc)
            continue
        logger.info("Loaded native library", extra={"path": candidate})
        return lib

    logger.error("Native library not found", extra={"tried": list(tried)})
    raise LibraryNotFoundError(
        f"Cannot load {library_filename()}. Set {LIB_ENV_VAR} to its full path.",
        details={"tried": tried},
    )


def get_lib() -> Any:
    """Get the loaded library, loading it on first call.

    Raises
    ------
        LibraryNotFoundError: If no candidate location yields a loadable library.
    """
    global _lib
    if _lib is None:
        with _lib_lock:
            if _lib is None:
                _lib = _load()
    return _lib


def check(code: int, details: dict[str, Any] | None = None) -> None:
    """Raise ``NativeOperationError`` for a non-zero native result code.

    The code is passed through unchanged; the native library documents no
    taxonomy for it.
    """
    if code == 0:
        return
    details = dict(details or {})
    operation = details.get("operation", "native call")
    native_logger.error(
        "Native call failed", extra={"operation": operation, "result_code": code}
    )
    raise NativeOperationError(
        f"{operation} failed with error code: {code}",
        details=details,
        original_code=code,
    )
