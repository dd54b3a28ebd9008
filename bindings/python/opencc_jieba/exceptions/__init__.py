"""
opencc_jieba exceptions.

This module defines the exception hierarchy for opencc_jieba:

    OpenccJiebaError (base)
    ├── LibraryNotFoundError - Native shared library cannot be loaded
    ├── InitializationError - Native instance creation returned NULL
    ├── StateError - Invalid object state errors
    │   └── DisposedError - Instance used after close()
    ├── NativeOperationError - Native call reported a non-zero result code
    ├── InteropError - Native output could not be marshaled
    └── ValidationError - Invalid parameter value
"""

from .exceptions import (
    DisposedError,
    InitializationError,
    InteropError,
    LibraryNotFoundError,
    NativeOperationError,
    OpenccJiebaError,
    StateError,
    ValidationError,
)

# =============================================================================
# Public API - See opencc_jieba/__init__.py for the top-level re-exports
# =============================================================================
__all__ = [
    # Base
    "OpenccJiebaError",
    # Loader
    "LibraryNotFoundError",
    # Lifecycle
    "InitializationError",
    "StateError",
    "DisposedError",
    # Native calls
    "NativeOperationError",
    # Interop
    "InteropError",
    # Validation
    "ValidationError",
]
