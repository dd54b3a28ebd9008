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

Usage:
    try:
        oj.jieba_extract_keywords(text, top_k=5)
    except opencc_jieba.NativeOperationError as e:
        print(f"Native call failed with code {e.original_code}")
    except opencc_jieba.OpenccJiebaError as e:
        # Catch any opencc_jieba error with structured details
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")

See Also
--------
    OpenccJiebaError : Base exception for all opencc_jieba errors.
"""

from typing import Any

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


class OpenccJiebaError(Exception):
    """
    Base exception for all opencc_jieba errors.

    All opencc_jieba-specific exceptions inherit from this class, enabling:
    - Catch-all handling: ``except opencc_jieba.OpenccJiebaError``
    - Stable string-based error codes for programmatic handling
    - Structured details for debugging and logging

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "DISPOSED_ACCESS").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"operation": "keywords_and_weights"}).
    original_code : int | None
        The integer result code reported by the native library, if any.

    Example
    -------
    >>> try:
    ...     oj.jieba_extract_keywords("...", top_k=5)
    ... except opencc_jieba.OpenccJiebaError as e:
    ...     print(f"Error code: {e.code}")
    Error code: NATIVE_OPERATION_FAILED
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_code = original_code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


# =============================================================================
# Loader Errors
# =============================================================================


class LibraryNotFoundError(OpenccJiebaError, OSError):
    """
    The native ``opencc_jieba_capi`` shared library could not be loaded.

    Raised on first use when no candidate path yields a loadable library.
    ``details["tried"]`` lists every location that was attempted.

    Solutions:
    - Set ``OPENCC_JIEBA_LIB`` to the full path of the library file
    - Install a wheel that bundles the library
    - Put the library on the system loader path
    """

    def __init__(
        self,
        message: str,
        code: str = "LIBRARY_NOT_FOUND",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message, code, details, original_code)


# =============================================================================
# Lifecycle Errors
# =============================================================================


class InitializationError(OpenccJiebaError, RuntimeError):
    """
    Native instance creation failed.

    Raised when ``opencc_jieba_new`` returns a NULL handle. The Python
    object is unusable; there is nothing to close.
    """

    def __init__(
        self,
        message: str | None = None,
        code: str = "INITIALIZATION_FAILED",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        if message is None:
            message = "Failed to initialize native OpenCC/Jieba instance."
        super().__init__(message, code, details, original_code)


class StateError(OpenccJiebaError, RuntimeError):
    """
    Invalid object state error.

    Raised when an operation is attempted on an object in an invalid state:
    - Using a closed resource
    - A handle that is missing although the object was never closed
    - A marshaling guard whose native memory was already released
    """

    def __init__(
        self,
        message: str,
        code: str = "STATE_ERROR",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message, code, details, original_code)


class DisposedError(StateError):
    """
    Operation invoked after ``close()``.

    The instance stays closed; create a new one to continue.
    """

    def __init__(
        self,
        message: str | None = None,
        code: str = "DISPOSED_ACCESS",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        if message is None:
            message = "OpenccJieba instance is closed"
        super().__init__(message, code, details, original_code)


# =============================================================================
# Native Call Errors
# =============================================================================


class NativeOperationError(OpenccJiebaError, RuntimeError):
    """
    A native call reported a non-zero result code.

    The code is opaque: its meaning belongs to the native library.
    It is available as ``original_code``. No retry is attempted.
    """

    def __init__(
        self,
        message: str,
        code: str = "NATIVE_OPERATION_FAILED",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message, code, details, original_code)


class InteropError(OpenccJiebaError, TypeError):
    """
    Native output could not be converted to Python values.

    Raised when the native side hands back bytes that are not valid UTF-8,
    or a non-zero element count together with a NULL array.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTEROP_ERROR",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message, code, details, original_code)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(OpenccJiebaError, ValueError):
    """
    Invalid parameter value.

    Raised before any native call when an argument cannot be passed across
    the C boundary:
    - Text that is not a ``str``, contains a NUL character or lone surrogates
    - A negative or non-integer ``top_k``
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message, code, details, original_code)
