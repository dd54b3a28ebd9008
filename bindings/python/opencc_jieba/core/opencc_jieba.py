"""
Chinese text conversion, segmentation and keyword extraction.

Provides the OpenccJieba class, which owns one native OpenCC/Jieba instance
and exposes its operations as plain Python calls.
"""

import threading
from typing import Any

from .._bindings import get_lib
from .._logging import scoped_logger
from .._marshal import WeightedKeyword
from .._native import C_INT_MAX, SIZE_T_MAX
from ..config import DEFAULT_CONFIG, resolve
from ..exceptions import DisposedError, InitializationError, StateError, ValidationError
from ._bindings import (
    call_convert,
    call_cut,
    call_cut_and_join,
    call_delete,
    call_keywords,
    call_keywords_and_weights,
    call_new,
    call_zho_check,
)

logger = scoped_logger("lifecycle")
keyword_logger = scoped_logger("keywords")

# zho_check result for text without Chinese content
NO_CHINESE = 0

KEYWORD_METHODS = ("textrank", "tfidf")


def _check_top_k(top_k: Any, limit: int) -> int:
    if isinstance(top_k, bool) or not isinstance(top_k, int):
        raise ValidationError(
            f"top_k must be an int, got {type(top_k).__name__}",
            details={"top_k": repr(top_k)},
        )
    if top_k < 0:
        raise ValidationError(f"top_k must be >= 0, got {top_k}", details={"top_k": top_k})
    if top_k > limit:
        raise ValidationError(
            f"top_k must be <= {limit}, got {top_k}", details={"top_k": top_k, "limit": limit}
        )
    return top_k


class OpenccJieba:
    """
    OpenCC conversion and Jieba segmentation backed by the native library.

    Each instance owns exactly one native handle, created in the constructor
    and destroyed by ``close()`` (or, as a last resort, when the object is
    garbage collected). An instance is not safe for concurrent use from
    several threads; serialize access or hold one instance per thread.

    Example:
        >>> with OpenccJieba() as oj:
        ...     oj.convert("龙马精神", "s2t")
        ...     oj.jieba_cut("我来到北京清华大学")
        '龍馬精神'
        ['我', '来到', '北京', '清华大学']

    Raises
    ------
        LibraryNotFoundError: If the native library cannot be loaded.
        InitializationError: If the native instance cannot be created.
    """

    __slots__ = ("_lib", "_ptr", "_disposed", "_lock")

    def __init__(self) -> None:
        self._disposed = False
        self._ptr = 0
        self._lock = threading.Lock()
        self._lib = get_lib()

        ptr = call_new(self._lib)
        if not ptr:
            logger.error("Native instance creation returned NULL")
            raise InitializationError()
        self._ptr = ptr
        logger.debug("Native instance created", extra={"handle": hex(ptr)})

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def _handle(self) -> int:
        """Get the native handle, raising if closed."""
        if self._disposed:
            raise DisposedError()
        # Only reachable if a finalizer-style path cleared the handle out of order
        if not self._ptr:
            raise StateError("Native instance is not initialized", code="NULL_HANDLE")
        return self._ptr

    def _release(self, *, from_finalizer: bool = False) -> None:
        with self._lock:
            if self._disposed:
                return
            ptr, self._ptr = self._ptr, 0
            self._disposed = True
        if ptr:
            call_delete(self._lib, ptr)
            if from_finalizer:
                logger.debug("Native instance destroyed by finalizer", extra={"handle": hex(ptr)})
            else:
                logger.debug("Native instance destroyed", extra={"handle": hex(ptr)})

    def close(self) -> None:
        """
        Release the native instance.

        After calling close(), every operation raises ``DisposedError``.
        Safe to call multiple times (idempotent).
        """
        self._release()

    @property
    def closed(self) -> bool:
        """True once close() has run."""
        return self._disposed

    def __enter__(self) -> "OpenccJieba":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit, calls close()."""
        self.close()

    def __del__(self):
        # __init__ may have failed before the slots were filled
        if not hasattr(self, "_lock"):
            return
        try:
            self._release(from_finalizer=True)
        except Exception:
            pass

    def __repr__(self) -> str:
        state = "closed" if self._disposed else "open"
        return f"OpenccJieba({state})"

    # =========================================================================
    # OpenCC
    # =========================================================================

    def convert(self, text: str, config: str = DEFAULT_CONFIG, punctuation: bool = False) -> str:
        """
        Convert Chinese text with an OpenCC configuration.

        Args:
            text: Text to convert.
            config: One of the sixteen names in ``opencc_jieba.CONFIG_NAMES``
                (e.g. "s2t", "t2s", "s2twp"). Unknown names fall back to "s2t".
            punctuation: Also convert punctuation (e.g. “” to 「」).

        Returns
        -------
            The converted text. Empty input returns "" without a native call.

        Raises
        ------
            DisposedError: If the instance is closed.
            ValidationError: If ``text`` cannot cross the C boundary.

        Example:
            >>> oj.convert("这是一项意大利商务项目", "s2twp")
            '這是一項義大利商務專案'
        """
        handle = self._handle
        if not text:
            return ""
        return call_convert(self._lib, handle, text, resolve(config), bool(punctuation))

    def zho_check(self, text: str) -> int:
        """
        Classify the Chinese script used in ``text``.

        Returns
        -------
            The native classification code: 1 for Traditional, 2 for
            Simplified, 0 when no Chinese is detected. Empty input returns 0
            without a native call.

        Raises
        ------
            DisposedError: If the instance is closed.
        """
        handle = self._handle
        if not text:
            return NO_CHINESE
        return call_zho_check(self._lib, handle, text)

    # =========================================================================
    # Jieba segmentation
    # =========================================================================

    def jieba_cut(self, text: str, hmm: bool = True) -> list[str]:
        """
        Segment text into words.

        Args:
            text: Text to segment.
            hmm: Use the HMM model for words missing from the dictionary.

        Returns
        -------
            Words in text order. A NULL native result gives [].

        Raises
        ------
            DisposedError: If the instance is closed.

        Example:
            >>> oj.jieba_cut("我来到北京清华大学")
            ['我', '来到', '北京', '清华大学']
        """
        return call_cut(self._lib, self._handle, text, bool(hmm))

    def jieba_cut_and_join(self, text: str, hmm: bool = True, delimiter: str = " ") -> str:
        """
        Segment text and join the words with ``delimiter`` natively.

        Returns
        -------
            The joined text. A NULL native result gives "".

        Example:
            >>> oj.jieba_cut_and_join("我来到北京清华大学", delimiter="|")
            '我|来到|北京|清华大学'
        """
        return call_cut_and_join(self._lib, self._handle, text, bool(hmm), delimiter)

    # =========================================================================
    # Jieba keywords
    # =========================================================================

    def keywords(self, text: str, top_k: int = 10, method: str = "textrank") -> list[str]:
        """
        Extract up to ``top_k`` keywords, most relevant first.

        Args:
            text: Source text.
            top_k: Maximum number of keywords.
            method: "textrank" or "tfidf". Passed to the native side unchecked.

        Raises
        ------
            DisposedError: If the instance is closed.
            ValidationError: If ``top_k`` is not an int or is outside 0..C_INT_MAX.
        """
        handle = self._handle
        top_k = _check_top_k(top_k, C_INT_MAX)
        keyword_logger.debug(
            "Extracting keywords", extra={"operation": "keywords", "method": method}
        )
        return call_keywords(self._lib, handle, text, top_k, method)

    def jieba_keyword_extract_textrank(self, text: str, top_k: int = 10) -> list[str]:
        """Extract keywords with TextRank. See ``keywords()``."""
        return self.keywords(text, top_k, "textrank")

    def jieba_keyword_extract_tfidf(self, text: str, top_k: int = 10) -> list[str]:
        """Extract keywords with TF-IDF. See ``keywords()``."""
        return self.keywords(text, top_k, "tfidf")

    def jieba_extract_keywords(
        self, text: str, top_k: int = 10, method: str = "textrank"
    ) -> list[WeightedKeyword]:
        """
        Extract keywords together with their weights.

        Returns
        -------
            ``WeightedKeyword(keyword, weight)`` pairs in native relevance
            order. Unpack into parallel sequences with
            ``keywords, weights = zip(*pairs)``.

        Raises
        ------
            DisposedError: If the instance is closed.
            ValidationError: If ``top_k`` is not an int or is outside 0..SIZE_T_MAX.
            NativeOperationError: If the native call reports a non-zero code.

        Example:
            >>> for keyword, weight in oj.jieba_extract_keywords(text, top_k=3):
            ...     print(f"{keyword}: {weight:.3f}")
        """
        handle = self._handle
        top_k = _check_top_k(top_k, SIZE_T_MAX)
        keyword_logger.debug(
            "Extracting weighted keywords",
            extra={"operation": "keywords_and_weights", "method": method},
        )
        return call_keywords_and_weights(self._lib, handle, text, top_k, method)
