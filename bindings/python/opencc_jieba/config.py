"""
OpenCC conversion configuration names.

The native library accepts a closed set of sixteen configuration names.
Each is encoded once, at import, into the NUL-terminated bytes handed to
``opencc_jieba_convert``; the table is read-only afterwards.

Unknown names are not an error: they resolve to ``DEFAULT_CONFIG``.

Example:
    >>> from opencc_jieba.config import resolve
    >>> resolve("t2s")
    b't2s\\x00'
    >>> resolve("not-a-real-config")
    b's2t\\x00'
"""

from types import MappingProxyType

from ._logging import scoped_logger

__all__ = ["CONFIG_NAMES", "DEFAULT_CONFIG", "PRE_ENCODED_CONFIGS", "is_valid", "resolve"]

logger = scoped_logger("convert")

DEFAULT_CONFIG = "s2t"

CONFIG_NAMES = frozenset(
    {
        "s2t",  # Simplified -> Traditional
        "t2s",  # Traditional -> Simplified
        "s2tw",  # Simplified -> Traditional (Taiwan)
        "tw2s",  # Traditional (Taiwan) -> Simplified
        "s2twp",  # Simplified -> Traditional (Taiwan) with phrases
        "tw2sp",  # Traditional (Taiwan) -> Simplified with phrases
        "s2hk",  # Simplified -> Traditional (Hong Kong)
        "hk2s",  # Traditional (Hong Kong) -> Simplified
        "t2tw",  # Traditional -> Traditional (Taiwan)
        "t2twp",  # Traditional -> Traditional (Taiwan) with phrases
        "t2hk",  # Traditional -> Traditional (Hong Kong)
        "tw2t",  # Traditional (Taiwan) -> Traditional
        "tw2tp",  # Traditional (Taiwan) -> Traditional with phrases
        "hk2t",  # Traditional (Hong Kong) -> Traditional
        "t2jp",  # Traditional -> Japanese Shinjitai
        "jp2t",  # Japanese Shinjitai -> Traditional
    }
)

PRE_ENCODED_CONFIGS = MappingProxyType(
    {name: name.encode("utf-8") + b"\x00" for name in sorted(CONFIG_NAMES)}
)


def is_valid(name: object) -> bool:
    """Return True if ``name`` is one of the sixteen configuration names."""
    return isinstance(name, str) and name in CONFIG_NAMES


def resolve(name: object) -> bytes:
    """Return the pre-encoded bytes for ``name``, or for ``DEFAULT_CONFIG``.

    Never raises.
    """
    if is_valid(name):
        return PRE_ENCODED_CONFIGS[name]
    logger.debug(
        "Unknown config, using default",
        extra={"requested": repr(name), "config": DEFAULT_CONFIG},
    )
    return PRE_ENCODED_CONFIGS[DEFAULT_CONFIG]
