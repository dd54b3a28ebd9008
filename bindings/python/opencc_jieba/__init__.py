"""
opencc_jieba - OpenCC conversion and Jieba segmentation from Python.

Thin bindings over the native ``opencc_jieba_capi`` library. The native
module does the linguistic work; this package manages the native instance,
moves text across the C boundary as NUL-terminated UTF-8, and frees every
native allocation it is handed back.

Quick Start
-----------

    >>> from opencc_jieba import OpenccJieba
    >>>
    >>> with OpenccJieba() as oj:
    ...     oj.convert("龙马精神", "s2t")
    '龍馬精神'

Segmentation and keywords:

    >>> oj = OpenccJieba()
    >>> oj.jieba_cut("我来到北京清华大学")
    ['我', '来到', '北京', '清华大学']
    >>> oj.jieba_cut_and_join("我来到北京清华大学", delimiter="|")
    '我|来到|北京|清华大学'
    >>> oj.jieba_keyword_extract_textrank("我来到北京清华大学", top_k=5)
    ['清华大学', '北京', '来到', '我']
    >>> oj.close()


Conversion Configs
------------------

``convert()`` accepts one of the sixteen names in ``CONFIG_NAMES``::

    s2t t2s s2tw tw2s s2twp tw2sp s2hk hk2s
    t2tw t2twp t2hk tw2t tw2tp hk2t t2jp jp2t

Any other value silently falls back to ``"s2t"``.


Threading
---------

An ``OpenccJieba`` instance is not safe for concurrent use. Serialize calls
or create one instance per thread.


Environment
-----------

- ``OPENCC_JIEBA_LIB`` - full path to the native library
- ``OPENCC_JIEBA_LOG_LEVEL`` - trace|debug|info|warn|error|fatal|off
- ``OPENCC_JIEBA_LOG_FORMAT`` - json|human
"""

from ._logging import setup_logging
from .config import CONFIG_NAMES, DEFAULT_CONFIG
from .core import KEYWORD_METHODS, NO_CHINESE, OpenccJieba, WeightedKeyword
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

__all__ = [
    # Core
    "OpenccJieba",
    "WeightedKeyword",
    # Constants
    "CONFIG_NAMES",
    "DEFAULT_CONFIG",
    "KEYWORD_METHODS",
    "NO_CHINESE",
    # Logging
    "setup_logging",
    # Exceptions
    "OpenccJiebaError",
    "LibraryNotFoundError",
    "InitializationError",
    "StateError",
    "DisposedError",
    "NativeOperationError",
    "InteropError",
    "ValidationError",
]
