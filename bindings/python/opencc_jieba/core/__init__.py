"""
Native OpenCC/Jieba instance.

Provides OpenccJieba, the owner of one native handle, for Chinese text
conversion, word segmentation and keyword extraction.
"""

from .._marshal import WeightedKeyword
from .opencc_jieba import KEYWORD_METHODS, NO_CHINESE, OpenccJieba

__all__ = ["KEYWORD_METHODS", "NO_CHINESE", "OpenccJieba", "WeightedKeyword"]
