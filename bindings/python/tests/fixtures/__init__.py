"""
Shared test fixtures for opencc_jieba.

- native: FakeNativeLib, an allocation-tracking stand-in for opencc_jieba_capi,
  and bind_signatures(), which exposes it through ctypes function pointers
"""

from .native import FakeNativeLib, bind_signatures

__all__ = ["FakeNativeLib", "bind_signatures"]
