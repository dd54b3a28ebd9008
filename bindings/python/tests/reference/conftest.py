"""
Fixtures for reference tests against the real opencc_jieba_capi library.

These tests validate the bindings against the native library's actual
OpenCC dictionaries and Jieba models. They are skipped when the library
cannot be loaded; set OPENCC_JIEBA_LIB to run them.
"""

import pytest


@pytest.fixture(scope="module")
def real_oj(native_lib):
    """A module-scoped instance over the real library."""
    from opencc_jieba import OpenccJieba

    instance = OpenccJieba()
    yield instance
    instance.close()
