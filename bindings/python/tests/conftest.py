"""
Global pytest fixtures for opencc_jieba tests.

This module provides:
- Fault handling for native crashes
- A fake native library installed in place of opencc_jieba_capi, called
  through ctypes function pointers with the production signatures
- Leak checks: native allocations and pooled buffers must balance per test
- Access to the real library for tests marked ``requires_native``

=============================================================================
Skip Policy
=============================================================================

pytest.skip(): the real opencc_jieba_capi library cannot be loaded. It is an
external component; set OPENCC_JIEBA_LIB to run the reference tests.
Every other test runs against FakeNativeLib and never skips.
"""

import faulthandler

import pytest

from opencc_jieba import _bindings
from opencc_jieba._codec import get_buffer_pool
from opencc_jieba.exceptions import LibraryNotFoundError
from tests.fixtures.native import FakeNativeLib, bind_signatures

# Enable faulthandler to trace native crashes (segfaults)
faulthandler.enable()


@pytest.fixture(autouse=True)
def pool_balance():
    """Every pooled buffer borrowed during a test is returned by its end."""
    pool = get_buffer_pool()
    before = pool.outstanding
    yield pool
    assert pool.outstanding == before, "scratch buffer leaked from the pool"


@pytest.fixture
def fake_lib(monkeypatch):
    """Install a FakeNativeLib as the loaded library for the duration of a test.

    The installed library object holds CFUNCTYPE pointers, so the bindings
    pass through ctypes conversion exactly as with the real library. Yields
    the fake itself for inspection and fault injection.

    On teardown, asserts that no call failed inside the fake and that every
    native output was freed exactly once through its matching function.
    """
    fake = FakeNativeLib()
    monkeypatch.setattr(_bindings, "_lib", bind_signatures(fake))
    yield fake
    assert not fake.callback_errors, f"errors inside native calls: {fake.callback_errors}"
    assert not fake.invalid_frees, f"invalid or double frees: {fake.invalid_frees}"
    assert not fake.live, f"native allocations leaked: {list(fake.live.values())}"


@pytest.fixture
def oj(fake_lib):
    """An OpenccJieba instance over the fake library, closed after the test."""
    from opencc_jieba import OpenccJieba

    instance = OpenccJieba()
    yield instance
    instance.close()


@pytest.fixture(scope="session")
def native_lib():
    """The real opencc_jieba_capi library, or skip."""
    try:
        return _bindings.get_lib()
    except LibraryNotFoundError as exc:
        pytest.skip(f"opencc_jieba_capi not available: {exc}")
