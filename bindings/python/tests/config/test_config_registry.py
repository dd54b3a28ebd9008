"""
Tests for the OpenCC configuration registry (opencc_jieba.config).
"""

import logging

import pytest

from opencc_jieba.config import (
    CONFIG_NAMES,
    DEFAULT_CONFIG,
    PRE_ENCODED_CONFIGS,
    is_valid,
    resolve,
)

EXPECTED_NAMES = {
    "s2t",
    "t2s",
    "s2tw",
    "tw2s",
    "s2twp",
    "tw2sp",
    "s2hk",
    "hk2s",
    "t2tw",
    "t2twp",
    "t2hk",
    "tw2t",
    "tw2tp",
    "hk2t",
    "t2jp",
    "jp2t",
}


class TestConfigNames:
    """Tests for the fixed set of names."""

    def test_sixteen_names(self):
        """Exactly the sixteen documented names are accepted."""
        assert CONFIG_NAMES == EXPECTED_NAMES

    def test_default_is_s2t(self):
        """The fallback config is s2t."""
        assert DEFAULT_CONFIG == "s2t"
        assert DEFAULT_CONFIG in CONFIG_NAMES

    def test_names_immutable(self):
        """The name set cannot be changed at runtime."""
        assert isinstance(CONFIG_NAMES, frozenset)


class TestPreEncoded:
    """Tests for the pre-encoded table."""

    def test_every_name_pre_encoded(self):
        """Each name has an entry."""
        assert set(PRE_ENCODED_CONFIGS) == EXPECTED_NAMES

    @pytest.mark.parametrize("name", sorted(EXPECTED_NAMES))
    def test_nul_terminated_utf8(self, name):
        """Entries are the UTF-8 name followed by one zero byte."""
        encoded = PRE_ENCODED_CONFIGS[name]
        assert encoded == name.encode("utf-8") + b"\x00"
        assert encoded.count(b"\x00") == 1

    def test_read_only(self):
        """The table rejects writes."""
        with pytest.raises(TypeError):
            PRE_ENCODED_CONFIGS["s2t"] = b"t2s\x00"
        with pytest.raises(TypeError):
            del PRE_ENCODED_CONFIGS["s2t"]

    def test_resolve_returns_shared_bytes(self):
        """resolve() hands out the table's bytes, not a fresh encoding."""
        assert resolve("t2s") is PRE_ENCODED_CONFIGS["t2s"]


class TestResolve:
    """Tests for resolve() and is_valid()."""

    @pytest.mark.parametrize("name", sorted(EXPECTED_NAMES))
    def test_valid_name(self, name):
        """Valid names resolve to themselves."""
        assert is_valid(name)
        assert resolve(name) == name.encode() + b"\x00"

    @pytest.mark.parametrize("name", ["", "S2T", " s2t", "s2t\x00", "zh-tw", "s2tw2"])
    def test_unknown_name_falls_back(self, name):
        """Unknown names resolve to the default without raising."""
        assert not is_valid(name)
        assert resolve(name) == b"s2t\x00"

    @pytest.mark.parametrize("name", [None, 1, b"t2s", ["t2s"]])
    def test_non_str_falls_back(self, name):
        """Non-str values also fall back."""
        assert not is_valid(name)
        assert resolve(name) == b"s2t\x00"

    def test_fallback_logged_at_debug(self, caplog):
        """Falling back is visible at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="opencc_jieba"):
            resolve("nope")

        records = [r for r in caplog.records if r.getMessage() == "Unknown config, using default"]
        assert records
        assert records[0].scope == "convert"
