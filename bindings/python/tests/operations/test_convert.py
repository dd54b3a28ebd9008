"""
Tests for OpenccJieba.convert() and OpenccJieba.zho_check().

Run against FakeNativeLib; conftest asserts every native string is freed
exactly once and every pooled buffer is returned.
"""

import pytest

from opencc_jieba import CONFIG_NAMES, NO_CHINESE, InteropError, ValidationError


class TestConvert:
    """Tests for convert()."""

    def test_s2t(self, oj):
        """Simplified to Traditional."""
        assert oj.convert("龙马精神", "s2t") == "龍馬精神"

    def test_t2s(self, oj):
        """Traditional to Simplified."""
        assert oj.convert("龍馬精神", "t2s") == "龙马精神"

    def test_round_trip(self, oj):
        """s2t followed by t2s gives back the original fixture."""
        assert oj.convert(oj.convert("龙马精神", "s2t"), "t2s") == "龙马精神"

    def test_s2twp_phrases(self, oj):
        """Taiwan phrase conversion."""
        assert oj.convert("这是一项意大利商务项目", "s2twp") == "這是一項義大利商務專案"

    def test_punctuation(self, oj, fake_lib):
        """punctuation=True also converts quotation marks."""
        assert oj.convert("“龙马精神”", "s2tw", punctuation=True) == "「龍馬精神」"
        assert fake_lib.calls[-1][1]["punctuation"] is True

    def test_punctuation_off_by_default(self, oj, fake_lib):
        """Punctuation is left alone unless requested."""
        assert oj.convert("“龙马精神”", "s2tw") == "“龍馬精神”"
        assert fake_lib.calls[-1][1]["punctuation"] is False

    def test_default_config_is_s2t(self, oj, fake_lib):
        """Omitting config converts with s2t."""
        assert oj.convert("龙马精神") == "龍馬精神"
        assert fake_lib.calls[-1][1]["config"] == "s2t"

    @pytest.mark.parametrize("config", sorted(CONFIG_NAMES))
    def test_valid_config_passed_verbatim(self, oj, fake_lib, config):
        """Each of the sixteen names reaches the native side unchanged."""
        oj.convert("龙马精神", config)
        assert fake_lib.calls[-1][1]["config"] == config

    @pytest.mark.parametrize("config", ["", "S2T", "s2x", "zh-hans", None, 42])
    def test_invalid_config_behaves_like_s2t(self, oj, fake_lib, config):
        """Unknown configs are not an error: they convert as s2t."""
        assert oj.convert("龙马精神", config) == oj.convert("龙马精神", "s2t")
        assert fake_lib.calls[-2][1]["config"] == "s2t"

    def test_empty_input_makes_no_native_call(self, oj, fake_lib):
        """Empty text returns "" without calling the native side."""
        assert oj.convert("", "s2t") == ""
        assert oj.convert("", "not-a-config") == ""
        assert fake_lib.calls == []

    def test_non_chinese_text_unchanged(self, oj):
        """Text without convertible characters passes through."""
        assert oj.convert("hello, world 123", "s2t") == "hello, world 123"

    def test_null_output_gives_empty(self, oj, fake_lib):
        """A NULL native result is an empty string, not an error."""
        fake_lib.null_outputs.add("convert")
        assert oj.convert("龙马精神") == ""
        assert fake_lib.freed == []

    def test_output_freed_once(self, oj, fake_lib):
        """The returned string is freed exactly once through free_string."""
        oj.convert("龙马精神")
        assert [kind for kind, _ in fake_lib.freed] == ["string"]

    def test_invalid_utf8_output_raises_and_frees(self, oj, fake_lib):
        """Malformed native output raises InteropError and is still freed."""
        fake_lib.invalid_utf8.add("convert")

        with pytest.raises(InteropError):
            oj.convert("龙马精神")

        assert [kind for kind, _ in fake_lib.freed] == ["string"]

    def test_long_input(self, oj):
        """Inputs larger than the pool's retention limit still convert."""
        text = "龙马精神" * 100_000
        assert oj.convert(text) == "龍馬精神" * 100_000

    def test_embedded_nul_rejected(self, oj, fake_lib):
        """Text with a NUL character is rejected before the native call."""
        with pytest.raises(ValidationError):
            oj.convert("龙\x00马")
        assert fake_lib.calls == []

    def test_lone_surrogate_rejected(self, oj, fake_lib):
        """Text that is not encodable as UTF-8 is rejected."""
        with pytest.raises(ValidationError):
            oj.convert("龙\ud800")
        assert fake_lib.calls == []

    def test_non_str_rejected(self, oj):
        """Non-str text raises ValidationError."""
        with pytest.raises(ValidationError):
            oj.convert(b"\xe9\xbe\x99")


class TestZhoCheck:
    """Tests for zho_check()."""

    def test_simplified(self, oj):
        """Simplified text is classified as 2."""
        assert oj.zho_check("龙马精神") == 2

    def test_traditional(self, oj):
        """Traditional text is classified as 1."""
        assert oj.zho_check("龍馬精神") == 1

    def test_no_chinese(self, oj):
        """Text without Chinese gives the native 0 code."""
        assert oj.zho_check("hello") == NO_CHINESE

    def test_empty_input_makes_no_native_call(self, oj, fake_lib):
        """Empty text returns NO_CHINESE without calling the native side."""
        assert oj.zho_check("") == NO_CHINESE
        assert fake_lib.calls == []

    def test_nothing_to_free(self, oj, fake_lib):
        """zho_check returns a plain int; no free call is made."""
        oj.zho_check("龙马精神")
        assert fake_lib.freed == []
