"""Tests for display name and description line normalization."""

import pytest

from core.text import normalize_description_line, normalize_display_name


class TestNormalizeDisplayName:

    def test_strips_rarity_and_color_tags(self):
        assert normalize_display_name("★Sword<c:red></c>") == "Sword"

    def test_strips_wrapped_color_markup(self):
        assert normalize_display_name("<c:blue>炎の剣</c>") == "炎の剣"

    def test_strips_newline_token(self):
        assert normalize_display_name("炎の<n>盾") == "炎の盾"

    def test_strips_stray_closing_tag(self):
        assert normalize_display_name("斧</c></c>") == "斧"

    def test_plain_name_unchanged(self):
        assert normalize_display_name("Axe") == "Axe"

    def test_whitespace_is_kept(self):
        assert normalize_display_name(" 鉄 の 剣 ") == " 鉄 の 剣 "

    def test_none_and_empty(self):
        assert normalize_display_name(None) == ""
        assert normalize_display_name("") == ""

    def test_token_exposed_by_removal_is_also_removed(self):
        assert normalize_display_name("<<n>c:red>剣") == "剣"

    @pytest.mark.parametrize(
        "raw",
        [
            "★Sword<c:red></c>",
            "<<n>c:red>剣",
            "<c:<n>x>y",
            "★★<c:gold>伝説の剣</c><n>",
            "<c:>broken",
            "no markup",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_display_name(raw)
        assert normalize_display_name(once) == once


class TestNormalizeDescriptionLine:

    def test_strips_control_separators(self):
        assert normalize_description_line("攻撃力\u0001+10\u0002") == "攻撃力+10"

    def test_other_whitespace_untouched(self):
        assert normalize_description_line(" a\tb \n") == " a\tb \n"

    def test_idempotent(self):
        once = normalize_description_line("\u0002x\u0001y")
        assert normalize_description_line(once) == once == "xy"

    def test_none(self):
        assert normalize_description_line(None) == ""
