"""Traditional → simplified folding."""

import pytest

from homebox.core.intent.script_normalizer import T2S, to_simplified


def test_traditional_location_words_fold_to_simplified():
    assert to_simplified("書房的櫃子裡") == "书房的柜子里"
    assert to_simplified("幫我把網絡連接線放進去") == "帮我把网络连接线放进去"


def test_unmapped_characters_pass_through():
    text = "PS5 放到了客厅 abc 123！"
    assert to_simplified(text) == text


@pytest.mark.parametrize("text", ["", "書櫃", "一次性內衣褲放到了書房", "鞋柜🙂", "　 \n"])
def test_to_simplified_is_idempotent(text):
    once = to_simplified(text)
    assert to_simplified(once) == once


def test_none_is_treated_as_empty():
    assert to_simplified(None) == ""


def test_table_values_are_never_keys():
    assert not set(T2S.values()) & set(T2S.keys())
