import pytest
from core.tokenizer import LineTokenizer, tokenize


def test_glued_move_is_split():
    assert tokenize("G0X38.0") == ["G0", "X38.0"]


def test_glued_return_is_split():
    assert tokenize("G28U0W0") == ["G28", "U0", "W0"]


def test_trailing_terminator_is_stripped():
    assert tokenize("M08;") == tokenize("M08") == ["M08"]
    assert tokenize("M08;;;") == ["M08"]


def test_only_trailing_terminators_are_stripped():
    assert tokenize("G0;X1") == ["G0;", "X1"]


def test_comment_is_removed():
    assert tokenize("G0 X10 (rapid move) Z5") == tokenize("G0 X10 Z5")
    assert tokenize("G0 X10 (rapid move) Z5") == ["G0", "X10", "Z5"]


def test_several_comments_are_removed():
    assert tokenize("(A)G1(B) X1 (C)") == ["G1", "X1"]


def test_terminator_after_comment():
    assert tokenize("M30 (END);") == ["M30"]


@pytest.mark.parametrize("line", ["", "   ", "(only a comment)", ";", "  ;;  ", "(x) ;"])
def test_blank_lines_yield_no_tokens(line):
    assert tokenize(line) == []


def test_multiple_spaces_collapse():
    assert tokenize("  G1   X1    Z2  ") == ["G1", "X1", "Z2"]


def test_letter_run_stays_with_its_value():
    assert tokenize("GOTO10") == ["GOTO10"]
    assert tokenize("N100G0") == ["N100", "G0"]


def test_letter_after_letter_does_not_split():
    assert tokenize("AND") == ["AND"]
    assert tokenize("EQ1") == ["EQ1"]


def test_conditional_line():
    assert tokenize("IF[#100EQ1]GOTO10;") == ["IF[#100", "EQ1]", "GOTO10"]


def test_sign_and_decimal_stay_with_value():
    assert tokenize("G1X-10.5Z+2.") == ["G1", "X-10.5", "Z+2."]


def test_case_is_preserved():
    assert tokenize("g1x10") == ["g1", "x10"]


def test_clean_line():
    assert LineTokenizer().clean_line("  G0 X1 (move);; ") == "G0 X1 "


def test_mask_comments_keeps_columns():
    assert LineTokenizer().mask_comments("G0 (x) X1") == "G0     X1"
