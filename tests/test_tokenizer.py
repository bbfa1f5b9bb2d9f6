import pytest

from core.domain.errors import TokenLimitExceeded
from core.services.tokenizer import MAX_TOKENS, split


def test_splits_on_single_spaces():
    tokens, count = split("ls -l /tmp")
    assert tokens == ["ls", "-l", "/tmp"]
    assert count == 3


def test_runs_of_spaces_collapse():
    tokens, count = split("  echo    hi   there  ")
    assert tokens == ["echo", "hi", "there"]
    assert count == 3


@pytest.mark.parametrize("line", ["", " ", "      "])
def test_blank_line_yields_no_tokens(line):
    assert split(line) == ([], 0)


def test_only_space_separates_tokens():
    tokens, _ = split("printf a\tb")
    assert tokens == ["printf", "a\tb"]


def test_control_tokens_are_plain_tokens_here():
    tokens, _ = split("cat < in.txt | wc &")
    assert tokens == ["cat", "<", "in.txt", "|", "wc", "&"]


def test_exact_limit_keeps_order():
    words = [f"w{i}" for i in range(MAX_TOKENS)]
    tokens, count = split(" ".join(words))
    assert tokens == words
    assert count == MAX_TOKENS == 39


def test_caller_line_is_untouched():
    line = "echo  a  b"
    split(line)
    assert line == "echo  a  b"


def test_over_limit_reports_and_truncates():
    words = [f"w{i}" for i in range(45)]
    with pytest.raises(TokenLimitExceeded) as info:
        split(" ".join(words))
    exc = info.value
    assert exc.code == "TokenLimitExceeded"
    assert exc.tokens == words[:39]
    assert exc.discarded == 6
    assert exc.limit == 39


def test_custom_limit():
    with pytest.raises(TokenLimitExceeded) as info:
        split("a b c", limit=2)
    assert info.value.tokens == ["a", "b"]
