import pytest

from minishell.syntax import (
    ShellSyntaxError,
    check_input,
    has_unclosed_quote,
    is_valid_pipe,
    is_valid_redirection,
    operators_valid,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('echo "hi"', False),
        ("echo 'hi", True),
        ("a \"b'c\" d", False),
        ("'\"", True),
        ("", False),
    ],
)
def test_has_unclosed_quote(text, expected):
    assert has_unclosed_quote(text) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("| ls", True),
        ("|", False),
        ("| |", False),
        ("||", False),
        ("|   ", False),
    ],
)
def test_is_valid_pipe(text, expected):
    assert is_valid_pipe(text) is expected


@pytest.mark.parametrize(
    ("text", "symbol", "expected"),
    [
        ("> out", ">", True),
        (">> out", ">", True),
        (">>> out", ">", False),
        (">", ">", False),
        ("> |", ">", False),
        ("<< EOF", "<", True),
        ("<<< x", "<", False),
        ("<>", "<", False),
    ],
)
def test_is_valid_redirection(text, symbol, expected):
    assert is_valid_redirection(text, symbol) is expected


def test_is_valid_redirection_rejects_other_symbol():
    with pytest.raises(ValueError):
        is_valid_redirection("| x", "|")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("ls | wc", True),
        ("ls |", False),
        ("echo '|'", True),
        ("cat < in > out", True),
        ("echo hi >", False),
        ('echo ">>>"', True),
        ("cat << EOF | wc", True),
    ],
)
def test_operators_valid(text, expected):
    assert operators_valid(text) is expected


def test_check_input_unclosed_quote():
    with pytest.raises(ShellSyntaxError) as info:
        check_input("echo 'oops")
    assert info.value.label == "Syntax"
    assert info.value.exit_status == 2


def test_check_input_bad_operator():
    with pytest.raises(ShellSyntaxError) as info:
        check_input("ls | | wc")
    assert info.value.label == "OPE"
    assert info.value.exit_status == 2


def test_check_input_quote_checked_before_operators():
    with pytest.raises(ShellSyntaxError) as info:
        check_input("ls | 'x")
    assert info.value.label == "Syntax"