import pytest

from minishell.environment import Environment
from minishell.lexer import (
    drop_empty_tokens,
    is_command_word,
    lex,
    merge_commands,
    quote_arguments,
    tokenize,
    trim_all,
    trim_export_word,
)
from minishell.syntax import ShellSyntaxError
from minishell.tokens import CommandState, OperatorKind, Token


def words(tokens):
    return [t.value for t in tokens]


def kinds(tokens):
    return [t.kind for t in tokens]


@pytest.mark.parametrize(
    "text, name, expected",
    [
        ("echo", "echo", True),
        ('"echo"', "echo", True),
        ("ec'h'o", "echo", True),
        ("echoo", "echo", False),
        (None, "echo", False),
        ("export", "export", True),
    ],
)
def test_is_command_word(text, name, expected):
    assert is_command_word(text, name) is expected


def test_tokenize_words_and_operators():
    tokens = tokenize("echo hi>out")
    assert words(tokens) == ["echo", "hi", ">", "out"]
    assert kinds(tokens) == [
        OperatorKind.NONE,
        OperatorKind.NONE,
        OperatorKind.REDIR_RIGHT,
        OperatorKind.NONE,
    ]


def test_tokenize_keeps_empty_quotes():
    assert words(tokenize('echo "" x')) == ["echo", '""', "x"]


def test_tokenize_blank_line():
    assert tokenize("   ") == []


def test_drop_empty_tokens_after_word():
    tokens = [Token("echo"), Token('""'), Token("x")]
    assert words(drop_empty_tokens(tokens)) == ["echo", "x"]


def test_drop_empty_tokens_keeps_after_operator_and_head():
    tokens = [Token('""'), Token(">", OperatorKind.REDIR_RIGHT), Token('""')]
    assert words(drop_empty_tokens(tokens)) == ['""', ">", '""']


def test_trim_export_word_wraps_in_double_quotes():
    assert trim_export_word("A='x'") == '"A=x"'


def test_trim_export_word_result_is_double_quoted():
    for value in ("A=1", "B='two'", 'C="three"', "D"):
        result = trim_export_word(value)
        assert result.startswith('"') and result.endswith('"')


def test_trim_all_plain_quotes():
    tokens = [Token("echo"), Token('"hello"'), Token("a'b'")]
    assert words(trim_all(tokens)) == ["echo", "hello", "ab"]


def test_trim_all_export_mode_ends_at_pipe():
    tokens = [
        Token("export"),
        Token("A=1"),
        Token("|", OperatorKind.PIPE),
        Token("'x'"),
    ]
    result = trim_all(tokens)
    assert words(result)[0] == "export"
    assert words(result)[1] == trim_export_word("A=1")
    assert words(result)[3] == "x"


def test_trim_all_does_not_mutate_input():
    tokens = [Token('"hello"')]
    trim_all(tokens)
    assert tokens[0].value == '"hello"'


def test_quote_arguments_after_cat_and_ls():
    result = quote_arguments([Token("cat"), Token("file")])
    assert words(result) == ["cat", '"file"']
    result = quote_arguments([Token("ls"), Token("-l")])
    assert words(result) == ["ls", '"-l"']


def test_quote_arguments_skips_already_quoted():
    result = quote_arguments([Token("cat"), Token("'file'")])
    assert words(result) == ["cat", "'file'"]


def test_quote_arguments_output_redirection_not_for_echo():
    tokens = [Token("echo"), Token(">", OperatorKind.REDIR_RIGHT), Token("out")]
    assert words(quote_arguments(tokens)) == ["echo", ">", "out"]
    tokens = [Token("wc"), Token(">", OperatorKind.REDIR_RIGHT), Token("out")]
    assert words(quote_arguments(tokens)) == ["wc", ">", '"out"']


def test_merge_single_command():
    result = merge_commands([Token("ls"), Token("-l")])
    assert words(result) == ["ls -l"]
    assert kinds(result) == [OperatorKind.NONE]


def test_merge_pipeline():
    tokens = [Token("a"), Token("|", OperatorKind.PIPE), Token("b"), Token("c")]
    result = merge_commands(tokens)
    assert words(result) == ["a", "|", " b c"]
    assert kinds(result) == [OperatorKind.NONE, OperatorKind.PIPE, OperatorKind.NONE]


def test_merge_keeps_echo_words_apart():
    tokens = [Token("echo"), Token("hi"), Token("|", OperatorKind.PIPE), Token("wc")]
    result = merge_commands(tokens)
    assert words(result) == ["echo", "hi", "|", " wc"]


def test_merge_empty():
    assert merge_commands([]) == []


def test_lex_expands_and_trims():
    env = Environment.from_strings(["USER=alice"])
    state = CommandState(env=env)
    assert words(lex('echo "$USER"', env, state)) == ["echo", "alice"]


def test_lex_pipeline():
    env = Environment()
    state = CommandState(env=env)
    result = lex("cat file | wc -l", env, state)
    assert words(result) == ['cat "file"', "|", " wc -l"]
    assert kinds(result)[1] is OperatorKind.PIPE


def test_lex_blank_line():
    env = Environment()
    assert lex("   ", env, CommandState(env=env)) == []


def test_lex_unclosed_quote_sets_status():
    env = Environment()
    state = CommandState(env=env)
    with pytest.raises(ShellSyntaxError) as info:
        lex("echo 'unclosed", env, state)
    assert info.value.label == "Syntax"
    assert state.exit_status == 2


def test_lex_bad_operator():
    env = Environment()
    state = CommandState(env=env)
    with pytest.raises(ShellSyntaxError) as info:
        lex("ls |", env, state)
    assert info.value.label == "OPE"
    assert state.exit_status == 2


def test_lex_uses_exit_status():
    env = Environment()
    state = CommandState(env=env, exit_status=5)
    assert words(lex("echo $?", env, state)) == ["echo", "5"]