import builtins
import os
import signal

import pytest

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.shell import handle_command_line, main, run_line, setup_signals
from minishell.tokens import CommandState, OperatorKind, Token


@pytest.fixture
def restore_signals():
    signals = (signal.SIGINT, signal.SIGQUIT, signal.SIGTSTP)
    saved = {signum: signal.getsignal(signum) for signum in signals}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)


def _os_env() -> Environment:
    return Environment.from_strings(f"{k}={v}" for k, v in os.environ.items())


def _feed(monkeypatch, lines):
    remaining = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_setup_signals_ignores_quit_and_stop(restore_signals):
    previous = setup_signals()
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN
    assert signal.getsignal(signal.SIGTSTP) == signal.SIG_IGN
    assert callable(signal.getsignal(signal.SIGINT))
    assert set(previous) == {signal.SIGINT, signal.SIGQUIT, signal.SIGTSTP}


def test_handle_command_line_single_command():
    env = Environment.from_strings(["A=1"])
    state = CommandState(env=env)
    handle_command_line([Token("unset A")], state)
    assert "A" not in env


def test_handle_command_line_pipeline():
    state = CommandState(env=_os_env())
    handle_command_line([Token("true"), Token("|", OperatorKind.PIPE), Token("false")], state)
    assert state.exit_status == 1


def test_run_line_unclosed_quote(capsys):
    state = CommandState(env=Environment())
    run_line("echo 'unclosed", state)
    out = capsys.readouterr().out
    assert out.startswith("Syntax ")
    assert "ERROR" in out
    assert state.exit_status == 2


def test_run_line_bad_operator(capsys):
    state = CommandState(env=Environment())
    run_line("ls |", state)
    assert capsys.readouterr().out.startswith("OPE ")
    assert state.exit_status == 2


def test_run_line_export():
    env = Environment()
    state = CommandState(env=env)
    run_line("export GREETING=hello", state)
    assert env.get("GREETING") == "hello"


def test_run_line_empty_keeps_status():
    state = CommandState(env=Environment(), exit_status=3)
    run_line("", state)
    assert state.exit_status == 3


def test_run_line_exit():
    state = CommandState(env=Environment())
    with pytest.raises(ShellExit) as info:
        run_line("exit 4", state)
    assert info.value.status == 4


def test_main_returns_exit_status(monkeypatch, restore_signals):
    _feed(monkeypatch, ["export A=1", "exit 5"])
    assert main([]) == 5


def test_main_returns_zero_at_end_of_input(monkeypatch, restore_signals):
    _feed(monkeypatch, ["unset NOTHING_HERE"])
    assert main([]) == 0