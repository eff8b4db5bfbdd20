import io
import sys

from sysprog.parser import (
    Command,
    CommandLine,
    Expr,
    ExprType,
    Parser,
    ParserErrorCode,
)
from sysprog.shell import describe_command_line, execute_command_line, main


def _py(code):
    return Expr(ExprType.COMMAND, Command(sys.executable, ["-c", code]))


def _parse(text):
    parser = Parser()
    parser.feed(text)
    return parser.pop_next()


def test_single_command_writes_to_stdout(capfd):
    line = CommandLine([_py("print('hello shell')")])
    codes = execute_command_line(line)
    out, _ = capfd.readouterr()
    assert codes == [0]
    assert "hello shell" in out


def test_pipe_feeds_next_command(capfd):
    line = CommandLine(
        [
            _py("print('hello')"),
            Expr(ExprType.PIPE),
            _py("import sys; print(sys.stdin.read().upper())"),
        ]
    )
    codes = execute_command_line(line)
    out, _ = capfd.readouterr()
    assert codes == [0, 0]
    assert "HELLO" in out
    assert "hello" not in out


def test_exit_codes_are_collected(capfd):
    line = CommandLine(
        [
            _py("import sys; sys.exit(3)"),
            Expr(ExprType.PIPE),
            _py("pass"),
        ]
    )
    assert execute_command_line(line) == [3, 0]


def test_missing_executable_reported(capfd):
    line = CommandLine(
        [Expr(ExprType.COMMAND, Command("no-such-program-for-sysprog-tests"))]
    )
    codes = execute_command_line(line)
    _, err = capfd.readouterr()
    assert codes == [-1]
    assert "no-such-program-for-sysprog-tests" in err


def test_describe_full_line():
    line = _parse("echo 1 2 | grep x > f &\n")
    text = describe_command_line(line)
    assert text == (
        "================================\n"
        "Command line:\n"
        "Is background: 1\n"
        'Output: new file - "f"\n'
        "Expressions:\n"
        "\tCommand: echo, size: 2\n"
        " 1, 2,\n"
        "\tPIPE\n"
        "\tCommand: grep, size: 1\n"
        " x,\n"
    )


def test_describe_logical_and_stdout():
    line = _parse("true && false || ls\n")
    text = describe_command_line(line)
    assert "Is background: 0\n" in text
    assert "Output: stdout\n" in text
    assert "\tAND\n" in text
    assert "\tOR\n" in text
    assert text.index("\tAND\n") < text.index("\tOR\n")


def test_describe_append():
    line = _parse('echo "test" >> out.txt\n')
    assert 'Output: append file - "out.txt"\n' in describe_command_line(line)


def test_main_runs_lines_and_reports_errors(monkeypatch, capfd):
    script = (
        "| exe\n"
        f'"{sys.executable}" -c "print(12345)"\n'
    )
    monkeypatch.setattr(sys, "stdin", io.StringIO(script))
    assert main([]) == 0
    out, _ = capfd.readouterr()
    assert f"Error: {int(ParserErrorCode.PIPE_WITH_NO_LEFT_ARG)}" in out
    assert "12345" in out