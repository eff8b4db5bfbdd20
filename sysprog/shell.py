"""A small interactive shell built on the incremental command-line parser.

Commands are read from standard input, parsed line by line and executed.
Each command's output is fed to the next expression of the line.
"""

from __future__ import annotations

import subprocess
import sys
from typing import Optional, Sequence

from .parser import CommandLine, ExprType, OutputType, ParseError, Parser

__all__ = ["execute_command_line", "describe_command_line", "main"]


def execute_command_line(line: CommandLine) -> list[int]:
    """Run every command of ``line`` in order and return their exit codes.

    A command's standard output goes to the standard input of the next
    command when any expression follows it; the last command writes to the
    inherited standard output. Commands run one after another, each waited
    for before the next starts. A command that cannot be started is reported
    on standard error and given the exit code -1.
    """
    codes: list[int] = []
    data: Optional[bytes] = None
    exprs = line.exprs
    for index, expr in enumerate(exprs):
        if expr.type is not ExprType.COMMAND or expr.cmd is None:
            continue
        piped = index + 1 < len(exprs)
        cmd = expr.cmd
        sys.stdout.flush()
        try:
            result = subprocess.run(
                [cmd.exe, *cmd.args],
                input=data,
                stdout=subprocess.PIPE if piped else None,
            )
        except OSError as exc:
            print(
                f"*** Could not execute {cmd.exe}: {exc.strerror or exc} ***",
                file=sys.stderr,
            )
            codes.append(-1)
            data = b"" if piped else None
            continue
        codes.append(result.returncode)
        data = result.stdout if piped else None
    return codes


_EXPR_NAMES = {ExprType.PIPE: "PIPE", ExprType.AND: "AND", ExprType.OR: "OR"}


def describe_command_line(line: CommandLine) -> str:
    """Return a human-readable description of a parsed command line."""
    parts = [
        "================================\n",
        "Command line:\n",
        f"Is background: {int(line.is_background)}\n",
        "Output: ",
    ]
    if line.out_type is OutputType.STDOUT:
        parts.append("stdout\n")
    elif line.out_type is OutputType.FILE_NEW:
        parts.append(f'new file - "{line.out_file}"\n')
    else:
        parts.append(f'append file - "{line.out_file}"\n')
    parts.append("Expressions:\n")
    for expr in line.exprs:
        if expr.type is ExprType.COMMAND and expr.cmd is not None:
            parts.append(f"\tCommand: {expr.cmd.exe}, size: {len(expr.cmd.args)}\n")
            parts.extend(f" {arg}," for arg in expr.cmd.args)
            parts.append("\n")
        else:
            parts.append(f"\t{_EXPR_NAMES[expr.type]}\n")
    return "".join(parts)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read command lines from standard input and execute them."""
    parser = Parser()
    for chunk in sys.stdin:
        parser.feed(chunk)
        while True:
            try:
                line = parser.pop_next()
            except ParseError as err:
                print(f"Error: {int(err.code)}")
                continue
            if line is None:
                break
            execute_command_line(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())