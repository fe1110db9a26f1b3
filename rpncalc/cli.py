"""Command-line front end: interactive and one-shot expression evaluation."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from rpncalc.notation import evaluate_postfix, infix_to_postfix
from rpncalc.variables import (
    VariableTable,
    extract_variables,
    format_number,
    preprocess,
    substitute,
)

__all__ = ["ask_continue", "main"]

_HELP = """\
'rpncalc'

使用方法:

rpncalc [command]
[command]
\t无参数\t无未知数的表达式计算
\t-U\t带未知数的表达式计算

rpncalc [command] [expression]
[command]
\t-GUI\t给python脚本制作的GUI调用,终端调用无需关心
[expression]
\t中缀表达式

"""

_NO_VARIABLES_WARNING = """\
Warning:
\tYour expression does not contain variables.
\tYou may exit and use the parameterless invocation method, such as:
\t"rpncalc"

"""


def _read_line(stdin: TextIO) -> str:
    line = stdin.readline()
    if not line:
        raise EOFError("end of input")
    return line.rstrip("\r\n")


def ask_continue(stdin: TextIO, stdout: TextIO) -> bool:
    """Ask whether to go on; True for 'Y'/'y', False for 'N'/'n' or end of input."""
    stdout.write("Continue? [Y/N]\n>>> ")
    stdout.flush()
    while True:
        line = stdin.readline()
        if not line:
            return False
        answer = line.strip()[:1]
        if answer in ("Y", "y"):
            return True
        if answer in ("N", "n"):
            return False
        stdout.write("input 'Y' or 'N'\n>>> ")
        stdout.flush()


def _ask_values(table: VariableTable, stdin: TextIO, stdout: TextIO) -> None:
    for name in table.names():
        while True:
            stdout.write(f"input value of {name}:\n>>> ")
            stdout.flush()
            text = _read_line(stdin).strip()
            try:
                table.set(name, float(text))
            except ValueError:
                continue
            break


def _substituted(expression: str, table: VariableTable, stdin: TextIO, stdout: TextIO) -> str:
    if not len(table):
        return expression
    _ask_values(table, stdin, stdout)
    text = substitute(expression, table)
    stdout.write(f"Your expression: {text}\n")
    return text


def _read_expression(stdin: TextIO) -> tuple[str, VariableTable]:
    expression = preprocess(_read_line(stdin))
    return expression, extract_variables(expression)


def _run_gui(args: Sequence[str], stdout: TextIO) -> int:
    if len(args) < 2:
        raise ValueError("missing expression after '-GUI'")
    result = evaluate_postfix(infix_to_postfix(args[1]))
    stdout.write(f"{format_number(result)}\n")
    return 0


def _run_variables(stdin: TextIO, stdout: TextIO) -> int:
    stdout.write("input your expression:\n>>> ")
    stdout.flush()
    expression, table = _read_expression(stdin)
    stdout.write(f"Your infix expression: {expression}\n")
    count = len(table)
    if count:
        plural = "s" if count > 1 else ""
        stdout.write(f"Parsing complete.\nYour expression have {count} variable{plural}.\n\n")
    else:
        stdout.write(_NO_VARIABLES_WARNING)
    while True:
        text = _substituted(expression, table, stdin, stdout)
        result = evaluate_postfix(infix_to_postfix(text))
        stdout.write(f"result: {format_number(result)}\n\n")
        if not ask_continue(stdin, stdout):
            return 0


def _run_interactive(stdin: TextIO, stdout: TextIO) -> int:
    while True:
        stdout.write("input infix expression:\n>>> ")
        stdout.flush()
        expression, table = _read_expression(stdin)
        text = _substituted(expression, table, stdin, stdout)
        postfix = infix_to_postfix(text)
        stdout.write(f"Your post expression is: {postfix}\n")
        result = evaluate_postfix(postfix)
        stdout.write(f"result: {format_number(result)}\n\n")
        if not ask_continue(stdin, stdout):
            return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the calculator; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    stdin, stdout, stderr = sys.stdin, sys.stdout, sys.stderr
    try:
        if not args:
            return _run_interactive(stdin, stdout)
        command = args[0]
        if command == "-help":
            stdout.write(_HELP)
            return 0
        if command == "-GUI":
            return _run_gui(args, stdout)
        if command == "-U":
            return _run_variables(stdin, stdout)
        stderr.write(f"'{command}' 不是合法指令\n请使用 'rpncalc -help' 查看帮助文档 \n")
        return 1
    except EOFError:
        return 0
    except ValueError as exc:
        stderr.write(f"error: {exc}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())