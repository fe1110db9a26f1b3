"""Infix to postfix/prefix conversion and evaluation of postfix expressions."""

from __future__ import annotations

import string

from rpncalc.variables import extract_variables, preprocess

__all__ = [
    "CalculationError",
    "priority",
    "apply_operator",
    "infix_to_postfix",
    "infix_to_prefix",
    "evaluate_postfix",
    "evaluate",
]

_PRIORITIES = {"(": 1, ")": 1, "+": 2, "-": 2, "*": 3, "/": 3}
_BINARY = frozenset("+-*/")
_OPERAND_EXPECTED_AFTER = frozenset("(+-*/")
_NUMBER_CHARS = frozenset(string.digits + ".")
_KEPT_CHARS = _NUMBER_CHARS | frozenset(_PRIORITIES)


class CalculationError(ValueError):
    """Raised when an expression cannot be converted or evaluated."""


def priority(ch: str) -> int:
    """Precedence of an operator character; 0 for anything that is not one."""
    return _PRIORITIES.get(ch, 0)


def apply_operator(a: float, b: float, op: str) -> float:
    """Apply the binary operator ``op`` to ``a`` and ``b``."""
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        if b == 0:
            raise CalculationError("division by zero")
        return a / b
    raise CalculationError(f"unknown operator {op!r}")


def _matching_paren(text: str, start: int) -> int:
    depth = 0
    for index, ch in enumerate(text[start:], start):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return index
    raise CalculationError("unbalanced '(' in expression")


def _expects_operand(tokens: list[str]) -> bool:
    return not tokens or tokens[-1] in _OPERAND_EXPECTED_AFTER


def _tokenize(expression: str) -> list[str]:
    """Split an infix expression into numbers, operators and parentheses.

    Unary signs are folded into the number that follows; a negated
    parenthesised group becomes ``( 0 - ( ... ) )``.
    """
    text = "".join(ch for ch in expression if ch in _KEPT_CHARS)
    tokens: list[str] = []
    pending = False
    negative = False
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in _NUMBER_CHARS:
            end = pos
            while end < len(text) and text[end] in _NUMBER_CHARS:
                end += 1
            tokens.append(("-" if negative else "") + text[pos:end])
            pending = negative = False
            pos = end
            continue
        if ch in "+-" and (pending or _expects_operand(tokens)):
            pending = True
            negative ^= ch == "-"
            pos += 1
            continue
        if pending:
            if ch != "(":
                raise CalculationError(f"sign without operand before {ch!r}")
            if negative:
                close = _matching_paren(text, pos)
                inner = _tokenize(text[pos:close + 1])
                tokens.extend(["(", "0", "-", *inner, ")"])
                pending = negative = False
                pos = close + 1
                continue
            pending = False
        tokens.append(ch)
        pos += 1
    if pending:
        raise CalculationError("sign without operand at end of expression")
    return tokens


def infix_to_postfix(expression: str) -> str:
    """Convert an infix expression to postfix; every token is followed by a space."""
    output: list[str] = []
    stack: list[str] = []
    for token in _tokenize(expression):
        if token == "(":
            stack.append(token)
        elif token == ")":
            while stack and stack[-1] != "(":
                output.append(stack.pop())
            if not stack:
                raise CalculationError("unbalanced ')' in expression")
            stack.pop()
        elif token in _BINARY:
            while stack and priority(stack[-1]) >= priority(token):
                output.append(stack.pop())
            stack.append(token)
        else:
            output.append(token)
    while stack:
        op = stack.pop()
        if op == "(":
            raise CalculationError("unbalanced '(' in expression")
        output.append(op)
    return "".join(f"{token} " for token in output)


def infix_to_prefix(expression: str) -> str:
    """Convert an infix expression to prefix notation, tokens separated by spaces."""
    output: list[str] = []
    stack: list[str] = []
    for token in reversed(_tokenize(expression)):
        if token == ")":
            stack.append(token)
        elif token == "(":
            while stack and stack[-1] != ")":
                output.append(stack.pop())
            if not stack:
                raise CalculationError("unbalanced '(' in expression")
            stack.pop()
        elif token in _BINARY:
            while stack and stack[-1] != ")" and priority(stack[-1]) > priority(token):
                output.append(stack.pop())
            stack.append(token)
        else:
            output.append(token)
    while stack:
        op = stack.pop()
        if op == ")":
            raise CalculationError("unbalanced ')' in expression")
        output.append(op)
    return " ".join(reversed(output))


def evaluate_postfix(postfix: str) -> float:
    """Evaluate a whitespace-separated postfix expression; the top of the stack is the result."""
    tokens = postfix.split()
    if not tokens:
        raise CalculationError("empty postfix expression")
    stack: list[float] = []
    for token in tokens:
        if token in _BINARY:
            if len(stack) < 2:
                raise CalculationError(f"missing operand for {token!r}")
            b = stack.pop()
            a = stack.pop()
            stack.append(apply_operator(a, b, token))
        else:
            try:
                stack.append(float(token))
            except ValueError:
                raise CalculationError(f"invalid number {token!r}") from None
    return stack[-1]


def evaluate(expression: str) -> float:
    """Clean up and evaluate an infix expression that holds no variables."""
    try:
        cleaned = preprocess(expression)
    except ValueError as exc:
        raise CalculationError(str(exc)) from None
    unresolved = extract_variables(cleaned).names()
    if unresolved:
        raise CalculationError(f"unresolved variables: {', '.join(unresolved)}")
    return evaluate_postfix(infix_to_postfix(cleaned))