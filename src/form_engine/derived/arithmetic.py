"""
Arithmetic expression evaluator for custom formulas.

A small recursive-descent parser over numbers, + - * /, unary signs and
parentheses. Nothing else is recognised, so evaluating a substituted
formula can never run code.

Grammar:
    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/") unary)*
    unary   := ("+" | "-") unary | primary
    primary := NUMBER | "(" expr ")"
"""

import math
import re

from form_engine.config import get_config
from form_engine.errors import DivisionByZeroError, ExpressionSyntaxError

_NUMBER = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")
_OPERATORS = "+-*/()"


def tokenize(text: str) -> list[str]:
    """Split an expression into number and operator tokens."""
    tokens: list[str] = []
    position = 0
    length = len(text)
    while position < length:
        char = text[position]
        if char.isspace():
            position += 1
            continue
        match = _NUMBER.match(text, position)
        if match is not None:
            tokens.append(match.group())
            position = match.end()
        elif char in _OPERATORS:
            tokens.append(char)
            position += 1
        else:
            raise ExpressionSyntaxError(f"Unexpected character {char!r} at {position}")
    return tokens


class _Parser:
    def __init__(self, tokens: list[str], max_depth: int):
        self.tokens = tokens
        self.index = 0
        self.depth = 0
        self.max_depth = max_depth

    def peek(self) -> str | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> str:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise ExpressionSyntaxError(f"Expression nested deeper than {self.max_depth}")

    def leave(self) -> None:
        self.depth -= 1

    def parse(self) -> float:
        if not self.tokens:
            raise ExpressionSyntaxError("Empty expression")
        value = self.expr()
        if self.peek() is not None:
            raise ExpressionSyntaxError(f"Unexpected token {self.peek()!r}")
        return value

    def expr(self) -> float:
        value = self.term()
        while self.peek() in ("+", "-"):
            if self.advance() == "+":
                value += self.term()
            else:
                value -= self.term()
        return value

    def term(self) -> float:
        value = self.unary()
        while self.peek() in ("*", "/"):
            if self.advance() == "*":
                value *= self.unary()
            else:
                divisor = self.unary()
                if divisor == 0:
                    raise DivisionByZeroError("Division by zero")
                value /= divisor
        return value

    def unary(self) -> float:
        token = self.peek()
        if token in ("+", "-"):
            self.advance()
            self.enter()
            operand = self.unary()
            self.leave()
            return operand if token == "+" else -operand
        return self.primary()

    def primary(self) -> float:
        token = self.peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression")
        if token == "(":
            self.advance()
            self.enter()
            value = self.expr()
            self.leave()
            if self.peek() != ")":
                raise ExpressionSyntaxError("Missing closing parenthesis")
            self.advance()
            return value
        if token in _OPERATORS:
            raise ExpressionSyntaxError(f"Unexpected token {token!r}")
        self.advance()
        return float(token)


def evaluate_expression(text: str, max_depth: int | None = None) -> float:
    """
    Evaluate an arithmetic expression.

    Args:
        text: Expression such as "(3 + 4) * 2".
        max_depth: Maximum nesting of parentheses and unary signs. Defaults
            to the ``max_expression_depth`` config setting.

    Returns:
        The finite result as a float.

    Raises:
        ExpressionSyntaxError: Malformed, too deep, or non-finite result.
        DivisionByZeroError: A division by zero was attempted.
    """
    if max_depth is None:
        max_depth = get_config().max_expression_depth
    result = _Parser(tokenize(text), max_depth).parse()
    if not math.isfinite(result):
        raise ExpressionSyntaxError("Result is not a finite number")
    return result
