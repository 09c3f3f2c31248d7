"""
Arithmetic expression evaluation for typed amounts
Lets a cost field hold things like "12.50 + 3" or "45 / 3" without eval()
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional

from errors import ExpressionError

TOKEN_PATTERN = re.compile(r'\s*(?:(\d+\.?\d*|\.\d+)|(\S))')
OPERATORS = '+-*/()'


@dataclass
class Token:
    kind: str  # 'number', an operator character, or 'end'
    value: Optional[float]
    position: int


def tokenize(text: str) -> List[Token]:
    """Split an expression into number and operator tokens"""
    tokens = []
    for match in TOKEN_PATTERN.finditer(text):
        number, symbol = match.groups()
        if number is not None:
            tokens.append(Token('number', float(number), match.start(1)))
        elif symbol is not None:
            if symbol not in OPERATORS:
                raise ExpressionError(f"Unexpected character {symbol!r}", match.start(2))
            tokens.append(Token(symbol, None, match.start(2)))
    tokens.append(Token('end', None, len(text)))
    return tokens


class ExpressionParser:
    """Recursive-descent evaluator for + - * / and parentheses"""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse(self) -> float:
        if self._peek().kind == 'end':
            raise ExpressionError("Empty expression", 0)
        value = self._expression()
        token = self._peek()
        if token.kind != 'end':
            raise ExpressionError(f"Unexpected {token.kind!r}", token.position)
        return value

    def _expression(self) -> float:
        value = self._term()
        while self._peek().kind in ('+', '-'):
            operator = self._advance().kind
            right = self._term()
            value = value + right if operator == '+' else value - right
        return value

    def _term(self) -> float:
        value = self._factor()
        while self._peek().kind in ('*', '/'):
            token = self._advance()
            right = self._factor()
            if token.kind == '*':
                value = value * right
            elif right == 0:
                raise ExpressionError("Division by zero", token.position)
            else:
                value = value / right
        return value

    def _factor(self) -> float:
        token = self._advance()
        if token.kind == '+':
            return self._factor()
        if token.kind == '-':
            return -self._factor()
        if token.kind == 'number':
            return token.value
        if token.kind == '(':
            value = self._expression()
            closing = self._advance()
            if closing.kind != ')':
                raise ExpressionError("Missing closing parenthesis", closing.position)
            return value
        if token.kind == 'end':
            raise ExpressionError("Unexpected end of expression", token.position)
        raise ExpressionError(f"Unexpected {token.kind!r}", token.position)


def evaluate(text: str) -> float:
    """Evaluate an arithmetic expression, raising ExpressionError if invalid"""
    if not isinstance(text, str):
        raise ExpressionError(f"Expression must be a string, got {type(text).__name__}")
    return ExpressionParser(text).parse()


def safe_eval(text: Any, default: Any = None) -> Any:
    """Evaluate an expression, returning default instead of raising"""
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    try:
        return evaluate(text)
    except ExpressionError:
        return default
