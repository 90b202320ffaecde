"""
Value Types - Type system for OraSim
Handles literal typing, coercion, and comparison of row scalars.
"""

from enum import Enum
from typing import Any, Optional, Union
import re


Scalar = Union[str, int, float]

NUMERIC_PATTERN = re.compile(r'[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')


class Type(Enum):
    """Row scalar types"""
    NUMBER = 1
    STRING = 2
    ABSENT = 3  # key missing from the row


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Parse text that is entirely a decimal number, else None"""
    text = text.strip()
    if not NUMERIC_PATTERN.fullmatch(text):
        return None
    if any(ch in text for ch in '.eE'):
        return float(text)
    return int(text)


def strip_quotes(text: str) -> str:
    """Remove one pair of surrounding single quotes"""
    text = text.strip()
    if len(text) >= 2 and text.startswith("'") and text.endswith("'"):
        return text[1:-1]
    return text


def parse_literal(text: str) -> Scalar:
    """
    Type a literal the way INSERT stores it

    Quoted text becomes a string (quotes removed, no escape handling),
    fully numeric text becomes a number, anything else is kept as trimmed text.
    """
    text = text.strip()
    if len(text) >= 2 and text.startswith("'") and text.endswith("'"):
        return text[1:-1]
    number = parse_number(text)
    if number is not None:
        return number
    return text


def format_number(number: Union[int, float]) -> str:
    """Render a number without a trailing '.0' for integral floats"""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


class Value:
    """Tagged wrapper around a row scalar"""

    def __init__(self, value_type: Type, value: Any = None):
        self.type = value_type
        self._value = None if value_type == Type.ABSENT else value

    @classmethod
    def of(cls, raw: Any) -> 'Value':
        """Wrap a raw row value; None means the key was absent"""
        if raw is None:
            return cls(Type.ABSENT)
        if isinstance(raw, bool):
            return cls(Type.STRING, str(raw).upper())
        if isinstance(raw, (int, float)):
            return cls(Type.NUMBER, raw)
        return cls(Type.STRING, str(raw))

    @property
    def value(self) -> Any:
        return self._value

    @property
    def is_absent(self) -> bool:
        return self.type == Type.ABSENT

    def to_text(self) -> str:
        """Text form used for string comparison and display"""
        if self.type == Type.ABSENT:
            return ''
        if self.type == Type.NUMBER:
            return format_number(self._value)
        return self._value

    def compare(self, literal: str, operator: str) -> bool:
        """
        Compare this value against an unquoted literal

        Numbers compare numerically when the literal is numeric; everything
        else compares as text. An absent value only satisfies != and <>.
        """
        if self.type == Type.ABSENT:
            if operator in ('!=', '<>'):
                return True
            if operator in ('=', '<', '>', '<=', '>='):
                return False
            raise ValueError(f"Unknown operator: {operator}")

        other = parse_number(literal) if self.type == Type.NUMBER else None
        if other is not None:
            v1, v2 = self._value, other
        else:
            v1, v2 = self.to_text(), literal

        if operator == '=':
            return v1 == v2
        elif operator in ('!=', '<>'):
            return v1 != v2
        elif operator == '<':
            return v1 < v2
        elif operator == '<=':
            return v1 <= v2
        elif operator == '>':
            return v1 > v2
        elif operator == '>=':
            return v1 >= v2
        else:
            raise ValueError(f"Unknown operator: {operator}")

    def __eq__(self, other):
        if not isinstance(other, Value):
            return False
        return self.type == other.type and self.value == other.value

    def __repr__(self):
        if self.type == Type.ABSENT:
            return "ABSENT"
        elif self.type == Type.STRING:
            return f"'{self._value}'"
        else:
            return format_number(self._value)

    def __str__(self):
        return repr(self)
