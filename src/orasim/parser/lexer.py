"""
SQL Lexer - Tokenizes SQL strings into tokens
"""

import re
from typing import List, Optional


class TokenType:
    """Token types for the simulator dialect"""
    # Keywords
    SELECT = 'SELECT'
    FROM = 'FROM'
    WHERE = 'WHERE'
    INSERT = 'INSERT'
    INTO = 'INTO'
    VALUES = 'VALUES'
    UPDATE = 'UPDATE'
    SET = 'SET'
    DELETE = 'DELETE'
    CREATE = 'CREATE'
    TABLE = 'TABLE'
    DROP = 'DROP'
    INDEX = 'INDEX'
    UNIQUE = 'UNIQUE'
    ON = 'ON'
    DESCRIBE = 'DESCRIBE'
    DESC = 'DESC'
    AND = 'AND'
    OR = 'OR'
    NOT = 'NOT'
    NULL = 'NULL'
    DEFAULT = 'DEFAULT'

    # Literals
    IDENTIFIER = 'IDENTIFIER'
    STRING_LITERAL = 'STRING_LITERAL'
    NUMBER = 'NUMBER'
    FLOAT_LITERAL = 'FLOAT_LITERAL'

    # Operators
    EQ = 'EQ'  # =
    NEQ = 'NEQ'  # != or <>
    LT = 'LT'  # <
    GT = 'GT'  # >
    LTE = 'LTE'  # <=
    GTE = 'GTE'  # >=
    PLUS = 'PLUS'  # +
    MINUS = 'MINUS'  # -
    STAR = 'STAR'  # *
    SLASH = 'SLASH'  # /

    # Punctuation
    COMMA = 'COMMA'  # ,
    SEMICOLON = 'SEMICOLON'  # ;
    LPAREN = 'LPAREN'  # (
    RPAREN = 'RPAREN'  # )
    DOT = 'DOT'  # .

    # Special
    EOF = 'EOF'
    ERROR = 'ERROR'


COMPARISON_OPERATORS = (TokenType.EQ, TokenType.NEQ, TokenType.LT,
                        TokenType.GT, TokenType.LTE, TokenType.GTE)


class Token:
    """A single token in the SQL stream"""

    def __init__(self, token_type: str, value: str, position: int, end: int):
        self.type = token_type
        self.value = value
        self.position = position  # offset of first character in the source
        self.end = end  # offset one past the last character

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', {self.position})"

    def __eq__(self, other):
        return (isinstance(other, Token) and
                self.type == other.type and
                self.value == other.value and
                self.position == other.position)


class Lexer:
    """SQL lexer/tokenizer"""

    # Token patterns
    TOKEN_PATTERNS = [
        # Whitespace (ignored)
        (r'\s+', None),

        # Comments
        (r'--[^\n]*', None),
        (r'/\*[\s\S]*?\*/', None),

        # Keywords (must come before identifiers)
        (r'SELECT\b', TokenType.SELECT),
        (r'FROM\b', TokenType.FROM),
        (r'WHERE\b', TokenType.WHERE),
        (r'INSERT\b', TokenType.INSERT),
        (r'INTO\b', TokenType.INTO),
        (r'VALUES\b', TokenType.VALUES),
        (r'UPDATE\b', TokenType.UPDATE),
        (r'SET\b', TokenType.SET),
        (r'DELETE\b', TokenType.DELETE),
        (r'CREATE\b', TokenType.CREATE),
        (r'TABLE\b', TokenType.TABLE),
        (r'DROP\b', TokenType.DROP),
        (r'INDEX\b', TokenType.INDEX),
        (r'UNIQUE\b', TokenType.UNIQUE),
        (r'ON\b', TokenType.ON),
        (r'DESCRIBE\b', TokenType.DESCRIBE),
        (r'DESC\b', TokenType.DESC),
        (r'AND\b', TokenType.AND),
        (r'OR\b', TokenType.OR),
        (r'NOT\b', TokenType.NOT),
        (r'NULL\b', TokenType.NULL),
        (r'DEFAULT\b', TokenType.DEFAULT),

        # Operators
        (r'!=', TokenType.NEQ),
        (r'<>', TokenType.NEQ),
        (r'<=', TokenType.LTE),
        (r'>=', TokenType.GTE),
        (r'=', TokenType.EQ),
        (r'<', TokenType.LT),
        (r'>', TokenType.GT),
        (r'\+', TokenType.PLUS),
        (r'-', TokenType.MINUS),
        (r'\*', TokenType.STAR),
        (r'/', TokenType.SLASH),

        # Punctuation
        (r',', TokenType.COMMA),
        (r';', TokenType.SEMICOLON),
        (r'\(', TokenType.LPAREN),
        (r'\)', TokenType.RPAREN),

        # Numbers
        (r'(\d+\.\d*|\.\d+)([eE][+-]?\d+)?|\d+[eE][+-]?\d+', TokenType.FLOAT_LITERAL),
        (r'\d+', TokenType.NUMBER),

        (r'\.', TokenType.DOT),

        # String literals (no escape sequences)
        (r"'[^']*'", TokenType.STRING_LITERAL),

        # Identifiers
        (r'"[^"]+"', TokenType.IDENTIFIER),
        (r'[a-zA-Z_][a-zA-Z0-9_$#]*', TokenType.IDENTIFIER),
    ]

    COMPILED_PATTERNS = [(re.compile(pattern, re.IGNORECASE), token_type)
                         for pattern, token_type in TOKEN_PATTERNS]

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.tokens = []

    def tokenize(self) -> List[Token]:
        """Tokenize the input text"""
        self.tokens = []

        while self.position < len(self.text):
            token = self._next_token()
            if token:
                self.tokens.append(token)

        # Add EOF token
        self.tokens.append(Token(TokenType.EOF, '', len(self.text), len(self.text)))
        return self.tokens

    def _next_token(self) -> Optional[Token]:
        """Get next token from input, None for skipped text"""
        for regex, token_type in self.COMPILED_PATTERNS:
            match = regex.match(self.text, self.position)
            if not match:
                continue

            value = match.group(0)
            start = self.position
            self.position = match.end()

            # Skip whitespace and comments
            if token_type is None:
                return None

            if token_type == TokenType.STRING_LITERAL:
                value = value[1:-1]
            elif token_type == TokenType.IDENTIFIER and value.startswith('"'):
                value = value[1:-1]
            elif token_type not in (TokenType.FLOAT_LITERAL, TokenType.NUMBER):
                value = value.upper() if token_type != TokenType.IDENTIFIER else value

            return Token(token_type, value, start, self.position)

        # No pattern matched
        error_char = self.text[self.position]
        self.position += 1
        return Token(TokenType.ERROR, error_char, self.position - 1, self.position)
