"""
SQL Parser - Classifies statements and parses tokens into typed statements
"""

from typing import List, Optional

from .lexer import Lexer, Token, TokenType, COMPARISON_OPERATORS
from .ast import *
from .exceptions import OraSimSyntaxError, OraSimInvalidStatementError
from ..constants import (DUAL_TABLE, DEFAULT_COLUMN_TYPE, DEFAULT_COLUMN_LENGTH,
                         ORA_MISSING_EXPRESSION, ORA_MISSING_RIGHT_PAREN, ORA_TABLE_NOT_FOUND)
from ..types.value import parse_literal, parse_number, strip_quotes


# Types whose single parenthesised argument is a length rather than a precision
LENGTH_TYPES = {'CHAR', 'NCHAR', 'VARCHAR', 'VARCHAR2', 'NVARCHAR2', 'RAW'}

# DEFAULT clauses that are evaluated at INSERT time; SYSDATE and SYSTIMESTAMP
# arrive here already rewritten to CURRENT_TIMESTAMP
DEFAULT_EXPRESSIONS = {'CURRENT_TIMESTAMP', 'USER'}


class Parser:
    """Recursive-descent parser over the simulator's statement grammar"""

    def __init__(self, tokens: List[Token], source: str, raw_source: Optional[str] = None):
        self.tokens = tokens
        self.source = source
        self.raw_source = raw_source if raw_source is not None else source
        self.position = 0
        self.current_token = tokens[0] if tokens else None
        self.error_code = ORA_MISSING_EXPRESSION

    def parse(self) -> Statement:
        """Classify the statement and parse it"""
        if not self.tokens or self.current_token.type == TokenType.EOF:
            raise OraSimInvalidStatementError()

        token_type = self.current_token.type
        next_type = self._peek(1).type

        if token_type == TokenType.SELECT:
            return self.parse_select()
        elif token_type == TokenType.CREATE and next_type == TokenType.TABLE:
            return self.parse_create_table()
        elif token_type == TokenType.INSERT:
            return self.parse_insert()
        elif token_type == TokenType.UPDATE:
            return self.parse_update()
        elif token_type == TokenType.DELETE:
            return self.parse_delete()
        elif token_type == TokenType.DROP and next_type == TokenType.TABLE:
            return self.parse_drop_table()
        elif token_type == TokenType.CREATE and next_type in (TokenType.INDEX, TokenType.UNIQUE):
            return self.parse_create_index()
        elif token_type in (TokenType.DESCRIBE, TokenType.DESC):
            return self.parse_describe()
        elif self._mentions_dual():
            # Not a SELECT, so it can never have the DUAL shape
            raise OraSimSyntaxError(ORA_MISSING_EXPRESSION, "DUAL outside a SELECT")
        else:
            raise OraSimInvalidStatementError()

    def parse_select(self) -> Statement:
        """Parse SELECT statement (or a DUAL pseudo-query)"""
        self.error_code = ORA_MISSING_EXPRESSION
        self._consume(TokenType.SELECT, "Expected SELECT")

        items = self._collect_until(TokenType.FROM)
        if not items:
            self._fail("Expected select list")
        self._consume(TokenType.FROM, "Expected FROM after select list")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value

        if table_name.upper() == DUAL_TABLE:
            self._expect_end()
            return DualStatement(expression=self._dual_expression())

        where_clause = None
        if self._match(TokenType.WHERE):
            where_clause = self.parse_where()
        self._expect_end()

        columns = []
        for item in self._split(items):
            if not item:
                self._fail("Empty select item")
            columns.append(self._text(item).upper())
        if len(columns) > 1 and '*' in columns:
            self._fail("'*' mixed with other columns")

        return SelectStatement(columns=columns, table_name=table_name, where_clause=where_clause)

    def parse_insert(self) -> InsertStatement:
        """Parse INSERT statement"""
        self.error_code = ORA_MISSING_EXPRESSION
        self._consume(TokenType.INSERT, "Expected INSERT")
        self._consume(TokenType.INTO, "Expected INTO after INSERT")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value

        # Optional column list
        columns = None
        if self._match(TokenType.LPAREN):
            columns = self.parse_identifier_list()

        self._consume(TokenType.VALUES, "Expected VALUES")
        self._consume(TokenType.LPAREN, "Expected ( before values")
        value_tokens = self._collect_until(TokenType.RPAREN)
        self._consume(TokenType.RPAREN, "Expected ) after values")
        self._expect_end()

        values = []
        if value_tokens:
            for item in self._split(value_tokens):
                if not item:
                    self._fail("Empty value")
                values.append(self._text(item))

        return InsertStatement(table_name=table_name, columns=columns, values=values)

    def parse_update(self) -> UpdateStatement:
        """Parse UPDATE statement"""
        self.error_code = ORA_MISSING_EXPRESSION
        self._consume(TokenType.UPDATE, "Expected UPDATE")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value
        self._consume(TokenType.SET, "Expected SET after table name")

        set_tokens = self._collect_until(TokenType.WHERE)
        if not set_tokens:
            self._fail("Expected assignments after SET")

        assignments = []
        for item in self._split(set_tokens):
            if (len(item) < 3 or item[0].type != TokenType.IDENTIFIER
                    or item[1].type != TokenType.EQ):
                self._fail("Expected column = value")
            assignments.append(Assignment(column=item[0].value.upper(),
                                          value=self._text(item[2:])))

        where_clause = None
        if self._match(TokenType.WHERE):
            where_clause = self.parse_where()
        self._expect_end()

        return UpdateStatement(table_name=table_name, assignments=assignments,
                               where_clause=where_clause)

    def parse_delete(self) -> DeleteStatement:
        """Parse DELETE statement"""
        self.error_code = ORA_MISSING_EXPRESSION
        self._consume(TokenType.DELETE, "Expected DELETE")
        self._consume(TokenType.FROM, "Expected FROM after DELETE")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value

        where_clause = None
        if self._match(TokenType.WHERE):
            where_clause = self.parse_where()
        self._expect_end()

        return DeleteStatement(table_name=table_name, where_clause=where_clause)

    def parse_drop_table(self) -> DropTableStatement:
        """Parse DROP TABLE statement"""
        self.error_code = ORA_TABLE_NOT_FOUND
        self._consume(TokenType.DROP, "Expected DROP")
        self._consume(TokenType.TABLE, "Expected TABLE after DROP")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value
        self._expect_end()
        return DropTableStatement(table_name=table_name)

    def parse_describe(self) -> DescribeStatement:
        """Parse DESC[RIBE] statement"""
        self.error_code = ORA_TABLE_NOT_FOUND
        self._advance()  # DESC or DESCRIBE
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value
        self._expect_end()
        return DescribeStatement(table_name=table_name)

    def parse_create_table(self) -> CreateTableStatement:
        """Parse CREATE TABLE statement"""
        self.error_code = ORA_MISSING_RIGHT_PAREN
        self._consume(TokenType.CREATE, "Expected CREATE")
        self._consume(TokenType.TABLE, "Expected TABLE")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value

        self._consume(TokenType.LPAREN, "Expected ( after table name")
        body = self._collect_until(TokenType.RPAREN)
        self._consume(TokenType.RPAREN, "Expected ) after column definitions")
        self._expect_end()

        if not body:
            self._fail("Expected column definitions")

        columns = [self.parse_column_definition(definition) for definition in self._split(body)]
        return CreateTableStatement(table_name=table_name, columns=columns)

    def parse_column_definition(self, tokens: List[Token]) -> ColumnDefinition:
        """Parse one column definition from its tokens"""
        if not tokens or tokens[0].type != TokenType.IDENTIFIER:
            self._fail("Expected column name")

        name = tokens[0].value.upper()
        rest = tokens[1:]

        data_type = DEFAULT_COLUMN_TYPE
        length, precision, scale = DEFAULT_COLUMN_LENGTH, None, None

        if rest and rest[0].type == TokenType.IDENTIFIER:
            data_type = rest[0].value.upper()
            length = None
            rest = rest[1:]

            # Attached size group, e.g. VARCHAR(50) or DECIMAL(10,2)
            if rest and rest[0].type == TokenType.LPAREN:
                close = self._matching_paren(rest)
                group = rest[1:close]
                sizes = [parse_number(self._text(part)) if part else None
                         for part in self._split(group)]
                if (len(sizes) in (1, 2) and all(isinstance(size, int) for size in sizes)):
                    if len(sizes) == 1 and data_type in LENGTH_TYPES:
                        length = sizes[0]
                    else:
                        precision = sizes[0]
                        scale = sizes[1] if len(sizes) == 2 else None
                else:
                    # Keep unusual size specs verbatim
                    data_type = data_type + ' '.join(self._text(rest[:close + 1]).split())
                rest = rest[close + 1:]

        nullable = True
        default_value, default_expression = None, None
        for i, token in enumerate(rest):
            if token.type == TokenType.NOT and i + 1 < len(rest) and rest[i + 1].type == TokenType.NULL:
                nullable = False
            elif token.type == TokenType.DEFAULT:
                default_value, default_expression = self._parse_default(rest[i + 1:])

        return ColumnDefinition(
            name=name,
            data_type=data_type,
            nullable=nullable,
            length=length,
            precision=precision,
            scale=scale,
            default_value=default_value,
            default_expression=default_expression
        )

    def parse_create_index(self) -> CreateIndexStatement:
        """Parse CREATE [UNIQUE] INDEX statement"""
        self.error_code = ORA_MISSING_RIGHT_PAREN
        self._consume(TokenType.CREATE, "Expected CREATE")
        unique = self._match(TokenType.UNIQUE)
        self._consume(TokenType.INDEX, "Expected INDEX")
        index_name = self._consume(TokenType.IDENTIFIER, "Expected index name").value
        self._consume(TokenType.ON, "Expected ON after index name")
        table_name = self._consume(TokenType.IDENTIFIER, "Expected table name").value
        self._consume(TokenType.LPAREN, "Expected ( after table name")
        columns = self.parse_identifier_list()
        self._expect_end()

        return CreateIndexStatement(index_name=index_name, table_name=table_name,
                                    columns=columns, unique=unique)

    def parse_where(self) -> WhereClause:
        """Parse a flat list of comparisons joined by AND / OR"""
        tokens = self._collect_until()
        conditions = []
        connectors = []
        atom = []

        for token in tokens + [None]:
            if token is None or token.type in (TokenType.AND, TokenType.OR):
                conditions.append(self._parse_condition(atom))
                if token is not None:
                    connectors.append(token.type)
                atom = []
            else:
                atom.append(token)

        return WhereClause(conditions=conditions, connectors=connectors)

    def _parse_condition(self, tokens: List[Token]) -> Condition:
        """Parse column op value"""
        if (len(tokens) < 3 or tokens[0].type != TokenType.IDENTIFIER
                or tokens[1].type not in COMPARISON_OPERATORS):
            self._fail("Expected column operator value")
        return Condition(column=tokens[0].value.upper(),
                         operator=tokens[1].value,
                         value=strip_quotes(self._text(tokens[2:])))

    def parse_identifier_list(self) -> List[str]:
        """Parse 'a, b, c)' after an opening parenthesis"""
        identifiers = []
        while True:
            identifiers.append(self._consume(TokenType.IDENTIFIER, "Expected identifier").value.upper())
            if not self._match(TokenType.COMMA):
                break
        self._consume(TokenType.RPAREN, "Expected ) after identifier list")
        return identifiers

    # Helper methods
    def _parse_default(self, tokens: List[Token]):
        """
        Parse what follows DEFAULT

        Returns:
            (literal value, expression name); the expression is evaluated per INSERT
        """
        if not tokens:
            self._fail("Expected literal after DEFAULT")
        if tokens[0].type == TokenType.NULL:
            return None, None
        if tokens[0].type == TokenType.IDENTIFIER:
            expression = tokens[0].value.upper()
            if expression not in DEFAULT_EXPRESSIONS:
                self._fail(f"Unsupported DEFAULT expression {tokens[0].value}")
            return None, expression
        count = 2 if tokens[0].type in (TokenType.PLUS, TokenType.MINUS) and len(tokens) > 1 else 1
        return parse_literal(self._text(tokens[:count])), None

    def _dual_expression(self) -> str:
        """Slice the select list out of the original, un-normalized text"""
        raw_tokens = Lexer(self.raw_source).tokenize()
        select = next((t for t in raw_tokens if t.type == TokenType.SELECT), None)
        depth = 0
        for token in raw_tokens:
            if select is None or token.position <= select.position:
                continue
            if token.type == TokenType.LPAREN:
                depth += 1
            elif token.type == TokenType.RPAREN:
                depth -= 1
            elif token.type == TokenType.FROM and depth == 0:
                return self.raw_source[select.end:token.position].strip()

        # Normalization changed the statement shape; fall back to the rewritten text
        from_token = next(t for t in self.tokens if t.type == TokenType.FROM)
        return self.source[self.tokens[0].end:from_token.position].strip()

    def _mentions_dual(self) -> bool:
        return any(t.type == TokenType.IDENTIFIER and t.value.upper() == DUAL_TABLE
                   for t in self.tokens)

    def _collect_until(self, *stop_types: str) -> List[Token]:
        """Consume tokens up to a top-level stop token (not consumed) or EOF"""
        collected = []
        depth = 0
        while self.current_token.type != TokenType.EOF:
            token_type = self.current_token.type
            if depth == 0 and token_type in stop_types:
                break
            if token_type == TokenType.LPAREN:
                depth += 1
            elif token_type == TokenType.RPAREN:
                if depth == 0:
                    self._fail("Unbalanced )")
                depth -= 1
            collected.append(self._advance())
        if depth != 0:
            self._fail("Unbalanced (")
        return collected

    def _split(self, tokens: List[Token]) -> List[List[Token]]:
        """Split tokens on commas that are not inside parentheses"""
        parts = [[]]
        depth = 0
        for token in tokens:
            if token.type == TokenType.COMMA and depth == 0:
                parts.append([])
                continue
            if token.type == TokenType.LPAREN:
                depth += 1
            elif token.type == TokenType.RPAREN:
                depth -= 1
            parts[-1].append(token)
        return parts

    def _matching_paren(self, tokens: List[Token]) -> int:
        """Index of the ) closing the ( at tokens[0]"""
        depth = 0
        for i, token in enumerate(tokens):
            if token.type == TokenType.LPAREN:
                depth += 1
            elif token.type == TokenType.RPAREN:
                depth -= 1
                if depth == 0:
                    return i
        self._fail("Unbalanced (")

    def _text(self, tokens: List[Token]) -> str:
        """Source text spanned by tokens"""
        return self.source[tokens[0].position:tokens[-1].end].strip()

    def _expect_end(self) -> None:
        if self.current_token.type != TokenType.EOF:
            self._fail(f"Unexpected trailing input at {self.current_token}")

    def _fail(self, reason: str) -> None:
        raise OraSimSyntaxError(self.error_code, reason)

    def _advance(self) -> Token:
        """Move to next token"""
        token = self.current_token
        if self.position < len(self.tokens) - 1:
            self.position += 1
            self.current_token = self.tokens[self.position]
        return token

    def _peek(self, offset: int) -> Token:
        """Look ahead without consuming"""
        idx = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[idx]

    def _match(self, *token_types: str) -> bool:
        """Check if current token matches any of the given types"""
        if self.current_token and self.current_token.type in token_types:
            self._advance()
            return True
        return False

    def _consume(self, token_type: str, message: str) -> Token:
        """Consume token of expected type or raise a shape error"""
        if self.current_token and self.current_token.type == token_type:
            return self._advance()
        self._fail(f"{message}, got {self.current_token}")

    @classmethod
    def parse_sql(cls, sql: str, raw_sql: Optional[str] = None) -> Statement:
        """
        Parse normalized SQL into a typed statement

        Args:
            sql: Normalized statement text
            raw_sql: Original text, used for the DUAL expression label

        Raises:
            OraSimParseError: statement kind unknown or shape mismatch
        """
        tokens = Lexer(sql).tokenize()
        parser = cls(tokens, sql, raw_sql)
        return parser.parse()
