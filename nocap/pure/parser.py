"""Pratt (top-down operator precedence) parser for the NoCap language.

Statement grammar, loosely:

```
<program>    ::= <statement>*
<statement>  ::= "fr" <ident> "=" <expr> ";"?
               | <ident> "=" <expr> ";"?                          ; assignment to an existing binding
               | <expr> "[" <expr> "]" "=" <expr> ";"?            ; index assignment
               | "yeet" <expr> ";"? | "bounce" ";"? | "pass" ";"?
               | "cook" <ident> "(" <params> ")" <block>          ; sugar for fr <ident> = cook(...) {...}
               | "stalk" "(" <ident> "in" <expr> ")" <block>
               | "onRepeat" "(" <expr> ")" <block>
               | <expr> ";"?
<block>      ::= "{" <statement>* "}"
```

Binding power, lowest to highest: or < and < is/aint < relational < + - < * / % < prefix < call/index. All binary
operators are left associative.

The parser never stops at the first syntax error: it records a message in Parser.errors, skips to the end of the
broken statement (its ";", or the "}" of a block it opened) without leaving the enclosing block, and keeps going, so
a single run reports as many problems as it can find. A Program parsed with errors is partial and must not be
trusted.
"""

import enum

from nocap.pure import syntax
from nocap.pure.token import TokenType


class Precedence(enum.IntEnum):
    LOWEST = 1
    OR = 2
    AND = 3
    EQUALS = 4
    LESSGREATER = 5
    SUM = 6
    PRODUCT = 7
    PREFIX = 8
    CALL = 9


PRECEDENCES = {
    TokenType.OR: Precedence.OR,
    TokenType.AND: Precedence.AND,
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.LT_EQ: Precedence.LESSGREATER,
    TokenType.GT_EQ: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.MODULO: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.CALL,
}


MAX_INTEGER = 2 ** 63 - 1  # integer literals must fit a signed 64-bit Integer


class ParseError(Exception):
    """Raised inside the parser to abandon the current statement. Never escapes parse_program."""


class Parser:
    """Consumes a Lexer and builds a syntax.Program."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None
        self.depth = 0  # "{" minus "}" seen up to and including cur_token

        self.prefix_parse_fns = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.FLOAT: self.parse_float_literal,
            TokenType.STRING: self.parse_string_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.NULL: self.parse_null,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
            TokenType.LBRACKET: self.parse_array_literal,
            TokenType.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns = {token_type: self.parse_infix_expression for token_type in PRECEDENCES}
        self.infix_parse_fns[TokenType.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[TokenType.LBRACKET] = self.parse_index_expression

        # read two tokens so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    # -----------------------------------------------------------------------------------------------------------------
    # token helpers
    # -----------------------------------------------------------------------------------------------------------------

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

        if self.cur_token is None:
            return
        if self.cur_token_is(TokenType.LBRACE):
            self.depth += 1
        elif self.cur_token_is(TokenType.RBRACE):
            self.depth = max(self.depth - 1, 0)  # a stray "}" at top level doesn't go negative

    def cur_token_is(self, token_type):
        return self.cur_token.type is token_type

    def peek_token_is(self, token_type):
        return self.peek_token.type is token_type

    def expect_peek(self, token_type):
        """Advances if the next token is token_type, otherwise records an error and abandons the statement."""
        if self.peek_token_is(token_type):
            self.next_token()
            return
        self.error(f"expected next token to be {token_type}, got {self.peek_token.type} instead")

    def error(self, msg):
        self.errors.append(msg)
        raise ParseError(msg)

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def skip_semicolon(self):
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

    def synchronize(self, depth):
        """Skips to the last token of a broken statement that started at brace depth depth: its ";", or the "}"
        closing a block it opened (plus a ";" right after it). Returns False if it hits the "}" of the enclosing
        block or EOF first, leaving that token current.
        """
        while not self.cur_token_is(TokenType.EOF):
            if self.depth < depth:
                return False
            if self.depth == depth and self.cur_token.type in (TokenType.SEMICOLON, TokenType.RBRACE):
                if self.cur_token_is(TokenType.RBRACE):
                    self.skip_semicolon()
                return True
            self.next_token()
        return False

    # -----------------------------------------------------------------------------------------------------------------
    # statements
    # -----------------------------------------------------------------------------------------------------------------

    def parse_program(self):
        """Parses the entire token stream. Check self.errors afterwards: a non-empty list means the Program is
        partial.
        """
        statements = []
        while not self.cur_token_is(TokenType.EOF):
            try:
                statements.append(self.parse_statement())
            except ParseError:
                self.synchronize(0)
            self.next_token()
        return syntax.Program(tuple(statements))

    def parse_statement(self):
        token_type = self.cur_token.type

        if token_type is TokenType.LET:
            return self.parse_let_statement()
        elif token_type is TokenType.RETURN:
            return self.parse_return_statement()
        elif token_type is TokenType.BREAK:
            return self.parse_bare_statement(syntax.BreakStatement)
        elif token_type is TokenType.CONTINUE:
            return self.parse_bare_statement(syntax.ContinueStatement)
        elif token_type is TokenType.FOR:
            return self.parse_for_statement()
        elif token_type is TokenType.WHILE:
            return self.parse_while_statement()
        elif token_type is TokenType.FUNCTION and self.peek_token_is(TokenType.IDENT):
            return self.parse_function_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.cur_token

        self.expect_peek(TokenType.IDENT)
        name = syntax.Identifier(self.cur_token, self.cur_token.literal)

        self.expect_peek(TokenType.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        self.skip_semicolon()
        return syntax.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.cur_token
        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)

        self.skip_semicolon()
        return syntax.ReturnStatement(token, return_value)

    def parse_bare_statement(self, node_cls):
        """break/continue: a keyword and an optional semicolon."""
        token = self.cur_token
        self.skip_semicolon()
        return node_cls(token)

    def parse_expression_statement(self):
        """Also handles assignments: the left-hand side is parsed as an ordinary expression first and only then
        checked to be an assignable target.
        """
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.ASSIGN):
            self.next_token()
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            self.skip_semicolon()

            if isinstance(expression, syntax.Identifier):
                return syntax.AssignmentStatement(token, expression, value)
            elif isinstance(expression, syntax.IndexExpression):
                return syntax.IndexAssignmentStatement(token, expression, value)
            self.error(f"cannot assign to {expression}")

        self.skip_semicolon()
        return syntax.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Statements that fail to parse are dropped and parsing resumes inside the block, so one bad line doesn't
        take the closing "}" down with it.
        """
        token = self.cur_token
        depth = self.depth
        statements = []

        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE):
            if self.cur_token_is(TokenType.EOF):
                self.error(f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead")
            try:
                statements.append(self.parse_statement())
            except ParseError:
                if not self.synchronize(depth):
                    if self.cur_token_is(TokenType.EOF):
                        raise
                    break  # cur_token is this block's "}"
            self.next_token()

        return syntax.BlockStatement(token, tuple(statements))

    def parse_function_statement(self):
        token = self.cur_token

        self.next_token()
        name = syntax.Identifier(self.cur_token, self.cur_token.literal)

        self.expect_peek(TokenType.LPAREN)
        parameters = self.parse_function_parameters()

        self.expect_peek(TokenType.LBRACE)
        body = self.parse_block_statement()

        return syntax.FunctionStatement(token, name, parameters, body)

    def parse_for_statement(self):
        token = self.cur_token

        self.expect_peek(TokenType.LPAREN)
        self.expect_peek(TokenType.IDENT)
        key = syntax.Identifier(self.cur_token, self.cur_token.literal)

        self.expect_peek(TokenType.IN)
        self.next_token()
        items = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TokenType.RPAREN)
        self.expect_peek(TokenType.LBRACE)
        body = self.parse_block_statement()

        return syntax.ForStatement(token, key, items, body)

    def parse_while_statement(self):
        token = self.cur_token

        self.expect_peek(TokenType.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TokenType.RPAREN)
        self.expect_peek(TokenType.LBRACE)
        body = self.parse_block_statement()

        return syntax.WhileStatement(token, condition, body)

    # -----------------------------------------------------------------------------------------------------------------
    # expressions
    # -----------------------------------------------------------------------------------------------------------------

    def parse_expression(self, precedence):
        """Core of the Pratt loop: parse a prefix, then keep folding infix operators into it for as long as the next
        operator binds tighter than precedence.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.error(f"no prefix parse function for {self.cur_token.type} found")
        left = prefix()

        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return syntax.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        literal = self.cur_token.literal  # all digits
        if len(literal.lstrip("0")) > len(str(MAX_INTEGER)) or int(literal) > MAX_INTEGER:
            self.error(f"could not parse {literal} as integer")
        return syntax.IntegerLiteral(self.cur_token, int(literal))

    def parse_float_literal(self):
        try:
            value = float(self.cur_token.literal)
        except ValueError:
            self.error(f"could not parse {self.cur_token.literal} as float")
        return syntax.FloatLiteral(self.cur_token, value)

    def parse_string_literal(self):
        return syntax.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return syntax.BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_null(self):
        return syntax.NullLiteral(self.cur_token)

    def parse_prefix_expression(self):
        token = self.cur_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)

        return syntax.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)

        return syntax.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TokenType.RPAREN)
        return expression

    def parse_condition(self):
        """Parses "(" <expr> ")" followed by a block, as used by vibe and unless."""
        self.expect_peek(TokenType.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TokenType.RPAREN)
        self.expect_peek(TokenType.LBRACE)
        return condition, self.parse_block_statement()

    def parse_if_expression(self):
        token = self.cur_token
        condition, consequence = self.parse_condition()

        else_ifs = []
        while self.peek_token_is(TokenType.ELSE_IF):
            self.next_token()
            else_ifs.append(syntax.ElseIf(*self.parse_condition()))

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            self.expect_peek(TokenType.LBRACE)
            alternative = self.parse_block_statement()

        return syntax.IfExpression(token, condition, consequence, tuple(else_ifs), alternative)

    def parse_function_literal(self):
        token = self.cur_token

        self.expect_peek(TokenType.LPAREN)
        parameters = self.parse_function_parameters()

        self.expect_peek(TokenType.LBRACE)
        body = self.parse_block_statement()

        return syntax.FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses a comma separated identifier list; cur_token is the "(" before it."""
        identifiers = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return tuple(identifiers)

        self.expect_peek(TokenType.IDENT)
        identifiers.append(syntax.Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.expect_peek(TokenType.IDENT)
            identifiers.append(syntax.Identifier(self.cur_token, self.cur_token.literal))

        self.expect_peek(TokenType.RPAREN)
        return tuple(identifiers)

    def parse_call_expression(self, function):
        token = self.cur_token
        arguments = self.parse_expression_list(TokenType.RPAREN)
        return syntax.CallExpression(token, function, arguments)

    def parse_array_literal(self):
        token = self.cur_token
        elements = self.parse_expression_list(TokenType.RBRACKET)
        return syntax.ArrayLiteral(token, elements)

    def parse_expression_list(self, end):
        """Parses a comma separated expression list closed by end; cur_token is the opener."""
        expressions = []

        if self.peek_token_is(end):
            self.next_token()
            return tuple(expressions)

        self.next_token()
        expressions.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            expressions.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(end)
        return tuple(expressions)

    def parse_index_expression(self, left):
        token = self.cur_token

        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TokenType.RBRACKET)
        return syntax.IndexExpression(token, left, index)

    def parse_hash_literal(self):
        token = self.cur_token
        pairs = []

        while not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)

            self.expect_peek(TokenType.COLON)
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)

            pairs.append((key, value))

            if not self.peek_token_is(TokenType.RBRACE):
                self.expect_peek(TokenType.COMMA)

        self.expect_peek(TokenType.RBRACE)
        return syntax.HashLiteral(token, tuple(pairs))
