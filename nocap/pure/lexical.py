"""Lexical analysis for the NoCap language. Turns source text into a finite stream of Tokens, one per call to
next_token.

Lexical grammar, loosely:

```
<ident>   ::= [A-Za-z_] [A-Za-z0-9_]*        ; keywords are idents found in token.KEYWORDS
<int>     ::= [0-9]+
<float>   ::= [0-9]* "." [0-9]+              ; ".5"
            | [0-9]+ "." [0-9]*              ; "5." and "5.5"
<string>  ::= '"' <char>* '"'                ; no escape translation, a backslash only protects the next char

<comment> ::= "//" <char>* <newline>
            | "/*" <char>* "*/"              ; unterminated block comments run to end of input
```

A digit followed directly by a letter is two tokens: "1a" lexes as INT "1" then IDENT "a".
"""

from nocap.pure.token import COMPOUND, SYMBOLS, Token, TokenType, lookup_ident


class Lexer:
    """Produces Tokens from source on demand. Once input is exhausted every call returns an EOF Token. A Lexer cannot
    be rewound: build a new one over the same source to start over.
    """
    WHITESPACE = " \t\r\n"

    def __init__(self, source):
        self.source = source
        self.position = 0       # index of self.char
        self.read_position = 0  # index of the char after self.char
        self.char = ""          # "" marks end of input

        self.read_char()

    def read_char(self):
        """Advances by one character."""
        if self.read_position >= len(self.source):
            self.char = ""
        else:
            self.char = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        """Returns the character after self.char without consuming it."""
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def next_token(self):
        """Returns the next Token in source, advancing past it."""
        self.skip_ignored()

        char = self.char
        if char == "":
            return Token(TokenType.EOF, "")

        if char in COMPOUND and self.peek_char() == "=":
            self.read_char()
            self.read_char()
            return Token(COMPOUND[char], char + "=")

        if char in SYMBOLS:
            self.read_char()
            return Token(SYMBOLS[char], char)

        if char == '"':
            return Token(TokenType.STRING, self.read_string())

        if Lexer.is_letter(char):
            literal = self.read_identifier()
            return Token(lookup_ident(literal), literal)

        if Lexer.is_digit(char) or (char == "." and Lexer.is_digit(self.peek_char())):
            return self.read_number()

        self.read_char()
        return Token(TokenType.ILLEGAL, char)

    def skip_ignored(self):
        """Skips whitespace and comments until the start of the next token."""
        while True:
            if self.char != "" and self.char in Lexer.WHITESPACE:
                self.read_char()
            elif self.char == "/" and self.peek_char() == "/":
                while self.char not in ("\n", ""):
                    self.read_char()
            elif self.char == "/" and self.peek_char() == "*":
                self.read_char()
                self.read_char()
                while self.char != "" and not (self.char == "*" and self.peek_char() == "/"):
                    self.read_char()
                self.read_char()  # "*"
                self.read_char()  # "/"
            else:
                return

    def read_identifier(self):
        start = self.position
        while Lexer.is_letter(self.char) or Lexer.is_digit(self.char):
            self.read_char()
        return self.source[start:self.position]

    def read_number(self):
        """Reads an INT or FLOAT. Only the first "." belongs to the number."""
        start = self.position
        is_float = False

        while Lexer.is_digit(self.char) or (self.char == "." and not is_float):
            if self.char == ".":
                is_float = True
            self.read_char()

        literal = self.source[start:self.position]
        return Token(TokenType.FLOAT if is_float else TokenType.INT, literal)

    def read_string(self):
        """Reads up to the closing quote (or end of input) and returns the text between the quotes."""
        self.read_char()  # opening quote
        start = self.position

        while self.char not in ('"', ""):
            if self.char == "\\" and self.peek_char() != "":
                self.read_char()
            self.read_char()

        literal = self.source[start:self.position]
        self.read_char()  # closing quote
        return literal

    @staticmethod
    def is_letter(char):
        return char != "" and (char.isascii() and char.isalpha() or char == "_")

    @staticmethod
    def is_digit(char):
        return char != "" and char in "0123456789"

    def __iter__(self):
        """Yields Tokens up to, but not including, EOF."""
        token = self.next_token()
        while token.type is not TokenType.EOF:
            yield token
            token = self.next_token()
