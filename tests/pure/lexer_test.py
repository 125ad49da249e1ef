import unittest

from nocap.pure.lexical import Lexer
from nocap.pure.token import KEYWORDS, SYMBOLS, Token, TokenType


def tokens(source):
    return [(token.type, token.literal) for token in Lexer(source)]


class LexerTestCase(unittest.TestCase):

    def test_next_token(self):
        source = """fr five = 5;
fr ten = 10;

// Single line comment before function
fr add = cook(x, y) {
  x + y;
};

fr result = add(five, ten); // Single line comment at end of line
nah-*/5;
5 < 10 > 5;

/* Multiline comment
That spans across multiple
lines */
vibe (5 < 10) {
    yeet noCap;
} unless (5 <= 10) {
    yeet ghosted;
} nvm {
    yeet cap;
}

10 is 10;
10 aint 9;
"foobar"
"foo bar"
[1, 2];
{"foo": "bar"}
// Comment at the end of file
"""
        expected = [
            (TokenType.LET, "fr"), (TokenType.IDENT, "five"), (TokenType.ASSIGN, "="), (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "fr"), (TokenType.IDENT, "ten"), (TokenType.ASSIGN, "="), (TokenType.INT, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "fr"), (TokenType.IDENT, "add"), (TokenType.ASSIGN, "="), (TokenType.FUNCTION, "cook"),
            (TokenType.LPAREN, "("), (TokenType.IDENT, "x"), (TokenType.COMMA, ","), (TokenType.IDENT, "y"),
            (TokenType.RPAREN, ")"), (TokenType.LBRACE, "{"), (TokenType.IDENT, "x"), (TokenType.PLUS, "+"),
            (TokenType.IDENT, "y"), (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"), (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "fr"), (TokenType.IDENT, "result"), (TokenType.ASSIGN, "="), (TokenType.IDENT, "add"),
            (TokenType.LPAREN, "("), (TokenType.IDENT, "five"), (TokenType.COMMA, ","), (TokenType.IDENT, "ten"),
            (TokenType.RPAREN, ")"), (TokenType.SEMICOLON, ";"),
            (TokenType.BANG, "nah"), (TokenType.MINUS, "-"), (TokenType.ASTERISK, "*"), (TokenType.SLASH, "/"),
            (TokenType.INT, "5"), (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "5"), (TokenType.LT, "<"), (TokenType.INT, "10"), (TokenType.GT, ">"),
            (TokenType.INT, "5"), (TokenType.SEMICOLON, ";"),
            (TokenType.IF, "vibe"), (TokenType.LPAREN, "("), (TokenType.INT, "5"), (TokenType.LT, "<"),
            (TokenType.INT, "10"), (TokenType.RPAREN, ")"), (TokenType.LBRACE, "{"),
            (TokenType.RETURN, "yeet"), (TokenType.TRUE, "noCap"), (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"),
            (TokenType.ELSE_IF, "unless"), (TokenType.LPAREN, "("), (TokenType.INT, "5"), (TokenType.LT_EQ, "<="),
            (TokenType.INT, "10"), (TokenType.RPAREN, ")"), (TokenType.LBRACE, "{"),
            (TokenType.RETURN, "yeet"), (TokenType.NULL, "ghosted"), (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"),
            (TokenType.ELSE, "nvm"), (TokenType.LBRACE, "{"), (TokenType.RETURN, "yeet"), (TokenType.FALSE, "cap"),
            (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"),
            (TokenType.INT, "10"), (TokenType.EQ, "is"), (TokenType.INT, "10"), (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "10"), (TokenType.NOT_EQ, "aint"), (TokenType.INT, "9"), (TokenType.SEMICOLON, ";"),
            (TokenType.STRING, "foobar"),
            (TokenType.STRING, "foo bar"),
            (TokenType.LBRACKET, "["), (TokenType.INT, "1"), (TokenType.COMMA, ","), (TokenType.INT, "2"),
            (TokenType.RBRACKET, "]"), (TokenType.SEMICOLON, ";"),
            (TokenType.LBRACE, "{"), (TokenType.STRING, "foo"), (TokenType.COLON, ":"), (TokenType.STRING, "bar"),
            (TokenType.RBRACE, "}"),
        ]

        lexer = Lexer(source)
        for idx, (token_type, literal) in enumerate(expected):
            self.assertEqual(Token(token_type, literal), lexer.next_token(), f"token {idx}")
        self.assertEqual(Token(TokenType.EOF, ""), lexer.next_token())

    def test_single_tokens(self):
        cases = {literal: token_type for literal, token_type in SYMBOLS.items()}
        cases.update(KEYWORDS)
        cases.update({"<=": TokenType.LT_EQ, ">=": TokenType.GT_EQ})

        for literal, token_type in cases.items():
            lexer = Lexer(literal)
            self.assertEqual(Token(token_type, literal), lexer.next_token(), literal)
            self.assertEqual(TokenType.EOF, lexer.next_token().type, literal)

    def test_eof_is_stable(self):
        should_pass = ["", "   ", "// only a comment", "/* unterminated block comment", "x"]
        for case in should_pass:
            lexer = Lexer(case)
            list(lexer)
            for __ in range(3):
                self.assertEqual(Token(TokenType.EOF, ""), lexer.next_token(), case)

    def test_numbers(self):
        cases = {
            "123": [(TokenType.INT, "123")],
            "0": [(TokenType.INT, "0")],
            ".5": [(TokenType.FLOAT, ".5")],
            ".04": [(TokenType.FLOAT, ".04")],
            "5.": [(TokenType.FLOAT, "5.")],
            "5.5": [(TokenType.FLOAT, "5.5")],
            "1a": [(TokenType.INT, "1"), (TokenType.IDENT, "a")],
            "12ab3": [(TokenType.INT, "12"), (TokenType.IDENT, "ab3")],
            "1.5x": [(TokenType.FLOAT, "1.5"), (TokenType.IDENT, "x")],
            "1.2.3": [(TokenType.FLOAT, "1.2"), (TokenType.FLOAT, ".3")],
            "-7": [(TokenType.MINUS, "-"), (TokenType.INT, "7")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), case)

    def test_identifiers(self):
        should_pass = ["x", "foo_bar", "_private", "trailing_", "a1b2", "noCapper", "iss", "CAP"]
        for case in should_pass:
            self.assertEqual([(TokenType.IDENT, case)], tokens(case), case)

    def test_strings(self):
        cases = {
            '"hello world"': [(TokenType.STRING, "hello world")],
            '""': [(TokenType.STRING, "")],
            '"unterminated': [(TokenType.STRING, "unterminated")],
            '"say \\"hi\\""': [(TokenType.STRING, 'say \\"hi\\"')],
            '"a" + "b"': [(TokenType.STRING, "a"), (TokenType.PLUS, "+"), (TokenType.STRING, "b")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), case)

    def test_comments(self):
        cases = {
            "1 // two\n3": [(TokenType.INT, "1"), (TokenType.INT, "3")],
            "1 /* two */ 3": [(TokenType.INT, "1"), (TokenType.INT, "3")],
            "1 /* two \n still two */ 3": [(TokenType.INT, "1"), (TokenType.INT, "3")],
            "1 /* never closed 3": [(TokenType.INT, "1")],
            "6 / 2": [(TokenType.INT, "6"), (TokenType.SLASH, "/"), (TokenType.INT, "2")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), case)

    def test_illegal(self):
        cases = {
            "@": [(TokenType.ILLEGAL, "@")],
            "a # b": [(TokenType.IDENT, "a"), (TokenType.ILLEGAL, "#"), (TokenType.IDENT, "b")],
            "x.y": [(TokenType.IDENT, "x"), (TokenType.ILLEGAL, "."), (TokenType.IDENT, "y")],
            "!": [(TokenType.ILLEGAL, "!")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), case)

    def test_fresh_lexer_restarts(self):
        source = "fr x = 1;"
        self.assertEqual(tokens(source), tokens(source))


if __name__ == '__main__':
    unittest.main()
