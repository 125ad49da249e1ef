"""Abstract syntax tree for the NoCap language.

Nodes are produced by the Parser and read by the evaluator; nothing mutates them after construction. str(node)
reconstructs a canonical, fully parenthesized form of the source, which is what parser tests compare against:

```
-a * b                  ->  ((-a) * b)
a + b * c + d / e - f   ->  (((a + (b * c)) + (d / e)) - f)
add(a, b[1])            ->  add(a, (b[1]))
```
"""

from abc import ABC
from dataclasses import dataclass
from typing import Optional, Tuple

from nocap.pure.token import Token


class Node(ABC):
    """Superclass of every AST node. Every node remembers the Token it starts with."""
    token: Token

    def token_literal(self):
        return self.token.literal


class Statement(Node):
    """A node that appears in a statement list."""


class Expression(Node):
    """A node that produces a value."""


def _join(nodes, sep=", "):
    return sep.join(str(node) for node in nodes)


# ---------------------------------------------------------------------------------------------------------------------
# expressions
# ---------------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class FloatLiteral(Expression):
    token: Token
    value: float

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class NullLiteral(Expression):
    token: Token

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    def __str__(self):
        # word operators need a space, symbols don't: (-a) vs (nah a)
        sep = " " if self.operator[-1].isalpha() else ""
        return f"({self.operator}{sep}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class ElseIf:
    """One `unless (condition) { consequence }` clause of an IfExpression."""
    condition: Expression
    consequence: "BlockStatement"

    def __str__(self):
        return f"unless {self.condition} {self.consequence}"


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: "BlockStatement"
    else_ifs: Tuple[ElseIf, ...] = ()
    alternative: Optional["BlockStatement"] = None

    def __str__(self):
        result = f"vibe {self.condition} {self.consequence}"
        for else_if in self.else_ifs:
            result += f" {else_if}"
        if self.alternative is not None:
            result += f" nvm {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: "BlockStatement"

    def __str__(self):
        return f"{self.token_literal()}({_join(self.parameters)}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the "(" token
    function: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self):
        return f"{self.function}({_join(self.arguments)})"


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    token: Token
    elements: Tuple[Expression, ...]

    def __str__(self):
        return f"[{_join(self.elements)}]"


@dataclass(frozen=True)
class IndexExpression(Expression):
    token: Token  # the "[" token
    left: Expression
    index: Expression

    def __str__(self):
        return f"({self.left}[{self.index}])"


@dataclass(frozen=True)
class HashLiteral(Expression):
    token: Token
    pairs: Tuple[Tuple[Expression, Expression], ...]  # source order, keys evaluated when the hash is built

    def __str__(self):
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.pairs) + "}"


# ---------------------------------------------------------------------------------------------------------------------
# statements
# ---------------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token
    statements: Tuple[Statement, ...]

    def __str__(self):
        return _join(self.statements, "")


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class AssignmentStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.name} = {self.value};"


@dataclass(frozen=True)
class IndexAssignmentStatement(Statement):
    """`container[index] = value;`. left.left is the container expression and left.index the outermost index, so
    `x[1][2] = 3;` assigns index 2 of the value of `x[1]`.
    """
    token: Token
    left: IndexExpression
    value: Expression

    def __str__(self):
        return f"{self.left} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    expression: Expression

    def __str__(self):
        return str(self.expression)


@dataclass(frozen=True)
class FunctionStatement(Statement):
    """`cook name(params) { body }`, equivalent to `fr name = cook(params) { body };`."""
    token: Token
    name: Identifier
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        return f"{self.token_literal()} {self.name}({_join(self.parameters)}) {self.body}"


@dataclass(frozen=True)
class ForStatement(Statement):
    token: Token
    key: Identifier
    items: Expression
    body: BlockStatement

    def __str__(self):
        return f"{self.token_literal()} ({self.key} in {self.items}) {self.body}"


@dataclass(frozen=True)
class WhileStatement(Statement):
    token: Token
    condition: Expression
    body: BlockStatement

    def __str__(self):
        return f"{self.token_literal()} {self.condition} {self.body}"


@dataclass(frozen=True)
class BreakStatement(Statement):
    token: Token

    def __str__(self):
        return f"{self.token_literal()};"


@dataclass(frozen=True)
class ContinueStatement(Statement):
    token: Token

    def __str__(self):
        return f"{self.token_literal()};"


@dataclass(frozen=True)
class Program(Node):
    """Root of every tree: the top-level statements in source order."""
    statements: Tuple[Statement, ...]

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self):
        return _join(self.statements, "")
