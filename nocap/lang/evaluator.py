"""Tree-walking evaluator for the NoCap language.

evaluate(node, env) dispatches on the node's class and returns an Object. The evaluator keeps no state of its own:
everything it needs travels in env.

Signals (see objects.py) ride the same return channel as values. The rule every function below follows: after each
recursive evaluate, if the result is a Signal, return it unchanged before doing anything else. That gives left to
right evaluation with no side effects after the first Error, and lets ReturnValue/Break/Continue climb to the
construct that absorbs them:

- ReturnValue is unwrapped by the nearest function call, or by the program itself.
- Break/Continue are absorbed by the nearest stalk/onRepeat loop. Reaching a function call boundary or the program
  top level instead turns them into an Error.
"""

import math

from nocap.lang.builtins import BUILTINS
from nocap.lang.objects import (
    BREAK, CONTINUE, NULL, Array, Break, Builtin, Continue, Environment, Error, Float, Function, Hash, HashPair,
    Integer, ObjectType, ReturnValue, String, is_error, is_signal, is_truthy, native_bool, new_error, to_int64,
)
from nocap.pure import syntax

NUMERIC = (ObjectType.INTEGER, ObjectType.FLOAT)

BREAK_OUTSIDE_LOOP = "break statement cannot be used outside of loop"
CONTINUE_OUTSIDE_LOOP = "continue statement cannot be used outside of loop"


def evaluate(node, env):
    """Evaluates node in env and returns the resulting Object (possibly a Signal)."""
    return EVALUATORS[type(node)](node, env)


def escaped_loop_signal(result):
    """Turns a Break/Continue that left every loop into the matching Error; other results pass through."""
    if isinstance(result, Break):
        return Error(BREAK_OUTSIDE_LOOP)
    elif isinstance(result, Continue):
        return Error(CONTINUE_OUTSIDE_LOOP)
    return result


# ---------------------------------------------------------------------------------------------------------------------
# statements
# ---------------------------------------------------------------------------------------------------------------------

def eval_program(program, env):
    result = NULL
    for statement in program.statements:
        result = evaluate(statement, env)

        if isinstance(result, ReturnValue):
            return result.value
        elif is_signal(result):
            return escaped_loop_signal(result)
    return result


def eval_block_statement(block, env):
    """Unlike eval_program, leaves Signals wrapped so enclosing functions and loops can see them."""
    result = NULL
    for statement in block.statements:
        result = evaluate(statement, env)
        if is_signal(result):
            return result
    return result


def eval_expression_statement(node, env):
    return evaluate(node.expression, env)


def eval_return_statement(node, env):
    value = evaluate(node.return_value, env)
    if is_signal(value):
        return value
    return ReturnValue(value)


def eval_let_statement(node, env):
    value = evaluate(node.value, env)
    if is_signal(value):
        return value

    env.define(node.name.value, value)
    return NULL


def eval_assignment_statement(node, env):
    value = evaluate(node.value, env)
    if is_signal(value):
        return value

    updated = env.update(node.name.value, value)
    if is_error(updated):
        return updated
    return NULL


def eval_index_assignment_statement(node, env):
    container = evaluate(node.left.left, env)
    if is_signal(container):
        return container

    if container.type not in (ObjectType.ARRAY, ObjectType.HASH):
        return new_error("index assignment not supported: {}", container.type)

    index = evaluate(node.left.index, env)
    if is_signal(index):
        return index

    value = evaluate(node.value, env)
    if is_signal(value):
        return value

    if container.type is ObjectType.ARRAY:
        if index.type is not ObjectType.INTEGER:
            return new_error("array index must be INTEGER, got {}", index.type)

        length = len(container.elements)
        if not 1 <= index.value <= length:
            return new_error("index {} out of range for array of length {}", index.value, length)

        container.elements[index.value - 1] = value
        return NULL

    key = index.hash_key()
    if key is None:
        return new_error("unusable as hash key: {}", index.type)

    container.pairs[key] = HashPair(index, value)
    return NULL


def eval_function_statement(node, env):
    env.define(node.name.value, Function(node.parameters, node.body, env))
    return NULL


def eval_break_statement(node, env):
    return BREAK


def eval_continue_statement(node, env):
    return CONTINUE


def run_loop_body(body, env):
    """Evaluates one loop iteration. Returns (stop, result): stop is True when the loop must end with result."""
    result = eval_block_statement(body, env)

    if isinstance(result, (Error, ReturnValue)):
        return True, result
    elif isinstance(result, Break):
        return True, NULL
    elif isinstance(result, Continue):
        return False, None
    return False, result


def eval_for_statement(node, env):
    items = evaluate(node.items, env)
    if is_signal(items):
        return items

    if items.type is ObjectType.ARRAY:
        elements = list(items.elements)
    elif items.type is ObjectType.HASH:
        elements = [pair.key for pair in items.pairs.values()]
    else:
        return new_error("cannot iterate over {}", items.type)

    result = NULL
    for element in elements:
        iteration_env = Environment.enclosed(env)
        iteration_env.define(node.key.value, element)

        stop, value = run_loop_body(node.body, iteration_env)
        if stop:
            return value
        if value is not None:
            result = value
    return result


def eval_while_statement(node, env):
    """The body runs in env itself: onRepeat opens no scope per iteration."""
    result = NULL
    while True:
        condition = evaluate(node.condition, env)
        if is_signal(condition):
            return condition
        if not is_truthy(condition):
            return result

        stop, value = run_loop_body(node.body, env)
        if stop:
            return value
        if value is not None:
            result = value


# ---------------------------------------------------------------------------------------------------------------------
# expressions
# ---------------------------------------------------------------------------------------------------------------------

def eval_integer_literal(node, env):
    return Integer(node.value)


def eval_float_literal(node, env):
    return Float(node.value)


def eval_string_literal(node, env):
    return String(node.value)


def eval_boolean_literal(node, env):
    return native_bool(node.value)


def eval_null_literal(node, env):
    return NULL


def eval_identifier(node, env):
    """User bindings first, then builtins."""
    value, found = env.get(node.value)
    if found:
        return value

    builtin = BUILTINS.get(node.value)
    if builtin is not None:
        return builtin

    return new_error("identifier not found: {}", node.value)


def eval_prefix_expression(node, env):
    right = evaluate(node.right, env)
    if is_signal(right):
        return right

    if node.operator == "nah":
        return native_bool(not is_truthy(right))
    elif node.operator == "-":
        if right.type is ObjectType.INTEGER:
            return Integer(to_int64(-right.value))
        elif right.type is ObjectType.FLOAT:
            return Float(-right.value)
    return new_error("unknown operator: {}{}", node.operator, right.type)


def eval_infix_expression(node, env):
    left = evaluate(node.left, env)
    if is_signal(left):
        return left

    # and/or only evaluate the right operand when the left one doesn't decide the result
    if node.operator == "and" and not is_truthy(left):
        return native_bool(False)
    elif node.operator == "or" and is_truthy(left):
        return native_bool(True)

    right = evaluate(node.right, env)
    if is_signal(right):
        return right

    if node.operator in ("and", "or"):
        return native_bool(is_truthy(right))
    return infix_operation(node.operator, left, right)


def infix_operation(operator, left, right):
    """Applies a binary operator to two plain values."""
    if left.type is ObjectType.INTEGER and right.type is ObjectType.INTEGER:
        return integer_operation(operator, left, right)
    elif left.type in NUMERIC and right.type in NUMERIC:
        return float_operation(operator, left, right)
    elif left.type is ObjectType.STRING and right.type is ObjectType.STRING:
        return string_operation(operator, left, right)
    elif operator == "is":
        return native_bool(left is right)
    elif operator == "aint":
        return native_bool(left is not right)
    elif left.type is not right.type:
        return new_error("type mismatch: {} {} {}", left.type, operator, right.type)
    return new_error("unknown operator: {} {} {}", left.type, operator, right.type)


def truncated_div(dividend, divisor):
    """Integer division rounding toward zero."""
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


COMPARISONS = {
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "<=": lambda a, b: a <= b,
    ">=": lambda a, b: a >= b,
    "is": lambda a, b: a == b,
    "aint": lambda a, b: a != b,
}


def integer_operation(operator, left, right):
    a, b = left.value, right.value

    # results wrap around like int64 overflow
    if operator == "+":
        return Integer(to_int64(a + b))
    elif operator == "-":
        return Integer(to_int64(a - b))
    elif operator == "*":
        return Integer(to_int64(a * b))
    elif operator in ("/", "%"):
        if b == 0:
            return Error("division by zero")
        quotient = truncated_div(a, b)
        return Integer(to_int64(quotient) if operator == "/" else a - b * quotient)
    elif operator in COMPARISONS:
        return native_bool(COMPARISONS[operator](a, b))
    return new_error("unknown operator: {} {} {}", left.type, operator, right.type)


def float_operation(operator, left, right):
    """At least one operand is a Float, so both are promoted."""
    a, b = float(left.value), float(right.value)

    if operator == "+":
        return Float(a + b)
    elif operator == "-":
        return Float(a - b)
    elif operator == "*":
        return Float(a * b)
    elif operator in ("/", "%"):
        if b == 0:
            return Error("division by zero")
        if operator == "/":
            return Float(a / b)
        return Float(math.fmod(a, b) if math.isfinite(a) else math.nan)  # fmod raises on an infinite dividend
    elif operator in COMPARISONS:
        return native_bool(COMPARISONS[operator](a, b))
    return new_error("unknown operator: {} {} {}", left.type, operator, right.type)


def string_operation(operator, left, right):
    if operator == "+":
        return String(left.value + right.value)
    elif operator in ("is", "aint"):
        return native_bool(COMPARISONS[operator](left.value, right.value))
    return new_error("unknown operator: {} {} {}", left.type, operator, right.type)


def eval_if_expression(node, env):
    """First truthy condition wins: vibe, then each unless in order, then nvm. ghosted if nothing ran."""
    branches = [(node.condition, node.consequence)]
    branches += [(else_if.condition, else_if.consequence) for else_if in node.else_ifs]

    for condition_node, consequence in branches:
        condition = evaluate(condition_node, env)
        if is_signal(condition):
            return condition
        if is_truthy(condition):
            return evaluate(consequence, env)

    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def eval_function_literal(node, env):
    return Function(node.parameters, node.body, env)


def eval_expressions(nodes, env):
    """Evaluates nodes left to right. Returns the list of values, or the first Signal met."""
    values = []
    for node in nodes:
        value = evaluate(node, env)
        if is_signal(value):
            return value
        values.append(value)
    return values


def eval_call_expression(node, env):
    function = evaluate(node.function, env)
    if is_signal(function):
        return function

    args = eval_expressions(node.arguments, env)
    if is_signal(args):
        return args

    return apply_function(function, args, env)


def apply_function(function, args, env):
    if isinstance(function, Function):
        if len(args) != len(function.parameters):
            return new_error("wrong number of arguments: want={}, got={}", len(function.parameters), len(args))

        call_env = Environment.enclosed(function.env)
        for param, arg in zip(function.parameters, args):
            call_env.define(param.value, arg)

        result = evaluate(function.body, call_env)
        if isinstance(result, ReturnValue):
            return result.value
        return escaped_loop_signal(result)

    elif isinstance(function, Builtin):
        return function.fn(env, *args)

    return new_error("not a function: {}", function.type)


def eval_array_literal(node, env):
    elements = eval_expressions(node.elements, env)
    if is_signal(elements):
        return elements
    return Array(elements)


def eval_hash_literal(node, env):
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_signal(key):
            return key

        hash_key = key.hash_key()
        if hash_key is None:
            return new_error("unusable as hash key: {}", key.type)

        value = evaluate(value_node, env)
        if is_signal(value):
            return value

        pairs[hash_key] = HashPair(key, value)
    return Hash(pairs)


def eval_index_expression(node, env):
    left = evaluate(node.left, env)
    if is_signal(left):
        return left

    index = evaluate(node.index, env)
    if is_signal(index):
        return index

    if left.type is ObjectType.ARRAY:
        if index.type is not ObjectType.INTEGER:
            return new_error("array index must be INTEGER, got {}", index.type)

        # reads outside 1..len are ghosted; writes outside it are an error
        if not 1 <= index.value <= len(left.elements):
            return NULL
        return left.elements[index.value - 1]

    elif left.type is ObjectType.HASH:
        hash_key = index.hash_key()
        if hash_key is None:
            return new_error("unusable as hash key: {}", index.type)

        pair = left.pairs.get(hash_key)
        return pair.value if pair is not None else NULL

    return new_error("index operator not supported: {}", left.type)


EVALUATORS = {
    syntax.Program: eval_program,
    syntax.BlockStatement: eval_block_statement,
    syntax.ExpressionStatement: eval_expression_statement,
    syntax.ReturnStatement: eval_return_statement,
    syntax.LetStatement: eval_let_statement,
    syntax.AssignmentStatement: eval_assignment_statement,
    syntax.IndexAssignmentStatement: eval_index_assignment_statement,
    syntax.FunctionStatement: eval_function_statement,
    syntax.ForStatement: eval_for_statement,
    syntax.WhileStatement: eval_while_statement,
    syntax.BreakStatement: eval_break_statement,
    syntax.ContinueStatement: eval_continue_statement,
    syntax.IntegerLiteral: eval_integer_literal,
    syntax.FloatLiteral: eval_float_literal,
    syntax.StringLiteral: eval_string_literal,
    syntax.BooleanLiteral: eval_boolean_literal,
    syntax.NullLiteral: eval_null_literal,
    syntax.Identifier: eval_identifier,
    syntax.PrefixExpression: eval_prefix_expression,
    syntax.InfixExpression: eval_infix_expression,
    syntax.IfExpression: eval_if_expression,
    syntax.FunctionLiteral: eval_function_literal,
    syntax.CallExpression: eval_call_expression,
    syntax.ArrayLiteral: eval_array_literal,
    syntax.HashLiteral: eval_hash_literal,
    syntax.IndexExpression: eval_index_expression,
}
