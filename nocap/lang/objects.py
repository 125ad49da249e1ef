"""Runtime values of the NoCap language, plus the Environment that binds names to them.

The value family is closed: Integer, Float, String, Boolean, Null, Array, Hash, Function and Builtin are values a
script can hold; ReturnValue, Break, Continue and Error are Signals. A Signal is never an operand: the evaluator
checks for one after every recursive call and hands it straight back up until the construct that absorbs it (a
function call for ReturnValue, a loop for Break/Continue, nothing for Error).
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Tuple


class ObjectType(enum.Enum):
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ARRAY = "ARRAY"
    HASH = "HASH"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    RETURN_VALUE = "RETURN_VALUE"
    BREAK = "BREAK"
    CONTINUE = "CONTINUE"
    ERROR = "ERROR"

    def __str__(self):
        return self.value


class HashKey(NamedTuple):
    """Value-equality projection of a hashable Object: equal values give equal keys."""
    type: ObjectType
    value: Any


class Object(ABC):
    """Superclass of every runtime value."""
    TYPE: ObjectType

    @property
    def type(self):
        return self.TYPE

    @abstractmethod
    def inspect(self):
        """Display form, used for results, logs and error messages."""

    def hash_key(self):
        """Returns a HashKey, or None if this kind of Object can't be used as a hash key."""
        return None

    def __str__(self):
        return self.inspect()


# ---------------------------------------------------------------------------------------------------------------------
# values
# ---------------------------------------------------------------------------------------------------------------------

INT64_MIN = -2 ** 63


def to_int64(value):
    """Wraps value into the signed 64-bit range the way two's complement overflow does."""
    return (value - INT64_MIN) % 2 ** 64 + INT64_MIN


@dataclass
class Integer(Object):
    """Signed 64-bit integer. Arithmetic results go through to_int64."""
    TYPE = ObjectType.INTEGER
    value: int

    def inspect(self):
        return str(self.value)

    def hash_key(self):
        return HashKey(self.TYPE, self.value)


@dataclass
class Float(Object):
    TYPE = ObjectType.FLOAT
    value: float

    def inspect(self):
        return repr(self.value)


@dataclass
class String(Object):
    TYPE = ObjectType.STRING
    value: str

    def inspect(self):
        return self.value

    def hash_key(self):
        return HashKey(self.TYPE, self.value)


class Boolean(Object):
    """Only TRUE and FALSE exist; use native_bool to get one."""
    TYPE = ObjectType.BOOLEAN

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return "noCap" if self.value else "cap"

    def hash_key(self):
        return HashKey(self.TYPE, self.value)

    def __repr__(self):
        return f"Boolean({self.value})"


class Null(Object):
    TYPE = ObjectType.NULL

    def inspect(self):
        return "ghosted"

    def __repr__(self):
        return "Null()"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    return TRUE if value else FALSE


def is_truthy(obj):
    """ghosted and cap are falsy, everything else (0 and "" included) is truthy."""
    return obj is not NULL and obj is not FALSE


@dataclass
class Array(Object):
    """Ordered elements. Scripts index arrays from 1."""
    TYPE = ObjectType.ARRAY
    elements: List[Object] = field(default_factory=list)

    def inspect(self):
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


class HashPair(NamedTuple):
    key: Object
    value: Object


@dataclass
class Hash(Object):
    """Pairs keyed by HashKey; the original key Object is kept for iteration and display. Insertion ordered."""
    TYPE = ObjectType.HASH
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)

    def inspect(self):
        return "{" + ", ".join(f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values()) + "}"


@dataclass(eq=False)
class Function(Object):
    """A closure: env is the live Environment the function was defined in, shared, not copied."""
    TYPE = ObjectType.FUNCTION
    parameters: Tuple[Any, ...]
    body: Any
    env: "Environment"

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"cook({params}) {{\n{self.body}\n}}"


@dataclass(eq=False)
class Builtin(Object):
    """Host function. fn is called as fn(env, *args) and must return an Object."""
    TYPE = ObjectType.BUILTIN
    name: str
    fn: Callable[..., Object]

    def inspect(self):
        return f"builtin function {self.name}"


# ---------------------------------------------------------------------------------------------------------------------
# signals
# ---------------------------------------------------------------------------------------------------------------------

class Signal(Object):
    """Superclass of the non-value results that short-circuit evaluation."""


@dataclass
class ReturnValue(Signal):
    TYPE = ObjectType.RETURN_VALUE
    value: Object

    def inspect(self):
        return self.value.inspect()


class Break(Signal):
    TYPE = ObjectType.BREAK

    def inspect(self):
        return "bounce"


class Continue(Signal):
    TYPE = ObjectType.CONTINUE

    def inspect(self):
        return "pass"


BREAK = Break()
CONTINUE = Continue()


@dataclass
class Error(Signal):
    TYPE = ObjectType.ERROR
    message: str

    def inspect(self):
        return self.message


def new_error(msg, *args):
    """Returns an Error with msg formatted by args, str.format style."""
    return Error(msg.format(*args))


def is_error(obj):
    return isinstance(obj, Error)


def is_signal(obj):
    return isinstance(obj, Signal)


# ---------------------------------------------------------------------------------------------------------------------
# environment
# ---------------------------------------------------------------------------------------------------------------------

class Environment:
    """One lexical scope. Scopes chain through outer; the root scope (outer is None) also owns the script log."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer
        self._logs = []  # only used on the root scope

    @classmethod
    def enclosed(cls, outer):
        """New child scope of outer, used for function calls and for-loop iterations."""
        return cls(outer)

    def get(self, name):
        """Returns (value, found), searching this scope and then every enclosing one."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name], True
            env = env.outer
        return None, False

    def define(self, name, value):
        """Binds name in this scope, shadowing any outer binding."""
        self.store[name] = value
        return value

    def update(self, name, value):
        """Rebinds name in the innermost scope that already defines it. Assigning an unbound name is an Error,
        never an implicit definition.
        """
        env = self
        while env is not None:
            if name in env.store:
                env.store[name] = value
                return value
            env = env.outer
        return new_error("identifier not found: {}", name)

    @property
    def root(self):
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def add_log(self, text):
        """Appends text to the root scope's log, however deeply nested this scope is."""
        self.root._logs.append(text)

    def drain_logs(self):
        """Returns the root log and starts a new one."""
        root = self.root
        logs, root._logs = root._logs, []
        return logs

    def __repr__(self):
        return f"Environment(names={list(self.store)}, outer={'yes' if self.outer else 'no'})"
