"""Host functions every NoCap script can call by name. User bindings shadow them: a script may `fr len = 5;`.

Every builtin checks its arity and argument types itself and reports violations as an Error object, never by
raising.
"""

from types import MappingProxyType

from nocap.lang.objects import NULL, Array, Builtin, Integer, ObjectType, String, new_error


def check_arity(name, args, *allowed):
    """Returns an Error if len(args) is not one of allowed, otherwise None."""
    if len(args) in allowed:
        return None
    want = " or ".join(str(count) for count in allowed)
    return new_error("wrong number of arguments to `{}`: got={}, want={}", name, len(args), want)


def check_array(name, arg):
    if arg.type is not ObjectType.ARRAY:
        return new_error("argument to `{}` must be ARRAY, got {}", name, arg.type)
    return None


def builtin_len(env, *args):
    error = check_arity("len", args, 1)
    if error:
        return error

    arg, = args
    if arg.type is ObjectType.ARRAY:
        return Integer(len(arg.elements))
    elif arg.type is ObjectType.STRING:
        return Integer(len(arg.value))
    elif arg.type is ObjectType.HASH:
        return Integer(len(arg.pairs))
    return new_error("argument to `len` not supported, got {}", arg.type)


def builtin_first(env, *args):
    error = check_arity("first", args, 1) or check_array("first", args[0])
    if error:
        return error

    elements = args[0].elements
    return elements[0] if elements else NULL


def builtin_last(env, *args):
    error = check_arity("last", args, 1) or check_array("last", args[0])
    if error:
        return error

    elements = args[0].elements
    return elements[-1] if elements else NULL


def builtin_rest(env, *args):
    """New array without the first element; ghosted for an empty array."""
    error = check_arity("rest", args, 1) or check_array("rest", args[0])
    if error:
        return error

    elements = args[0].elements
    if not elements:
        return NULL
    return Array(list(elements[1:]))


def builtin_push(env, *args):
    """New array with one element appended. The argument array is left untouched."""
    error = check_arity("push", args, 2) or check_array("push", args[0])
    if error:
        return error

    array, value = args
    return Array(array.elements + [value])


def builtin_slide(env, *args):
    """slide(arr, start, end): new array of the elements from position start to end, 1-based and inclusive. Bounds
    outside the array are clamped to it.
    """
    error = check_arity("slide", args, 3) or check_array("slide", args[0])
    if error:
        return error

    array, start, end = args
    if start.type is not ObjectType.INTEGER or end.type is not ObjectType.INTEGER:
        return new_error("arguments to `slide` must be INTEGER, got {} and {}", start.type, end.type)

    first = max(start.value, 1)
    last = min(end.value, len(array.elements))
    return Array(array.elements[first - 1:last] if first <= last else [])


def builtin_range(env, *args):
    """range(str) splits a string into one-character strings; range(start, end) is the inclusive integer sequence
    start..end.
    """
    error = check_arity("range", args, 1, 2)
    if error:
        return error

    if len(args) == 1:
        arg, = args
        if arg.type is not ObjectType.STRING:
            return new_error("argument to `range` must be STRING, got {}", arg.type)
        return Array([String(char) for char in arg.value])

    start, end = args
    if start.type is not ObjectType.INTEGER or end.type is not ObjectType.INTEGER:
        return new_error("arguments to `range` must be INTEGER, got {} and {}", start.type, end.type)
    if start.value > end.value:
        return new_error("range start {} is greater than end {}", start.value, end.value)

    return Array([Integer(value) for value in range(start.value, end.value + 1)])


def builtin_caught_in_4k(env, *args):
    """Sends the display form of every argument to the script log and returns ghosted."""
    for arg in args:
        env.add_log(arg.inspect())
    return NULL


BUILTINS = MappingProxyType({
    name: Builtin(name, fn) for name, fn in [
        ("len", builtin_len),
        ("first", builtin_first),
        ("last", builtin_last),
        ("rest", builtin_rest),
        ("push", builtin_push),
        ("slide", builtin_slide),
        ("range", builtin_range),
        ("caughtIn4K", builtin_caught_in_4k),
    ]
})
