import unittest

from nocap.lang.builtins import BUILTINS
from nocap.lang.objects import NULL, TRUE, Array, Environment, Error, Hash, Integer, String


def array(*values):
    return Array([Integer(value) for value in values])


def call(name, *args, env=None):
    return BUILTINS[name].fn(env if env is not None else Environment(), *args)


class BuiltinsTestCase(unittest.TestCase):

    def test_registry(self):
        expected = ["len", "first", "last", "rest", "push", "slide", "range", "caughtIn4K"]
        self.assertEqual(sorted(expected), sorted(BUILTINS))
        for name, builtin in BUILTINS.items():
            self.assertEqual(name, builtin.name)
            self.assertEqual("builtin function " + name, builtin.inspect())

        with self.assertRaises(TypeError):
            BUILTINS["len"] = None

    def test_len(self):
        cases = [
            ((String(""),), Integer(0)),
            ((String("four"),), Integer(4)),
            ((String("hello world"),), Integer(11)),
            ((array(1, 2, 3),), Integer(3)),
            ((array(),), Integer(0)),
            ((Hash({String("a").hash_key(): None}),), Integer(1)),
            ((Integer(1),), Error("argument to `len` not supported, got INTEGER")),
            ((String("one"), String("two")), Error("wrong number of arguments to `len`: got=2, want=1")),
            ((), Error("wrong number of arguments to `len`: got=0, want=1")),
        ]
        for args, expected in cases:
            self.assertEqual(expected, call("len", *args), args)

    def test_first_last(self):
        self.assertEqual(Integer(1), call("first", array(1, 2, 3)))
        self.assertEqual(Integer(3), call("last", array(1, 2, 3)))
        self.assertIs(NULL, call("first", array()))
        self.assertIs(NULL, call("last", array()))

        self.assertEqual(Error("argument to `first` must be ARRAY, got INTEGER"), call("first", Integer(1)))
        self.assertEqual(Error("argument to `last` must be ARRAY, got STRING"), call("last", String("x")))
        self.assertEqual(Error("wrong number of arguments to `first`: got=0, want=1"), call("first"))
        self.assertEqual(Error("wrong number of arguments to `last`: got=2, want=1"),
                         call("last", array(), array()))

    def test_rest(self):
        original = array(1, 2, 3)
        self.assertEqual(array(2, 3), call("rest", original))
        self.assertEqual(array(1, 2, 3), original)
        self.assertEqual(array(), call("rest", array(1)))
        self.assertIs(NULL, call("rest", array()))
        self.assertEqual(Error("argument to `rest` must be ARRAY, got INTEGER"), call("rest", Integer(1)))

    def test_push(self):
        original = array(1)
        pushed = call("push", original, Integer(2))
        self.assertEqual(array(1, 2), pushed)
        self.assertEqual(array(1), original)
        self.assertIsNot(original, pushed)

        self.assertEqual(array(1), call("push", array(), Integer(1)))
        self.assertEqual(Error("argument to `push` must be ARRAY, got INTEGER"), call("push", Integer(1), Integer(1)))
        self.assertEqual(Error("wrong number of arguments to `push`: got=1, want=2"), call("push", array()))

    def test_slide(self):
        cases = [
            ((1, 2), array(1, 2)),
            ((2, 4), array(2, 3, 4)),
            ((3, 3), array(3)),
            ((0, 2), array(1, 2)),
            ((4, 99), array(4, 5)),
            ((-5, 99), array(1, 2, 3, 4, 5)),
            ((4, 2), array()),
            ((6, 9), array()),
        ]
        for (start, end), expected in cases:
            self.assertEqual(expected, call("slide", array(1, 2, 3, 4, 5), Integer(start), Integer(end)), (start, end))

        self.assertEqual(Error("arguments to `slide` must be INTEGER, got STRING and INTEGER"),
                         call("slide", array(1), String("1"), Integer(1)))
        self.assertEqual(Error("argument to `slide` must be ARRAY, got STRING"),
                         call("slide", String("abc"), Integer(1), Integer(2)))
        self.assertEqual(Error("wrong number of arguments to `slide`: got=2, want=3"),
                         call("slide", array(1), Integer(1)))

    def test_range(self):
        self.assertEqual(array(1, 2, 3, 4, 5), call("range", Integer(1), Integer(5)))
        self.assertEqual(array(5), call("range", Integer(5), Integer(5)))
        self.assertEqual(array(-1, 0, 1), call("range", Integer(-1), Integer(1)))
        self.assertEqual(Array([String("a"), String("b"), String("c")]), call("range", String("abc")))
        self.assertEqual(array(), call("range", String("")))

        should_fail = [
            ((Integer(5), Integer(1)), "range start 5 is greater than end 1"),
            ((Integer(1),), "argument to `range` must be STRING, got INTEGER"),
            ((String("a"), Integer(1)), "arguments to `range` must be INTEGER, got STRING and INTEGER"),
            ((), "wrong number of arguments to `range`: got=0, want=1 or 2"),
            ((Integer(1), Integer(2), Integer(3)), "wrong number of arguments to `range`: got=3, want=1 or 2"),
        ]
        for args, expected in should_fail:
            self.assertEqual(Error(expected), call("range", *args), args)

    def test_caught_in_4k(self):
        env = Environment()
        self.assertIs(NULL, call("caughtIn4K", String("hello"), Integer(5), TRUE, array(1, 2), env=env))
        self.assertIs(NULL, call("caughtIn4K", env=env))
        self.assertEqual(["hello", "5", "noCap", "[1, 2]"], env.drain_logs())
        self.assertEqual([], env.drain_logs())

    def test_caught_in_4k_logs_to_root(self):
        root = Environment()
        inner = Environment.enclosed(Environment.enclosed(root))
        call("caughtIn4K", String("deep"), env=inner)
        self.assertEqual(["deep"], root.drain_logs())
        self.assertEqual([], inner.drain_logs())


if __name__ == '__main__':
    unittest.main()
