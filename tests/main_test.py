import contextlib
import io
import json
import os
import sys
import tempfile
import unittest
from unittest import mock

from nocap.main import DEFAULT_RECURSION_LIMIT, build_parser, main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.recursion_limit = sys.getrecursionlimit()
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        sys.setrecursionlimit(self.recursion_limit)
        self.tmp_dir.cleanup()

    def write(self, source, name="script.nocap"):
        path = os.path.join(self.tmp_dir.name, name)
        with open(path, "w", encoding="utf-8") as file:
            file.write(source)
        return path

    def run_main(self, argv):
        """Returns (exit code or None, captured stdout)."""
        out = io.StringIO()
        code = None
        with contextlib.redirect_stdout(out):
            try:
                main(argv)
            except SystemExit as exc:
                code = exc.code
        return code, out.getvalue()

    def test_build_parser(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.file)
        self.assertFalse(args.json)
        self.assertEqual(DEFAULT_RECURSION_LIMIT, args.recursion_limit)

        args = build_parser().parse_args(["prog.nocap", "--json", "--recursion-limit", "200"])
        self.assertEqual("prog.nocap", args.file)
        self.assertTrue(args.json)
        self.assertEqual(200, args.recursion_limit)

    def test_run_file(self):
        path = self.write('caughtIn4K("computing"); fr x = 5; fr y = 10; vibe (x < y) { yeet x + y; } nvm { yeet 0; }')
        code, output = self.run_main([path])
        self.assertIsNone(code)
        self.assertIn("computing", output)
        self.assertIn("15", output)
        self.assertLess(output.index("computing"), output.index("15"))

    def test_null_result_prints_nothing(self):
        code, output = self.run_main([self.write("fr x = 1;")])
        self.assertIsNone(code)
        self.assertEqual("", output)

    def test_recursion_limit(self):
        self.run_main([self.write("1"), "--recursion-limit", "1234"])
        self.assertEqual(1234, sys.getrecursionlimit())

    def test_missing_file(self):
        path = os.path.join(self.tmp_dir.name, "nope.nocap")
        code, output = self.run_main([path])
        self.assertEqual(1, code)
        self.assertIn("does not exist", output)

    def test_empty_file(self):
        code, output = self.run_main([self.write("")])
        self.assertEqual(1, code)
        self.assertIn("is empty", output)

    def test_parse_error(self):
        code, output = self.run_main([self.write('caughtIn4K("never"); fr = 1; fr 5;')])
        self.assertEqual(1, code)
        self.assertIn("expected next token to be IDENT, got = instead", output)
        self.assertNotIn("got INT instead", output)
        self.assertNotIn("never", output)

    def test_runtime_error(self):
        code, output = self.run_main([self.write('caughtIn4K("before"); 1 + noCap;')])
        self.assertEqual(1, code)
        self.assertIn("before", output)
        self.assertIn("error: ", output)
        self.assertIn("type mismatch: INTEGER + BOOLEAN", output)

    def test_json(self):
        code, output = self.run_main([self.write('caughtIn4K("log"); 2 * 21'), "--json"])
        self.assertIsNone(code)
        self.assertEqual({"result": "42", "errors": [], "logs": ["log"]}, json.loads(output))

        code, output = self.run_main([self.write("5 / 0"), "--json"])
        self.assertIsNone(code)
        self.assertEqual({"result": None, "errors": ["division by zero"], "logs": []}, json.loads(output))

    def test_deep_recursion(self):
        path = self.write("cook down(n) { yeet down(n + 1); } down(0);")
        code, output = self.run_main([path, "--recursion-limit", "500"])
        self.assertEqual(1, code)
        self.assertIn("something went very wrong", output)

    def test_shell_without_file(self):
        with mock.patch("nocap.main.Shell") as shell_cls:
            code, __ = self.run_main([])
        self.assertIsNone(code)
        shell_cls.return_value.cmdloop.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
