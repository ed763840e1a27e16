import unittest

from run_one.core.errors import ArgumentError, InvalidWaitValue
from run_one.core.parser import find_env, parse_args, parse_wait


class TestParseArgs(unittest.TestCase):
    def setUp(self) -> None:
        self.reported = []

    def _parse(self, args, vars=()):
        return parse_args(args, vars, report=self.reported.append)

    def test_program_and_arguments_in_order(self) -> None:
        spec = self._parse(["run-one", "cargo", "test", "--", "--nocapture"])
        self.assertEqual(spec.program, "cargo")
        self.assertEqual(spec.arguments, ("test", "--", "--nocapture"))
        self.assertIsNone(spec.wait_seconds)
        self.assertEqual(self.reported, [])

    def test_arguments_are_opaque_tokens(self) -> None:
        spec = self._parse(["run-one", "sh", "-c", "echo $HOME && false", "'quoted arg'", "*"])
        self.assertEqual(spec.program, "sh")
        self.assertEqual(spec.arguments, ("-c", "echo $HOME && false", "'quoted arg'", "*"))

    def test_program_without_arguments(self) -> None:
        spec = self._parse(["run-one", "true"])
        self.assertEqual(spec.program, "true")
        self.assertEqual(spec.arguments, ())
        self.assertEqual(spec.command(), ["true"])

    def test_empty_args_is_missing_program_name(self) -> None:
        with self.assertRaises(ArgumentError) as ctx:
            self._parse([])
        self.assertEqual(ctx.exception.code, "args.missing_program_name")

    def test_only_self_name_is_missing_command(self) -> None:
        with self.assertRaises(ArgumentError) as ctx:
            self._parse(["run-one"])
        self.assertEqual(ctx.exception.code, "args.missing_command")
        self.assertIn("command", str(ctx.exception))

    def test_empty_program_is_missing_command(self) -> None:
        with self.assertRaises(ArgumentError) as ctx:
            self._parse(["run-one", ""])
        self.assertEqual(ctx.exception.code, "args.missing_command")

    def test_wait_from_env(self) -> None:
        spec = self._parse(["run-one", "true"], [("PATH", "/bin"), ("RUN_ONE_WAIT", "5")])
        self.assertEqual(spec.wait_seconds, 5)
        self.assertEqual(self.reported, [])

    def test_wait_zero_is_present(self) -> None:
        spec = self._parse(["run-one", "true"], [("RUN_ONE_WAIT", "0")])
        self.assertEqual(spec.wait_seconds, 0)

    def test_non_numeric_wait_is_reported_and_ignored(self) -> None:
        spec = self._parse(["run-one", "true", "x"], [("RUN_ONE_WAIT", "soon")])
        self.assertEqual(spec.program, "true")
        self.assertEqual(spec.arguments, ("x",))
        self.assertIsNone(spec.wait_seconds)
        self.assertEqual(len(self.reported), 1)
        self.assertIsInstance(self.reported[0], InvalidWaitValue)
        self.assertEqual(self.reported[0].code, "env.invalid_wait")
        self.assertIn("RUN_ONE_WAIT", str(self.reported[0]))

    def test_negative_wait_is_ignored(self) -> None:
        spec = self._parse(["run-one", "true"], [("RUN_ONE_WAIT", "-3")])
        self.assertIsNone(spec.wait_seconds)
        self.assertEqual(len(self.reported), 1)

    def test_wait_with_trailing_newline_is_ignored(self) -> None:
        spec = self._parse(["run-one", "true"], [("RUN_ONE_WAIT", "5\n")])
        self.assertIsNone(spec.wait_seconds)
        self.assertEqual(len(self.reported), 1)
        self.assertEqual(self.reported[0].code, "env.invalid_wait")

    def test_first_wait_wins(self) -> None:
        spec = self._parse(["run-one", "true"], [("RUN_ONE_WAIT", "2"), ("RUN_ONE_WAIT", "nope")])
        self.assertEqual(spec.wait_seconds, 2)
        self.assertEqual(self.reported, [])

    def test_key_match_is_exact(self) -> None:
        spec = self._parse(["run-one", "true"], [("run_one_wait", "4"), ("RUN_ONE_WAIT_X", "4")])
        self.assertIsNone(spec.wait_seconds)

    def test_accepts_any_iterable_of_pairs(self) -> None:
        env = {"RUN_ONE_WAIT": "7"}
        spec = parse_args(iter(["run-one", "true"]), env.items(), report=self.reported.append)
        self.assertEqual(spec.wait_seconds, 7)


class TestWaitParsing(unittest.TestCase):
    def test_parse_wait(self) -> None:
        self.assertEqual(parse_wait("12"), 12)
        self.assertEqual(parse_wait("+3"), 3)
        for raw in ("", " 1", "5\n", "1.5", "1_000", "-1", "ten"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidWaitValue):
                    parse_wait(raw)

    def test_find_env(self) -> None:
        pairs = [("A", "1"), ("B", "2"), ("A", "3")]
        self.assertEqual(find_env(pairs, "A"), "1")
        self.assertEqual(find_env(pairs, "B"), "2")
        self.assertIsNone(find_env(pairs, "C"))


if __name__ == "__main__":
    unittest.main()
