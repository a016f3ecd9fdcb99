import pickle
import unittest

from errors import (
    MissingDescriptionError,
    MissingNoteCountError,
    ParseFloatError,
    ParseIntError,
    ParseScaleError,
    ScaleIOError,
    ScaleSyntaxError,
    WrongPitchCountError,
)
from scale import parse_scale


class ErrorPickleTests(unittest.TestCase):
    def roundtrip(self, exc):
        return pickle.loads(pickle.dumps(exc))

    def test_missing_line_errors(self) -> None:
        for exc in (MissingDescriptionError(), MissingNoteCountError()):
            with self.subTest(cls=type(exc).__name__):
                again = self.roundtrip(exc)
                self.assertIs(type(again), type(exc))
                self.assertEqual(str(again), str(exc))

    def test_wrong_pitch_count(self) -> None:
        again = self.roundtrip(WrongPitchCountError(2, 3))
        self.assertEqual((again.actual, again.expected), (2, 3))
        self.assertEqual(str(again), "wrong pitch count: declared 3, found 2")

    def test_pitch_errors_keep_token_and_line(self) -> None:
        with self.assertRaises(ParseIntError) as cm:
            parse_scale("desc\n1\nfoo\n")
        again = self.roundtrip(cm.exception)
        self.assertIsInstance(again, ParseIntError)
        self.assertEqual((again.token, again.lineno), ("foo", 3))
        self.assertEqual(str(again), str(cm.exception))

        again = self.roundtrip(ParseFloatError("bad", token="1.x"))
        self.assertEqual(again.token, "1.x")
        self.assertIsNone(again.lineno)

    def test_generic_scale_error(self) -> None:
        again = self.roundtrip(ParseScaleError("oops", lineno=7))
        self.assertEqual(str(again), "line 7: oops")

    def test_file_errors(self) -> None:
        for cls in (ScaleIOError, ScaleSyntaxError):
            with self.subTest(cls=cls.__name__):
                again = self.roundtrip(cls("a.scl", "broken"))
                self.assertIs(type(again), cls)
                self.assertEqual((again.path, again.message), ("a.scl", "broken"))
                self.assertEqual(str(again), "a.scl: broken")


if __name__ == "__main__":
    unittest.main()
