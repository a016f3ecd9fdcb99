import math
import unittest
from fractions import Fraction

from errors import ParseFloatError, ParseIntError, ParsePitchError, ParseScaleError
from pitch import Cents, Ratio, format_pitch, parse_pitch, to_pitch


class ParsePitchTests(unittest.TestCase):
    def test_ratio(self) -> None:
        p = parse_pitch("3/2")
        self.assertEqual(p, Ratio(3, 2))
        self.assertAlmostEqual(p.to_cents(), 701.95500, places=5)

    def test_bare_integer_is_ratio_over_one(self) -> None:
        p = parse_pitch("2")
        self.assertEqual(p, Ratio(2, 1))
        self.assertEqual(p.denominator, 1)

    def test_cents(self) -> None:
        self.assertEqual(parse_pitch("700.0"), Cents(700.0))
        self.assertEqual(parse_pitch("1200."), Cents(1200.0))
        self.assertEqual(parse_pitch("-50.5"), Cents(-50.5))

    def test_cents_unit_suffix_is_ignored(self) -> None:
        self.assertEqual(parse_pitch("386.314cents"), Cents(386.314))
        self.assertEqual(parse_pitch("386.314 cents"), Cents(386.314))

    def test_spaces_are_insignificant(self) -> None:
        for text in ("1 00.0", " 100.0 ", "10 0.0 cen ts", "100 . 0"):
            with self.subTest(text=text):
                self.assertEqual(parse_pitch(text), parse_pitch(text.replace(" ", "")))
        self.assertEqual(parse_pitch(" 3 / 2 "), Ratio(3, 2))

    def test_decimal_point_takes_precedence_over_slash(self) -> None:
        with self.assertRaises(ParseFloatError):
            parse_pitch("3.0/2")

    def test_malformed_cents(self) -> None:
        for text in ("abc.0", ".", "1.2.3", "1_000.0", "100.0c"):
            with self.subTest(text=text):
                with self.assertRaises(ParseFloatError):
                    parse_pitch(text)

    def test_malformed_integers(self) -> None:
        for text in ("", "x", "3/", "/2", "3/x", "-3/2", "3/-2", "3/2/1", "1_0", "3\t/2"):
            with self.subTest(text=text):
                with self.assertRaises(ParseIntError):
                    parse_pitch(text)

    def test_unsigned_128_bit_range(self) -> None:
        top = 2 ** 128 - 1
        self.assertEqual(parse_pitch(f"{top}/1").numerator, top)
        with self.assertRaises(ParseIntError):
            parse_pitch(f"{top + 1}/1")
        with self.assertRaises(ParseIntError):
            parse_pitch(str(top + 1))

    def test_zero_denominator(self) -> None:
        with self.assertRaises(ParseIntError):
            parse_pitch("3/0")

    def test_error_hierarchy(self) -> None:
        with self.assertRaises(ParsePitchError) as cm:
            parse_pitch("nope")
        self.assertIsInstance(cm.exception, ParseScaleError)
        self.assertIsInstance(cm.exception, ValueError)
        self.assertEqual(cm.exception.token, "nope")


class RatioTests(unittest.TestCase):
    def test_equality_uses_reduced_form(self) -> None:
        self.assertEqual(Ratio(4, 2), Ratio(2, 1))
        self.assertEqual(hash(Ratio(4, 2)), hash(Ratio(2, 1)))
        self.assertNotEqual(Ratio(3, 2), Ratio(2, 3))
        self.assertNotEqual(Ratio(2, 1), Cents(1200.0))

    def test_format_keeps_stored_terms(self) -> None:
        self.assertEqual(format_pitch(Ratio(4, 2)), "4/2")
        self.assertEqual(str(Ratio(2, 1)), "2/1")

    def test_zero_denominator_rejected(self) -> None:
        with self.assertRaises(ZeroDivisionError):
            Ratio(1, 0)

    def test_terms_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            Ratio(-1, 2)
        with self.assertRaises(ValueError):
            Ratio(1, 2 ** 128)
        with self.assertRaises(TypeError):
            Ratio(1.5, 2)

    def test_conversions(self) -> None:
        self.assertAlmostEqual(Ratio(2, 1).to_cents(), 1200.0)
        self.assertAlmostEqual(Ratio(2, 1).to_note_offset(), 12.0)
        self.assertAlmostEqual(Ratio(5, 4).to_cents(), 1200 * math.log2(5 / 4))
        self.assertAlmostEqual(Ratio(3, 2).to_frequency(200.0), 300.0)

    def test_zero_numerator_is_minus_infinity(self) -> None:
        self.assertEqual(Ratio(0, 1).to_cents(), -math.inf)
        self.assertEqual(Ratio(0, 7).to_note_offset(), -math.inf)

    def test_fraction_round_trip(self) -> None:
        r = Ratio(6, 4)
        self.assertEqual(r.as_fraction(), Fraction(3, 2))
        self.assertEqual(Ratio.from_fraction(Fraction(6, 4)), r)
        with self.assertRaises(ValueError):
            Ratio.from_fraction(Fraction(-1, 2))


class CentsTests(unittest.TestCase):
    def test_format_has_five_decimals(self) -> None:
        self.assertEqual(format_pitch(Cents(700.0)), "700.00000")
        self.assertEqual(str(Cents(701.955)), "701.95500")
        self.assertEqual(str(Cents(-3.123456)), "-3.12346")

    def test_conversions(self) -> None:
        self.assertEqual(Cents(100.0).to_cents(), 100.0)
        self.assertEqual(Cents(100.0).to_note_offset(), 1.0)
        self.assertAlmostEqual(Cents(1200.0).to_frequency(440.0), 880.0)

    def test_formatted_value_parses_back(self) -> None:
        for value in (0.0, 701.955, 1200.0, -25.5):
            with self.subTest(value=value):
                self.assertEqual(parse_pitch(format_pitch(Cents(value))), Cents(value))


class ToPitchTests(unittest.TestCase):
    def test_literals(self) -> None:
        self.assertEqual(to_pitch(2), Ratio(2, 1))
        self.assertEqual(to_pitch(Fraction(3, 2)), Ratio(3, 2))
        self.assertEqual(to_pitch(701.955), Cents(701.955))
        self.assertEqual(to_pitch("5/4"), Ratio(5, 4))
        self.assertEqual(to_pitch(Cents(1.0)), Cents(1.0))

    def test_rejects_other_types(self) -> None:
        with self.assertRaises(TypeError):
            to_pitch(True)
        with self.assertRaises(TypeError):
            to_pitch(None)


if __name__ == "__main__":
    unittest.main()
