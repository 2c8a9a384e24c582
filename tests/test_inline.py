import unittest
from decimal import Decimal

from validkit.utils.inline import dump_inline, parse_inline


class TestDumpInline(unittest.TestCase):

    def test_mapping(self):
        self.assertEqual(dump_inline({"max_length": 10, "trim": True}), "{max_length: 10, trim: true}")

    def test_key_order_is_preserved(self):
        self.assertEqual(dump_inline({"z": 1, "a": 2}), "{z: 1, a: 2}")

    def test_nested_values(self):
        self.assertEqual(dump_inline({"choices": ["a", "b"], "empty": None}), "{choices: [a, b], empty: null}")

    def test_empty_mapping(self):
        self.assertEqual(dump_inline({}), "{}")

    def test_scalar(self):
        self.assertEqual(dump_inline(5), "5")

    def test_long_values_stay_on_one_line(self):
        message = "word " * 40
        self.assertNotIn("\n", dump_inline({"invalid": message.strip()}))

    def test_decimals_are_plain_numbers(self):
        self.assertEqual(dump_inline({"max_length": Decimal("1.5"), "min_length": Decimal("10")}),
                         "{max_length: 1.5, min_length: 10}")

    def test_sets_are_sorted_sequences(self):
        self.assertEqual(dump_inline({"choices": {"b", "a"}}), "{choices: [a, b]}")

    def test_unknown_objects_use_their_text(self):
        class Colour:
            def __str__(self):
                return "red"

        self.assertEqual(dump_inline({"colour": Colour()}), "{colour: red}")

    def test_special_characters_are_quoted(self):
        dumped = dump_inline({"invalid": "a: b, c"})
        self.assertEqual(parse_inline(dumped), {"invalid": "a: b, c"})


class TestParseInline(unittest.TestCase):

    def test_scalars(self):
        self.assertIs(parse_inline("true"), True)
        self.assertEqual(parse_inline("10"), 10)
        self.assertEqual(parse_inline("plain text"), "plain text")

    def test_collections(self):
        self.assertEqual(parse_inline("[a, b]"), ["a", "b"])
        self.assertEqual(parse_inline("{min: 1}"), {"min": 1})

    def test_invalid_yaml_is_returned_unchanged(self):
        self.assertEqual(parse_inline("{a"), "{a")


if __name__ == '__main__':
    unittest.main()
