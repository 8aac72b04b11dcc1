import unittest

from odsync.utils import parse_integer, update_dict_recursively


class TestUpdateDictRecursively(unittest.TestCase):
    def test_nested_values_get_merged(self):
        dct = {'Document': {'PRETTY_PRINT': False, 'AUTOSAVE': False}, 'Project': {}}

        update_dict_recursively(dct, {'Document': {'AUTOSAVE': True}})

        self.assertEqual(dct, {'Document': {'PRETTY_PRINT': False, 'AUTOSAVE': True}, 'Project': {}})

    def test_missing_intermediate_dicts_get_created(self):
        dct = {}

        update_dict_recursively(dct, {'a': {'b': {'c': 1}}})

        self.assertEqual(dct, {'a': {'b': {'c': 1}}})

    def test_returns_input_dict(self):
        dct = {}

        self.assertIs(update_dict_recursively(dct, {'a': 1}), dct)


class TestParseInteger(unittest.TestCase):
    def test_decimal(self):
        self.assertEqual(parse_integer('42'), 42)
        self.assertEqual(parse_integer('-3'), -3)
        self.assertEqual(parse_integer('010'), 10)
        self.assertEqual(parse_integer(' 7 '), 7)

    def test_hexadecimal(self):
        self.assertEqual(parse_integer('0x0A'), 10)
        self.assertEqual(parse_integer('0XFF'), 255)
        self.assertEqual(parse_integer('-0x10'), -16)

    def test_invalid_literals(self):
        for literal in ['', '-', '0x', 'ten', '1.5', '0xZZ', 'FF']:
            with self.assertRaises(ValueError):
                parse_integer(literal)


if __name__ == '__main__':
    unittest.main()
