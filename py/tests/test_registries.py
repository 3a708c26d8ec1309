# RUN: python -m unittest discover -s py/tests
# RUN-SOME: python -m unittest discover -s py/tests -k typecast

import unittest
import numbers
import re
from types import MappingProxyType
from datetime import date, datetime, timezone

try:
    from .runner import makeRunner
except ImportError:
    from runner import makeRunner

from voxgig_schema import MESSAGES, TYPECASTERS, VALIDATORS


runner = makeRunner('spec/schema.json')
runparts = runner('validators')

spec = runparts["spec"]
runsetflags = runparts["runsetflags"]


class TestValidators(unittest.TestCase):

    def test_required(self):
        runsetflags(spec["required"], {"null": False}, VALIDATORS["required"])

    def test_type(self):
        runsetflags(spec["type"], {"null": False}, VALIDATORS["type"])

    def test_length(self):
        runsetflags(spec["length"], {"null": False}, VALIDATORS["length"])

    def test_size(self):
        runsetflags(spec["size"], {"null": False}, VALIDATORS["size"])

    def test_enum(self):
        runsetflags(spec["enum"], {"null": False}, VALIDATORS["enum"])

    def test_match(self):
        runsetflags(spec["match"], {"null": False}, VALIDATORS["match"])

    def test_type_class(self):
        vtype = VALIDATORS["type"]
        self.assertTrue(vtype("a", {}, str, "p"))
        self.assertTrue(vtype(None, {}, str, "p"))
        self.assertFalse(vtype(1, {}, str, "p"))
        self.assertTrue(vtype(1, {}, int, "p"))
        self.assertFalse(vtype(True, {}, int, "p"))
        self.assertTrue(vtype(True, {}, bool, "p"))
        self.assertTrue(vtype(1.5, {}, numbers.Number, "p"))
        self.assertFalse(vtype(False, {}, numbers.Number, "p"))
        self.assertTrue(vtype(date(2020, 1, 1), {}, date, "p"))
        self.assertTrue(vtype(datetime(2020, 1, 1), {}, datetime, "p"))
        self.assertTrue(vtype({}, {}, dict, "p"))
        self.assertFalse(vtype([], {}, dict, "p"))

    def test_type_class_exact(self):
        class Name(str):
            pass

        vtype = VALIDATORS["type"]
        self.assertFalse(vtype(datetime(2020, 1, 1), {}, date, "p"))
        self.assertFalse(vtype(Name("x"), {}, str, "p"))
        self.assertTrue(vtype(Name("x"), {}, Name, "p"))
        self.assertTrue(vtype(Name("x"), {}, "string", "p"))
        self.assertTrue(vtype(datetime(2020, 1, 1), {}, "date", "p"))

    def test_match_compiled(self):
        self.assertTrue(VALIDATORS["match"]("ABC", {}, re.compile("^[a-z]+$", re.I), "p"))
        self.assertFalse(VALIDATORS["match"]("AB1", {}, re.compile("^[a-z]+$", re.I), "p"))


class TestMessages(unittest.TestCase):

    def test_messages(self):
        self.assertEqual(MESSAGES["required"]("a"), "a is required.")
        self.assertEqual(MESSAGES["type"]("a", {}, str), "a must be of type str.")
        self.assertEqual(MESSAGES["type"]("a", {}, "string"), "a must be of type string.")
        self.assertEqual(MESSAGES["match"]("a", {}, re.compile("^x")), "a must match /^x/.")
        self.assertEqual(MESSAGES["illegal"]("a"), "a is not allowed.")
        self.assertEqual(MESSAGES["default"]("a", {}, 1, 2), "Validation failed for a.")

    def test_length_messages(self):
        length = MESSAGES["length"]
        self.assertEqual(length("a", {}, 3), "a must have a length of 3.")
        self.assertEqual(length("a", {}, {"min": 1, "max": 3}), "a must have a length between 1 and 3.")
        self.assertEqual(length("a", {}, {"max": 3}), "a must have a maximum length of 3.")
        self.assertEqual(length("a", {}, {"min": 1}), "a must have a minimum length of 1.")

    def test_size_messages(self):
        size = MESSAGES["size"]
        self.assertEqual(size("a", {}, 3), "a must have a size of 3.")
        self.assertEqual(size("a", {}, {"min": 0, "max": 3}), "a must be between 0 and 3.")
        self.assertEqual(size("a", {}, {"max": 3}), "a must be less than 3.")
        self.assertEqual(size("a", {}, {"min": 0}), "a must be greater than 0.")

    def test_enum_messages(self):
        enum = MESSAGES["enum"]
        self.assertEqual(enum("a", {}, ["x", "y", "z"]), "a must be either x, y or z.")
        self.assertEqual(enum("a", {}, ["x", "y"]), "a must be either x or y.")
        self.assertEqual(enum("a", {}, ["x"]), "a must be x.")


class TestTypecasters(unittest.TestCase):

    def test_string(self):
        cast = TYPECASTERS["string"]
        self.assertEqual(cast(1), "1")
        self.assertEqual(cast(True), "true")
        self.assertEqual(cast("a"), "a")
        self.assertIs(TYPECASTERS["str"], cast)

    def test_number(self):
        cast = TYPECASTERS["number"]
        self.assertEqual(cast("42"), 42)
        self.assertEqual(cast(" -3 "), -3)
        self.assertEqual(cast("2.5"), 2.5)
        self.assertEqual(cast("x"), "x")
        self.assertEqual(cast(7), 7)
        self.assertEqual(TYPECASTERS["int"]("3.0"), 3)
        self.assertEqual(TYPECASTERS["int"]("3.5"), "3.5")
        self.assertEqual(TYPECASTERS["float"]("3"), 3.0)

    def test_boolean(self):
        cast = TYPECASTERS["boolean"]
        self.assertIs(cast("false"), False)
        self.assertIs(cast("0"), False)
        self.assertIs(cast(""), False)
        self.assertIs(cast("yes"), True)
        self.assertIs(cast(0), False)
        self.assertIs(cast(True), True)

    def test_array(self):
        cast = TYPECASTERS["array"]
        self.assertEqual(cast("a,b"), ["a", "b"])
        self.assertEqual(cast((1, 2)), [1, 2])
        self.assertEqual(cast(1), [1])
        arr = [1]
        self.assertIs(cast(arr), arr)

    def test_object(self):
        cast = TYPECASTERS["object"]
        obj = {"a": 1}
        self.assertIs(cast(obj), obj)
        self.assertEqual(cast(MappingProxyType({"a": 1})), {"a": 1})
        self.assertEqual(cast(1), 1)
        self.assertEqual(cast(""), "")
        self.assertEqual(cast([["a", 1]]), [["a", 1]])

    def test_date(self):
        cast = TYPECASTERS["date"]
        self.assertEqual(cast("2020-01-02T03:04:05"), date(2020, 1, 2))
        self.assertEqual(cast("2020-01-02"), date(2020, 1, 2))
        self.assertEqual(cast(0), date(1970, 1, 1))
        self.assertIs(type(cast(datetime(2020, 1, 2, 3))), date)
        self.assertEqual(cast("nope"), "nope")
        self.assertEqual(cast(10**20), 10**20)
        d = date(2020, 1, 1)
        self.assertIs(cast(d), d)

    def test_datetime(self):
        cast = TYPECASTERS["datetime"]
        self.assertEqual(cast("2020-01-02T03:04:05"), datetime(2020, 1, 2, 3, 4, 5))
        self.assertEqual(cast(0), datetime(1970, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(cast(date(2020, 1, 1)), datetime(2020, 1, 1))
        self.assertEqual(cast(10**20), 10**20)
        self.assertEqual(cast(-10**20), -10**20)
        dt = datetime(2020, 1, 1)
        self.assertIs(cast(dt), dt)


if __name__ == "__main__":
    unittest.main()
