from datetime import datetime, date, timezone
from unittest import TestCase

from potion_client import fields
from potion_client.exceptions import InvalidFieldValue


class FieldsTestCase(TestCase):
    def test_raw_schema(self):
        foo = fields.Raw({"type": "string"}, nullable=False)

        self.assertEqual({"type": "string"}, foo.response)
        self.assertEqual({"type": "string"}, foo.request)

        # NOTE format is (response, request)
        foo_rw = fields.Raw((
            {"type": "string"},
            {"type": "number"}
        ), nullable=False)
        self.assertEqual({"type": "string"}, foo_rw.response)
        self.assertEqual({"type": "number"}, foo_rw.request)

        type_, foo_callable = None, fields.Raw(lambda: {"type": type_}, nullable=False)
        type_ = "boolean"
        self.assertEqual({"type": "boolean"}, foo_callable.response)

    def test_raw_nullable(self):
        foo_type_string = fields.Raw({"type": "string"})
        self.assertEqual({"type": ["string", "null"]}, foo_type_string.response)

        foo_type_array = fields.Raw({"type": ["string", "number"]})
        self.assertEqual({"type": ["string", "number", "null"]}, foo_type_array.response)

        foo_null = fields.Raw({"type": ["string", "null"]}, nullable=False)
        self.assertEqual({"type": ["string", "null"]}, foo_null.response)
        self.assertTrue(foo_null.nullable)

    def test_raw_default(self):
        foo = fields.Raw({"type": "string"}, default="Foo", nullable=False)
        self.assertEqual({"default": "Foo", "type": "string"}, foo.response)

    def test_raw_title(self):
        foofy = fields.Raw({"type": "string"}, title="How to call your foo", nullable=False)
        self.assertEqual({"title": "How to call your foo", "type": "string"}, foofy.response)

    def test_raw_description(self):
        foo = fields.Raw({"type": "string"}, description="Foo bar", nullable=False)
        self.assertEqual({"description": "Foo bar", "type": "string"}, foo.response)

    def test_raw_format(self):
        self.assertEqual(12, fields.Raw({"type": "number"}).format(12))

    def test_raw_convert(self):
        self.assertEqual(12, fields.Raw({"type": "number"}).convert(12))
        self.assertEqual(None, fields.Raw({"type": "number"}).convert(None))

        with self.assertRaises(InvalidFieldValue):
            fields.Raw({"type": "number"}, nullable=False).convert(None)

    def test_any(self):
        foo = fields.Any()
        self.assertEqual({"type": ["null", "string", "number", "boolean", "object", "array"]}, foo.response)

        for value in ("foo", 1, 1.5, True, None, {"a": 1}, [1, 2]):
            self.assertEqual(value, foo.convert(value))

    def test_string_schema(self):
        self.assertEqual({
            "type": ["string", "null"],
            "minLength": 1,
            "maxLength": 5,
            "enum": ["foo", "bar", None]
        }, fields.String(min_length=1, max_length=5, enum=("foo", "bar")).response)

    def test_string_convert(self):
        self.assertEqual("foo", fields.String().convert("foo"))

        with self.assertRaises(InvalidFieldValue) as cx:
            fields.String().convert(5)

        self.assertEqual(1, len(cx.exception.errors))
        self.assertEqual({
            "error": "InvalidFieldValue",
            "message": str(cx.exception),
            "errors": [{"validationOf": {"type": ["string", "null"]}, "path": ()}]
        }, cx.exception.as_dict())

        with self.assertRaises(InvalidFieldValue):
            fields.String(enum=["paid", "pending"]).convert("failed")

    def test_integer_convert(self):
        self.assertEqual(3, fields.Integer(minimum=1).convert(3))

        with self.assertRaises(InvalidFieldValue):
            fields.Integer(minimum=1).convert(0)

        with self.assertRaises(InvalidFieldValue):
            fields.Integer().convert("3")

    def test_number_convert(self):
        self.assertEqual(1.5, fields.Number(maximum=2).convert(1.5))

        with self.assertRaises(InvalidFieldValue):
            fields.Number(maximum=2).convert(2.5)

    def test_boolean_convert(self):
        self.assertEqual(True, fields.Boolean().convert(True))

        with self.assertRaises(InvalidFieldValue):
            fields.Boolean().convert("true")

    def test_date_time_convert(self):
        foo = fields.DateTime()

        self.assertEqual({"type": ["string", "null"], "format": "date-time"}, foo.response)
        self.assertEqual(datetime(2013, 6, 3, 10, 15, tzinfo=timezone.utc), foo.convert("2013-06-03T10:15:00Z"))
        self.assertEqual(date(2013, 6, 3), foo.convert("2013-06-03"))
        self.assertEqual(None, foo.convert(None))

    def test_date_time_convert_delimiters(self):
        foo = fields.DateTime()
        expected = datetime(2013, 6, 3, 10, 15, tzinfo=timezone.utc)

        self.assertEqual(expected, foo.convert("2013-06-03t10:15:00Z"))
        self.assertEqual(expected, foo.convert("2013-06-03 10:15:00Z"))
        self.assertEqual(datetime(2013, 6, 3, 10, 15), foo.convert("2013-06-03 10:15:00"))

    def test_date_time_convert_date_objects(self):
        foo = fields.DateTime()
        now = datetime(2013, 6, 3, 10, 15, tzinfo=timezone.utc)

        self.assertIs(now, foo.convert(now))
        self.assertEqual(date(2013, 1, 1), foo.convert(date(2013, 1, 1)))

    def test_date_time_convert_invalid(self):
        foo = fields.DateTime()

        for value in (12, ["2013-06-03"], {"$date": 1370254500000}, "not a date", "2013-13-45"):
            with self.assertRaises(InvalidFieldValue):
                foo.convert(value)

    def test_date_time_format(self):
        foo = fields.DateTime()

        self.assertEqual("2013-06-03", foo.format(date(2013, 6, 3)))
        self.assertEqual("2013-06-03T10:15:00+00:00", foo.format(datetime(2013, 6, 3, 10, 15, tzinfo=timezone.utc)))
        self.assertEqual(None, foo.format(None))

    def test_reference_id_schema(self):
        self.assertEqual({"type": ["string", "integer", "null"]}, fields.ReferenceId().response)
        self.assertEqual("AB12", fields.ReferenceId().convert("AB12"))

        with self.assertRaises(InvalidFieldValue):
            fields.ReferenceId().convert({"$ref": "/merchant/1"})
