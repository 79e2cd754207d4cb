import datetime

from markupsafe import Markup

from flask_detailview.exceptions import ConfigurationError
from flask_detailview.formatter import Formatter

from .base import BaseDetailViewTestCase


class FormatterTestCase(BaseDetailViewTestCase):
    def setUp(self):
        super(FormatterTestCase, self).setUp()
        self.formatter = Formatter()

    def test_text_is_escaped(self):
        out = self.formatter.format("<b>bold</b>", "text")
        self.assertIsInstance(out, Markup)
        self.assertEqual(str(out), "&lt;b&gt;bold&lt;/b&gt;")

    def test_null_display(self):
        out = self.formatter.format(None, "text")
        self.assertIn('class="not-set"', out)
        self.assertIn("(not set)", out)

    def test_custom_null_display(self):
        self.assertEqual(str(Formatter(null_display="-").format(None, "integer")), "-")

    def test_ntext_keeps_line_breaks(self):
        self.assertEqual(str(self.formatter.format("a\n<b>", "ntext")), "a<br>\n&lt;b&gt;")

    def test_raw(self):
        self.assertEqual(str(self.formatter.format("<i>x</i>", "raw")), "<i>x</i>")

    def test_html_is_sanitized(self):
        out = self.formatter.format('<p onclick="x()">ok<script>alert(1)</script></p>', "html")
        self.assertIn("<p>ok", out)
        self.assertNotIn("<script>", out)
        self.assertNotIn("onclick", out)

    def test_email_and_url(self):
        self.assertEqual(
            str(self.formatter.format("a@b.io", "email")), '<a href="mailto:a@b.io">a@b.io</a>'
        )
        self.assertEqual(
            str(self.formatter.format("example.com", "url")),
            '<a href="http://example.com">example.com</a>',
        )

    def test_boolean(self):
        self.assertEqual(str(self.formatter.format(True, "boolean")), "Yes")
        self.assertEqual(str(self.formatter.format(0, "boolean")), "No")

    def test_numbers(self):
        self.assertEqual(str(self.formatter.format(1234567, "integer")), "1,234,567")
        self.assertEqual(str(self.formatter.format("1234.5", "decimal")), "1,234.50")
        self.assertEqual(str(self.formatter.format(3.14159, ["decimal", 3])), "3.142")
        self.assertEqual(str(self.formatter.format(0.25, "percent")), "25%")

    def test_dates(self):
        day = datetime.date(2024, 1, 5)
        self.assertEqual(str(self.formatter.format(day, "date")), "Jan 5, 2024")
        self.assertEqual(str(self.formatter.format("2024-01-05", "date")), "Jan 5, 2024")
        self.assertEqual(str(self.formatter.format(day, ["date", "yyyy/MM/dd"])), "2024/01/05")

    def test_time(self):
        self.assertEqual(
            str(self.formatter.format(datetime.time(14, 30), ["time", "HH:mm"])), "14:30"
        )

    def test_format_defaults_to_text(self):
        self.assertEqual(str(self.formatter.format("x", None)), "x")

    def test_unknown_format(self):
        with self.assertRaises(ConfigurationError):
            self.formatter.format("x", "currency-ish")
        with self.assertRaises(ConfigurationError):
            self.formatter.format("x", [])
