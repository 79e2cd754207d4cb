import unittest

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

from flask_detailview.exceptions import ConfigurationError
from flask_detailview.models import (
    get_attribute_errors,
    get_attribute_label,
    get_value,
    has_errors,
    humanize,
    model_attributes,
)

from .base import Post

Base = declarative_base()


class Book(Base):
    __tablename__ = "book"

    id = Column(Integer, primary_key=True)
    title = Column(String(50))
    isbn = Column(String(13))


class ModelsTestCase(unittest.TestCase):
    def test_humanize(self):
        self.assertEqual(humanize("first_name"), "First Name")
        self.assertEqual(humanize("createdAt"), "Created At")
        self.assertEqual(humanize("first_name", ucwords=False), "First name")

    def test_get_value(self):
        self.assertEqual(get_value({"a": 1}, "a"), 1)
        self.assertEqual(get_value(Post(title="T"), "title"), "T")
        self.assertIsNone(get_value(Post(), "missing"))
        self.assertIsNone(get_value(None, "title"))

    def test_labels(self):
        self.assertEqual(get_attribute_label(Post(), "title"), "Post Title")
        self.assertEqual(get_attribute_label({}, "created_at"), "Created At")

    def test_sqlalchemy_columns(self):
        self.assertEqual(model_attributes(Book(title="Dune")), ["id", "isbn", "title"])

    def test_object_attributes_skip_private(self):
        class Record(object):
            def __init__(self):
                self.name = "x"
                self._secret = "y"

        self.assertEqual(model_attributes(Record()), ["name"])

    def test_object_attributes_skip_errors(self):
        post = Post(errors={"title": ["Title is required."]})
        self.assertEqual(
            model_attributes(post), ["body", "id", "published", "status", "tags", "title"]
        )

    def test_scalar_model_rejected(self):
        for model in (None, "text", 3, [1, 2]):
            with self.assertRaises(ConfigurationError):
                model_attributes(model)

    def test_errors(self):
        post = Post(errors={"title": ["Required."], "body": "Too short."})
        self.assertTrue(has_errors(post))
        self.assertEqual(get_attribute_errors(post, "body"), ["Too short."])
        self.assertEqual(get_attribute_errors(post, "status"), [])
        self.assertFalse(has_errors(Post()))
        self.assertFalse(has_errors({"errors": {"title": ["x"]}}))
