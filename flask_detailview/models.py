"""
Accessors for the record shown by a detail view.

A model may be a mapping, a plain object or an SQLAlchemy mapped instance.
Labels follow the Flask-AppBuilder ``label_columns`` convention and
validation errors follow the WTForms ``errors`` convention (a mapping of
field name to a list of messages).
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s_\-]+")


def humanize(name: str, ucwords: bool = True) -> str:
    """
    Turns an attribute name into a label, ``first_name`` and ``firstName``
    both give ``First Name``.
    """
    words = _SEPARATORS.sub(" ", _CAMEL_BOUNDARY.sub(" ", name)).strip()
    if not words:
        return ""
    if ucwords:
        return " ".join(w[:1].upper() + w[1:] for w in words.split(" "))
    return words[:1].upper() + words[1:]


def is_model(obj: Any) -> bool:
    return obj is not None and (isinstance(obj, Mapping) or hasattr(obj, "__dict__"))


def get_value(model: Any, name: str, default: Any = None) -> Any:
    if model is None:
        return default
    if isinstance(model, Mapping):
        return model.get(name, default)
    return getattr(model, name, default)


def get_attribute_label(model: Any, name: str) -> str:
    getter = getattr(model, "get_attribute_label", None)
    if callable(getter):
        return getter(name)
    label_columns = getattr(model, "label_columns", None)
    if isinstance(label_columns, Mapping) and name in label_columns:
        return label_columns[name]
    return humanize(name)


def _mapped_columns(model: Any):
    try:
        state = sa_inspect(model)
    except NoInspectionAvailable:
        return None
    mapper = getattr(state, "mapper", state)
    attrs = getattr(mapper, "column_attrs", None)
    if attrs is None:
        return None
    return [attr.key for attr in attrs]


def model_attributes(model: Any) -> List[str]:
    """
    Lists the attribute names of a model, sorted.

    Raises :class:`ConfigurationError` when the model is neither a mapping
    nor an object.
    """
    if isinstance(model, Mapping):
        names = list(model.keys())
    elif model is None or isinstance(model, (str, bytes, int, float, bool, list, tuple)):
        raise ConfigurationError('The "model" property must be either a mapping or an object.')
    elif callable(getattr(model, "attributes", None)):
        names = list(model.attributes())
    else:
        names = _mapped_columns(model)
        if names is None:
            # the errors dict is read by get_errors, it is not a field
            names = [k for k in vars(model) if not k.startswith("_") and k != "errors"]
    return sorted(names)


def get_errors(model: Any) -> Dict[str, List[str]]:
    if model is None or isinstance(model, Mapping):
        return {}
    errors = getattr(model, "errors", None)
    if isinstance(errors, Mapping):
        return errors
    return {}


def get_attribute_errors(model: Any, name: str) -> List[str]:
    errors = get_errors(model).get(name) or []
    if isinstance(errors, str):
        return [errors]
    return list(errors)


def has_errors(model: Any) -> bool:
    return any(get_errors(model).values())
