"""
Value formatter used for the view mode display of each attribute.

``Formatter.format(value, kind)`` turns a raw value into markup according to
a format key such as ``"text"``, ``"html"`` or ``"date"``. A kind may also be
given as a list, the first item is the key and the rest are passed to the
formatting method, for example ``["decimal", 3]`` or ``["date", "yyyy-MM-dd"]``.
"""

import datetime
import logging
from typing import Any, Optional, Sequence, Union

import bleach
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from dateutil import parser as date_parser
from flask_babel import lazy_gettext
from markupsafe import Markup, escape

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)


class Formatter(object):
    """
    Formats attribute values for display.

    :param locale: Babel locale used for numbers and dates
    :param null_display: Markup shown for ``None`` values
    :param boolean_format: Labels for ``False`` and ``True``
    :param date_format: Default Babel date pattern or style
    :param datetime_format: Default Babel datetime pattern or style
    :param time_format: Default Babel time pattern or style
    """

    ALLOWED_TAGS = [
        "a", "abbr", "b", "blockquote", "br", "code", "div", "em", "h1", "h2",
        "h3", "h4", "h5", "h6", "i", "li", "ol", "p", "pre", "span", "strong",
        "table", "tbody", "td", "th", "thead", "tr", "u", "ul",
    ]
    ALLOWED_ATTRIBUTES = {
        "a": ["href", "title", "class", "target"],
        "abbr": ["title"],
        "*": ["class"],
        "td": ["class", "colspan", "rowspan"],
        "th": ["class", "colspan", "rowspan"],
    }
    ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]

    def __init__(
        self,
        locale: str = "en_US",
        null_display: Any = None,
        boolean_format: Optional[Sequence[Any]] = None,
        date_format: str = "medium",
        datetime_format: str = "medium",
        time_format: str = "medium",
    ):
        self.locale = locale
        if null_display is None:
            null_display = Markup('<span class="not-set">{0}</span>').format(
                lazy_gettext("(not set)")
            )
        self.null_display = null_display
        self.boolean_format = boolean_format or (lazy_gettext("No"), lazy_gettext("Yes"))
        self.date_format = date_format
        self.datetime_format = datetime_format
        self.time_format = time_format

    def format(self, value: Any, kind: Union[str, Sequence[Any], None] = "text") -> Markup:
        """
        Formats ``value`` with the method registered for ``kind``.

        Raises :class:`ConfigurationError` for unknown kinds.
        """
        args = []
        if isinstance(kind, (list, tuple)):
            if not kind:
                raise ConfigurationError("The format specification must not be empty.")
            kind, args = kind[0], list(kind[1:])
        kind = kind or "text"
        method = getattr(self, "as_" + str(kind).lower(), None)
        if method is None:
            raise ConfigurationError("Unknown format type '{0}'.".format(kind))
        return Markup(method(value, *args))

    def _null(self):
        return Markup(escape(self.null_display))

    def as_raw(self, value):
        if value is None:
            return self._null()
        return Markup(str(value))

    def as_text(self, value):
        if value is None:
            return self._null()
        return escape(str(value))

    def as_ntext(self, value):
        if value is None:
            return self._null()
        return escape(str(value)).replace("\n", Markup("<br>\n"))

    def as_html(self, value):
        if value is None:
            return self._null()
        return Markup(
            bleach.clean(
                str(value),
                tags=self.ALLOWED_TAGS,
                attributes=self.ALLOWED_ATTRIBUTES,
                protocols=self.ALLOWED_PROTOCOLS,
                strip=True,
            )
        )

    def as_email(self, value):
        if value is None or value == "":
            return self._null()
        return Markup('<a href="mailto:{0}">{0}</a>').format(value)

    def as_url(self, value):
        if value is None or value == "":
            return self._null()
        url = str(value)
        if "://" not in url:
            url = "http://" + url
        return Markup('<a href="{0}">{1}</a>').format(url, value)

    def as_boolean(self, value):
        if value is None:
            return self._null()
        return escape(self.boolean_format[1] if value else self.boolean_format[0])

    def _number(self, value):
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                return None
            return float(value) if any(c in value for c in ".eE") else int(value)
        return value

    def as_integer(self, value):
        value = self._number(value)
        if value is None:
            return self._null()
        return escape(babel_numbers.format_decimal(int(value), format="#,##0", locale=self.locale))

    def as_decimal(self, value, decimals: int = 2):
        value = self._number(value)
        if value is None:
            return self._null()
        pattern = "#,##0" + ("." + "0" * int(decimals) if decimals else "")
        return escape(babel_numbers.format_decimal(value, format=pattern, locale=self.locale))

    def as_percent(self, value, decimals: int = 0):
        value = self._number(value)
        if value is None:
            return self._null()
        pattern = "#,##0" + ("." + "0" * int(decimals) if decimals else "") + "%"
        return escape(babel_numbers.format_percent(value, format=pattern, locale=self.locale))

    def _datetime(self, value):
        if value is None or value == "":
            return None
        if isinstance(value, (datetime.date, datetime.time)):
            return value
        if isinstance(value, (int, float)):
            return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
        return date_parser.parse(str(value))

    def as_date(self, value, fmt: Optional[str] = None):
        value = self._datetime(value)
        if value is None:
            return self._null()
        if isinstance(value, datetime.datetime):
            value = value.date()
        return escape(
            babel_dates.format_date(value, format=fmt or self.date_format, locale=self.locale)
        )

    def as_datetime(self, value, fmt: Optional[str] = None):
        value = self._datetime(value)
        if value is None:
            return self._null()
        if not isinstance(value, datetime.datetime):
            value = datetime.datetime.combine(value, datetime.time())
        return escape(
            babel_dates.format_datetime(
                value, format=fmt or self.datetime_format, locale=self.locale
            )
        )

    def as_time(self, value, fmt: Optional[str] = None):
        value = self._datetime(value)
        if value is None:
            return self._null()
        if isinstance(value, datetime.datetime):
            value = value.time()
        return escape(
            babel_dates.format_time(value, format=fmt or self.time_format, locale=self.locale)
        )
