"""
Registry of pluggable edit mode input widgets.

Any WTForms widget, that is a callable ``widget(field, **kwargs)``, can be
used as an input kind once registered under a short name::

    registry.register("color", ColorPickerWidget)

Kinds written as a dotted import path (``"myapp.widgets.ColorPickerWidget"``
or ``"myapp.widgets:ColorPickerWidget"``) are imported on first use and
registered under that path.
"""

import inspect
import logging
from typing import Any, Callable, Dict, Optional, Union

from werkzeug.utils import ImportStringError, import_string

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)


def is_import_path(kind: Any) -> bool:
    return isinstance(kind, str) and ("." in kind or ":" in kind)


class InputWidgetRegistry(object):
    def __init__(self):
        self._widgets: Dict[str, Callable] = {}

    def register(self, name: str, widget_class: Callable) -> Callable:
        if not callable(widget_class):
            raise ConfigurationError(
                "Input widget '{0}' must be a callable widget class.".format(name)
            )
        self._widgets[name] = widget_class
        log.debug("Registered input widget %s -> %r", name, widget_class)
        return widget_class

    def unregister(self, name: str) -> None:
        self._widgets.pop(name, None)

    def __contains__(self, name: Any) -> bool:
        return name in self._widgets

    def get(self, name: str) -> Optional[Callable]:
        return self._widgets.get(name)

    def is_input_widget(self, kind: Any) -> bool:
        """Whether ``kind`` names a registered or importable widget class."""
        try:
            self.resolve(kind)
        except ConfigurationError:
            return False
        return True

    def resolve(self, kind: Union[str, Callable], purpose: str = "as an input widget") -> Callable:
        """
        Returns the widget class for ``kind``.

        Classes are accepted as is, names are looked up and dotted paths
        imported. Raises :class:`ConfigurationError` otherwise.
        """
        if inspect.isclass(kind):
            return kind
        if not isinstance(kind, str):
            raise ConfigurationError("Invalid widget {0!r} {1}.".format(kind, purpose))
        if kind in self._widgets:
            return self._widgets[kind]
        if not is_import_path(kind):
            raise ConfigurationError("The widget '{0}' is not registered {1}.".format(kind, purpose))
        try:
            widget_class = import_string(kind)
        except ImportStringError:
            raise ConfigurationError(
                "The class '{0}' does not exist and cannot be used {1}.".format(kind, purpose)
            )
        if not callable(widget_class):
            raise ConfigurationError("'{0}' is not callable and cannot be used {1}.".format(kind, purpose))
        return self.register(kind, widget_class)


default_registry = InputWidgetRegistry()
