"""
Attribute specifications and their normalization.

An attribute may be given as a string ``"name"``, ``"name:format"`` or
``"name:format:label"``, as a mapping of :class:`AttributeSpec` fields or as
an ``AttributeSpec``. Any field value that is a function is a deferred
computation: it is called as ``fn(form, widget)`` during normalization and
replaced by its result::

    attributes = [
        "title",
        "description:html",
        {"label": "Owner", "value": lambda form, widget: widget.model.owner.name},
        {"group": True, "label": "Audit"},
        {"columns": ["created_at:datetime", "updated_at:datetime"]},
    ]
"""

import dataclasses
import functools
import inspect
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .const import InputType, LOGMSG_DEB_NORMALIZED
from .exceptions import ConfigurationError
from .models import get_attribute_label, get_value, humanize, is_model, model_attributes

log = logging.getLogger(__name__)

_SHORTHAND = re.compile(r"^([^:]+)(:(\w*))?(:(.*))?$", re.DOTALL)
_UPDATE_FIELD_NAME = re.compile(r"^[A-Za-z0-9_]+$")


class _Unset(object):
    """Marks a ``value`` the caller did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(_Unset, cls).__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET = _Unset()


class Deferred(object):
    """
    Explicitly deferred attribute field, for callables that are not plain
    functions (callable instances, builtins).
    """

    def __init__(self, func: Callable):
        self.func = func

    def __call__(self, form, widget):
        return self.func(form, widget)


def is_deferred(setting: Any) -> bool:
    return isinstance(setting, Deferred) or (
        not inspect.isclass(setting)
        and (
            inspect.isfunction(setting)
            or inspect.ismethod(setting)
            or isinstance(setting, functools.partial)
        )
    )


@dataclasses.dataclass
class AttributeSpec:
    """A normalized attribute ready to be rendered."""

    name: Optional[str] = None
    label: Any = None
    value: Any = UNSET
    format: Any = None
    visible: bool = True
    display_only: bool = False
    input_kind: Any = InputType.TEXT
    html_input_type: str = "text"
    items: Any = None
    input_options: Dict[str, Any] = dataclasses.field(default_factory=dict)
    widget_options: Dict[str, Any] = dataclasses.field(default_factory=dict)
    input_container: Dict[str, Any] = dataclasses.field(default_factory=dict)
    input_width: Optional[str] = None
    field_config: Dict[str, Any] = dataclasses.field(default_factory=dict)
    row_options: Optional[Dict[str, Any]] = None
    label_column_options: Optional[Dict[str, Any]] = None
    value_column_options: Optional[Dict[str, Any]] = None
    group: bool = False
    group_options: Dict[str, Any] = dataclasses.field(default_factory=dict)
    columns: Optional[List["AttributeSpec"]] = None
    update_field_name: Optional[str] = None
    update_markup: Any = None
    view_model: Any = None
    edit_model: Any = None

    @property
    def has_value(self) -> bool:
        return self.value is not UNSET

    @property
    def is_header(self) -> bool:
        return bool(self.group) or self.columns is not None

    @property
    def bound_name(self) -> Optional[str]:
        return self.update_field_name or self.name

    def to_dict(self) -> Dict[str, Any]:
        """The map form of this spec, omitting an unset ``value``."""
        data = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if f.name == "columns" and value is not None:
                value = [child.to_dict() for child in value]
            data[f.name] = value
        return data


SPEC_FIELDS = frozenset(f.name for f in dataclasses.fields(AttributeSpec))


def parse_shorthand(text: str) -> Dict[str, Any]:
    """Parses ``name[:format[:label]]`` into its map form."""
    match = _SHORTHAND.match(text)
    if not match:
        raise ConfigurationError(
            'The attribute must be specified in the format of "attribute", '
            '"attribute:format" or "attribute:format:label"'
        )
    data = {"name": match.group(1), "format": match.group(3) or "text"}
    if match.group(5) is not None:
        data["label"] = match.group(5)
    return data


class AttributeNormalizer(object):
    """
    Resolves raw attribute specifications against a model.

    :param model: The widget model
    :param form: The edit form passed to deferred computations
    :param widget: The widget passed to deferred computations
    """

    def __init__(self, model: Any, form: Any = None, widget: Any = None):
        self.model = model
        self.form = form
        self.widget = widget

    def normalize(self, raw_specs: Optional[Sequence[Any]] = None) -> List[AttributeSpec]:
        if raw_specs is None:
            raw_specs = model_attributes(self.model)
        result = []
        for raw in raw_specs:
            spec = self.parse(raw)
            if spec.visible is False:
                continue
            result.append(spec)
        log.debug(LOGMSG_DEB_NORMALIZED.format(len(result), type(self.model).__name__))
        return result

    def resolve(self, setting: Any) -> Any:
        return setting(self.form, self.widget) if is_deferred(setting) else setting

    def _as_dict(self, raw: Any) -> Dict[str, Any]:
        if isinstance(raw, AttributeSpec):
            return raw.to_dict()
        if isinstance(raw, str):
            return parse_shorthand(raw)
        if isinstance(raw, Mapping):
            return dict(raw)
        raise ConfigurationError(
            "The attribute configuration must be a string or a mapping, got {0!r}.".format(raw)
        )

    def parse(self, raw: Any) -> AttributeSpec:
        data = self._as_dict(raw)
        unknown = set(data) - SPEC_FIELDS
        if unknown:
            raise ConfigurationError(
                "Unknown attribute setting(s) {0} for {1!r}.".format(
                    ", ".join(sorted(unknown)), data.get("name") or data.get("label")
                ),
                attribute=data.get("name"),
            )
        for prop in list(data):
            data[prop] = self.resolve(data[prop])

        if data.get("columns") is not None:
            children = []
            for child in data["columns"]:
                spec = self.parse(child)
                if spec.visible is False:
                    continue
                children.append(spec)
            data["columns"] = children
            return AttributeSpec(**data)

        name = data.get("name")
        update_name = data.get("update_field_name")
        if update_name and not _UPDATE_FIELD_NAME.match(str(update_name)):
            raise ConfigurationError(
                "The 'update_field_name' name '{0}' is invalid.".format(update_name),
                attribute=name,
            )
        if name and "." in name:
            raise ConfigurationError(
                "The attribute '{0}' is invalid. You cannot directly pass relational "
                "attributes in string format within the detail view. Instead use the "
                "mapping format with 'name' set to the base field and 'value' returning "
                "the relational data. You can also override the widget model by setting "
                "'view_model' and / or 'edit_model' on the attribute.".format(name),
                attribute=name,
            )
        if data.get("format") is None:
            data["format"] = "text"

        if name:
            view_model = data.get("view_model")
            model = view_model if is_model(view_model) else self.model
            if data.get("label") is None:
                data["label"] = get_attribute_label(model, name) if model is not None else humanize(name)
            if "value" not in data or data["value"] is UNSET:
                data["value"] = get_value(model, name)
        elif data.get("label") is None or "value" not in data or data["value"] is UNSET:
            if data.get("group"):
                data["value"] = ""
                return AttributeSpec(**data)
            raise ConfigurationError(
                'The attribute configuration requires the "name" element to determine '
                "the value and display label."
            )
        return AttributeSpec(**data)


def normalize_attributes(
    raw_specs: Optional[Sequence[Union[str, Mapping, AttributeSpec]]],
    model: Any,
    form: Any = None,
    widget: Any = None,
) -> List[AttributeSpec]:
    """Shortcut for ``AttributeNormalizer(model, form, widget).normalize(raw_specs)``."""
    return AttributeNormalizer(model, form, widget).normalize(raw_specs)
