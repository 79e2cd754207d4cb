"""
Edit mode form binding.

:class:`ActiveForm` wraps a Flask-WTF form and hands out :class:`ActiveField`
objects, one per model attribute. Each ``ActiveField`` method binds a WTForms
field to the model value, attaches the model validation errors for that
attribute and renders it inside the field template.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from flask_babel import lazy_gettext
from flask_wtf import FlaskForm
from markupsafe import Markup
from wtforms import (
    BooleanField,
    FileField,
    HiddenField,
    PasswordField,
    RadioField,
    SelectField,
    SelectMultipleField,
    StringField,
    TextAreaField,
)
from wtforms.widgets import CheckboxInput, FileInput

from . import html
from .const import DEFAULT_FIELD_TEMPLATE
from .exceptions import ConfigurationError
from .fieldwidgets import (
    BooleanRadioInput,
    BS3InputWidget,
    BS3PasswordFieldWidget,
    BS3SelectFieldWidget,
    BS3TextAreaFieldWidget,
    BS3TextFieldWidget,
    ButtonGroupWidget,
    ChoiceListWidget,
    HiddenStaticInputWidget,
    StaticInputWidget,
)
from .models import get_attribute_errors, get_attribute_label, get_errors, get_value

log = logging.getLogger(__name__)


def as_choices(items: Any):
    """Converts ``{value: label}`` or a sequence into WTForms choices."""
    if not items:
        return []
    if isinstance(items, Mapping):
        return list(items.items())
    choices = []
    for item in items:
        if isinstance(item, (list, tuple)) and len(item) == 2:
            choices.append(tuple(item))
        else:
            choices.append((item, item))
    return choices


class ActiveForm(object):
    """
    The form surrounding a detail view in edit mode.

    :param action: Form action url, defaults to the current url
    :param method: HTTP method
    :param options: HTML attributes of the ``<form>`` tag
    :param field_config: Defaults merged into every field configuration
    :param prefix: Name prefix of every bound field
    :param form_class: Flask-WTF form class providing meta and CSRF
    """

    form_class = FlaskForm

    def __init__(
        self,
        action: str = "",
        method: str = "post",
        options: Optional[Dict[str, Any]] = None,
        field_config: Optional[Dict[str, Any]] = None,
        prefix: str = "",
        form_class: Optional[type] = None,
    ):
        self.action = action
        self.method = method
        self.options = dict(options or {})
        self.field_config = dict(field_config or {})
        self.field_config.setdefault("template", DEFAULT_FIELD_TEMPLATE)
        self.prefix = prefix
        self.form = (form_class or self.form_class)(formdata=None)

    @classmethod
    def from_options(cls, form_options: Optional[Dict[str, Any]] = None) -> "ActiveForm":
        opts = dict(form_options or {})
        known = {k: opts.pop(k) for k in list(opts) if k in ("action", "method", "field_config", "prefix", "form_class")}
        return cls(options=opts, **known)

    def begin(self) -> Markup:
        options = dict(self.options)
        options["action"] = self.action
        options["method"] = self.method
        return html.begin_tag("form", options) + Markup(self.form.hidden_tag())

    def end(self) -> Markup:
        return html.end_tag("form")

    def field(self, model: Any, attribute: str, field_config: Optional[Dict[str, Any]] = None) -> "ActiveField":
        config = dict(self.field_config)
        config.update(field_config or {})
        return ActiveField(self, model, attribute, **config)

    def error_summary(self, models: Any, header: Any = None, options: Optional[Dict[str, Any]] = None) -> Markup:
        """Lists the validation errors of one or more models."""
        if not isinstance(models, (list, tuple)):
            models = [models]
        messages = []
        for model in models:
            for errors in get_errors(model).values():
                if isinstance(errors, str):
                    errors = [errors]
                messages.extend(e for e in errors if e not in messages)
        options = dict(options or {})
        html.add_css_class(options, "error-summary")
        if not messages:
            html.add_css_style(options, "display:none")
        if header is None:
            header = lazy_gettext("Please fix the following errors:")
        items = Markup("").join(html.tag("li", m) for m in messages)
        return html.tag("div", html.tag("p", header) + html.tag("ul", items), options)


class ActiveField(object):
    """
    One model attribute bound to the edit form.

    :param active_form: The owning :class:`ActiveForm`
    :param model: Record holding the value and the validation errors
    :param attribute: Attribute (and form field) name
    :param template: Field template with ``{label}``, ``{input}``,
        ``{error}`` and ``{hint}`` tokens
    :param options: HTML attributes of the field container
    :param label: Label text, defaults to the model label
    :param hint: Hint text rendered in ``{hint}``
    """

    def __init__(
        self,
        active_form: ActiveForm,
        model: Any,
        attribute: str,
        template: str = DEFAULT_FIELD_TEMPLATE,
        options: Optional[Dict[str, Any]] = None,
        label: Any = None,
        hint: Any = None,
        label_options: Optional[Dict[str, Any]] = None,
        error_options: Optional[Dict[str, Any]] = None,
        hint_options: Optional[Dict[str, Any]] = None,
    ):
        self.active_form = active_form
        self.model = model
        self.attribute = attribute
        self.template = template
        self.options = dict(options or {})
        self.label = label if label is not None else get_attribute_label(model, attribute)
        self.hint = hint
        self.label_options = dict(label_options or {"class": "control-label"})
        self.error_options = dict(error_options or {"class": "help-block"})
        self.hint_options = dict(hint_options or {"class": "hint-block"})

    @property
    def errors(self):
        return get_attribute_errors(self.model, self.attribute)

    def bind(self, field_class: type, **kwargs):
        unbound = field_class(label=self.label, **kwargs)
        field = unbound.bind(
            form=self.active_form.form, name=self.attribute, prefix=self.active_form.prefix
        )
        field.process(None, data=get_value(self.model, self.attribute))
        field.errors = self.errors
        return field

    def render(self, field, input_html: Any) -> Markup:
        errors = self.errors
        error_html = Markup("<br>").join(errors) if errors else ""
        tokens = {
            "{label}": field.label(**self.label_options),
            "{input}": input_html,
            "{error}": html.tag("div", error_html, self.error_options),
            "{hint}": html.tag("div", self.hint, self.hint_options) if self.hint else "",
        }
        options = dict(self.options)
        html.add_css_class(options, ["form-group", "field-" + field.id])
        if errors:
            html.add_css_class(options, "has-error")
        return html.tag("div", html.replace_tokens(self.template, tokens), options)

    def _render_input(self, field_class: type, options: Optional[Dict[str, Any]], **kwargs) -> Markup:
        field = self.bind(field_class, **kwargs)
        return self.render(field, field(**dict(options or {})))

    def _enclosed(self, field_class: type, options, css: str, **kwargs) -> Markup:
        options = dict(options or {})
        label = options.pop("label", self.label)
        field = self.bind(field_class, **kwargs)
        input_html = html.tag(
            "div", html.tag("label", field(**options) + Markup(" ") + html.tag("span", label)), {"class": css}
        )
        return self.render(field, input_html)

    def text_input(self, options=None) -> Markup:
        return self._render_input(StringField, options, widget=BS3TextFieldWidget())

    def password_input(self, options=None) -> Markup:
        return self._render_input(PasswordField, options, widget=BS3PasswordFieldWidget())

    def textarea(self, options=None) -> Markup:
        return self._render_input(TextAreaField, options, widget=BS3TextAreaFieldWidget())

    def hidden_input(self, options=None) -> Markup:
        return self._render_input(HiddenField, options)

    def static_input(self, options=None) -> Markup:
        return self._render_input(StringField, options, widget=StaticInputWidget())

    def hidden_static_input(self, options=None) -> Markup:
        return self._render_input(StringField, options, widget=HiddenStaticInputWidget())

    def file_input(self, options=None) -> Markup:
        return self._render_input(FileField, options, widget=FileInput())

    def checkbox(self, options=None) -> Markup:
        return self._enclosed(BooleanField, options, "checkbox")

    def radio(self, options=None) -> Markup:
        return self._enclosed(BooleanField, options, "radio", widget=BooleanRadioInput())

    def input(self, input_type: str = "text", options=None) -> Markup:
        return self._render_input(StringField, options, widget=BS3InputWidget(input_type=input_type))

    def drop_down_list(self, items=None, options=None) -> Markup:
        options = dict(options or {})
        choices = as_choices(items)
        prompt = options.pop("prompt", None)
        if prompt is not None:
            choices.insert(0, ("", prompt))
        return self._render_input(SelectField, options, choices=choices, widget=BS3SelectFieldWidget())

    def list_box(self, items=None, options=None) -> Markup:
        options = dict(options or {})
        options.setdefault("size", 4)
        choices = as_choices(items)
        if options.pop("multiple", False):
            return self._render_input(
                SelectMultipleField, options, choices=choices, widget=BS3SelectFieldWidget(multiple=True)
            )
        return self._render_input(SelectField, options, choices=choices, widget=BS3SelectFieldWidget())

    def checkbox_list(self, items=None, options=None) -> Markup:
        return self._render_input(
            SelectMultipleField,
            options,
            choices=as_choices(items),
            widget=ChoiceListWidget("checkbox"),
            option_widget=CheckboxInput(),
        )

    def radio_list(self, items=None, options=None) -> Markup:
        return self._render_input(
            RadioField, options, choices=as_choices(items), widget=ChoiceListWidget("radio")
        )

    def checkbox_button_group(self, items=None, options=None) -> Markup:
        return self._render_input(
            SelectMultipleField,
            options,
            choices=as_choices(items),
            widget=ButtonGroupWidget(),
            option_widget=CheckboxInput(),
        )

    def radio_button_group(self, items=None, options=None) -> Markup:
        return self._render_input(
            RadioField, options, choices=as_choices(items), widget=ButtonGroupWidget()
        )

    def widget(self, widget_class: Callable, widget_options: Optional[Dict[str, Any]] = None) -> Markup:
        """
        Renders the attribute with a pluggable WTForms widget.

        ``widget_options["options"]`` holds the HTML attributes passed at
        render time, the remaining keys are the widget constructor arguments.
        """
        widget_options = dict(widget_options or {})
        options = widget_options.pop("options", None)
        try:
            widget = widget_class(**widget_options)
        except TypeError as e:
            raise ConfigurationError(
                "Cannot create widget {0!r} for '{1}': {2}".format(widget_class, self.attribute, e),
                attribute=self.attribute,
            )
        return self._render_input(StringField, options, widget=widget)
