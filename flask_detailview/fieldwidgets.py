from markupsafe import Markup, escape
from wtforms import widgets
from wtforms.widgets import html_params


def _with_class(kwargs, css):
    """Merges ``css`` in front of any class already passed at render time."""
    extra = kwargs.pop("class", None) or kwargs.pop("class_", None)
    kwargs["class"] = css if not extra else "{0} {1}".format(css, extra)
    return kwargs


class BS3TextFieldWidget(widgets.TextInput):
    def __call__(self, field, **kwargs):
        _with_class(kwargs, "form-control")
        return super(BS3TextFieldWidget, self).__call__(field, **kwargs)


class BS3TextAreaFieldWidget(widgets.TextArea):
    def __call__(self, field, **kwargs):
        _with_class(kwargs, "form-control")
        kwargs.setdefault("rows", 3)
        return super(BS3TextAreaFieldWidget, self).__call__(field, **kwargs)


class BS3PasswordFieldWidget(widgets.PasswordInput):
    def __call__(self, field, **kwargs):
        _with_class(kwargs, "form-control")
        return super(BS3PasswordFieldWidget, self).__call__(field, **kwargs)


class BS3SelectFieldWidget(widgets.Select):
    def __call__(self, field, **kwargs):
        _with_class(kwargs, "form-control")
        return super(BS3SelectFieldWidget, self).__call__(field, **kwargs)


class BS3InputWidget(widgets.TextInput):
    """HTML5 input (color, range, email...) with form-control styling."""

    def __init__(self, input_type="text"):
        super(BS3InputWidget, self).__init__(input_type=input_type)

    def __call__(self, field, **kwargs):
        _with_class(kwargs, "form-control")
        return super(BS3InputWidget, self).__call__(field, **kwargs)


class BooleanRadioInput(widgets.CheckboxInput):
    """A single radio button bound to a boolean field."""

    input_type = "radio"


class StaticInputWidget(object):
    """
    Read only value rendered as bootstrap static form control text.
    """

    data_template = "<p %(attrs)s>%(value)s</p>"

    def __call__(self, field, **kwargs):
        kwargs.setdefault("id", field.id)
        _with_class(kwargs, "form-control-static")
        return Markup(
            self.data_template
            % {"attrs": html_params(**kwargs), "value": escape(field._value())}
        )


class HiddenStaticInputWidget(StaticInputWidget):
    """Static text plus a hidden input carrying the value."""

    def __call__(self, field, **kwargs):
        static = super(HiddenStaticInputWidget, self).__call__(field, **dict(kwargs))
        hidden = widgets.HiddenInput()(field, id=field.id + "-hidden")
        return static + hidden


class ChoiceListWidget(object):
    """
    Renders the options of a choice field one per line, each option using
    the field ``option_widget`` (checkbox or radio input).
    """

    def __init__(self, item_class="checkbox"):
        self.item_class = item_class

    def __call__(self, field, **kwargs):
        kwargs.setdefault("id", field.id)
        item_options = kwargs.pop("item_options", {}) or {}
        html = ["<div %s>" % html_params(**kwargs)]
        for subfield in field:
            html.append(
                '<div class="%s"><label>%s %s</label></div>'
                % (self.item_class, subfield(**item_options), escape(subfield.label.text))
            )
        html.append("</div>")
        return Markup("".join(html))


class ButtonGroupWidget(object):
    """
    Bootstrap toggle button group, checked options get the ``active`` class.
    """

    def __init__(self, button_class="btn btn-default"):
        self.button_class = button_class

    def __call__(self, field, **kwargs):
        kwargs.setdefault("id", field.id)
        kwargs.setdefault("data-toggle", "buttons")
        _with_class(kwargs, "btn-group")
        html = ["<div %s>" % html_params(**kwargs)]
        for subfield in field:
            css = self.button_class + (" active" if subfield.checked else "")
            html.append(
                '<label class="%s">%s %s</label>'
                % (css, subfield(autocomplete="off"), escape(subfield.label.text))
            )
        html.append("</div>")
        return Markup("".join(html))
