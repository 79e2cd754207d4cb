"""
The detail view widget.

Renders a single record as a table where every value cell holds both the
read only display and the edit mode form control. The client plugin
``detailView`` (``static/detailview/js/detail-view.js``) toggles between
the two halves.
"""

import inspect
import itertools
import logging
import pprint
from typing import Any, Callable, Dict, Optional, Sequence

from flask import current_app, get_flashed_messages, has_app_context, has_request_context
from flask_babel import lazy_gettext
from markupsafe import Markup

from . import html
from .attributes import AttributeNormalizer, AttributeSpec, is_deferred
from .config import load_config
from .const import (
    BS_CSS,
    BS_PANEL,
    BS_PANEL_BODY,
    BS_PANEL_FOOTER,
    BS_PANEL_HEADING,
    BS_PANEL_TITLE,
    BS_SHOW,
    BS_TABLE_CONDENSED,
    BUTTON_DELETE,
    BUTTON_ICONS,
    BUTTON_KINDS,
    BUTTON_RESET,
    BUTTON_SAVE,
    BUTTON_UPDATE,
    BUTTON_VIEW,
    CSS_ACTION_BUTTON,
    CSS_ALERT_CONTAINER,
    CSS_BUTTONS_1,
    CSS_BUTTONS_2,
    CSS_CHILD_TABLE,
    CSS_CHILD_TABLE_CELL,
    CSS_CHILD_TABLE_ROW,
    CSS_CONTAINER_BS4,
    CSS_DETAIL_VIEW,
    CSS_EDIT_ATTRIBUTE,
    CSS_EDIT_HIDDEN,
    CSS_EDIT_MODE,
    CSS_FLAT_BORDER,
    CSS_PANEL_AFTER,
    CSS_PANEL_BEFORE,
    CSS_VIEW_ATTRIBUTE,
    CSS_VIEW_HIDDEN,
    CSS_VIEW_MODE,
    DEFAULT_ALERT_MESSAGE_SETTINGS,
    DEFAULT_FIELD_TEMPLATE,
    ICON_PREFIX_BS3,
    ICON_PREFIX_BS4,
    InputType,
    LIST_INPUTS,
    LOGMSG_DEB_MODE_FORCED,
    LOGMSG_WAR_ALERT_SKIPPED,
    MODE_EDIT,
    TYPE_DEFAULT,
    ALERT_ERROR,
)
from .exceptions import ConfigurationError
from .formatter import Formatter
from .forms import ActiveForm
from .models import has_errors, is_model
from .registry import InputWidgetRegistry, default_registry, is_import_path

log = logging.getLogger(__name__)

_container_ids = itertools.count(1)


BUTTON_TITLES = {
    BUTTON_VIEW: lazy_gettext("View"),
    BUTTON_UPDATE: lazy_gettext("Update"),
    BUTTON_DELETE: lazy_gettext("Delete"),
    BUTTON_SAVE: lazy_gettext("Save"),
    BUTTON_RESET: lazy_gettext("Cancel Changes"),
}


def pending_flash_messages() -> Dict[str, Markup]:
    """
    Reads and clears the Flask flash messages, grouped by category.
    """
    if not has_request_context():
        return {}
    messages: Dict[str, Markup] = {}
    for category, message in get_flashed_messages(with_categories=True):
        if category in messages:
            messages[category] = Markup("<br>").join([messages[category], message])
        else:
            messages[category] = Markup("{0}").format(message)
    return messages


def default_formatter() -> Formatter:
    locale = "en_US"
    if has_app_context():
        locale = current_app.config.get("DETAIL_VIEW_FORMATTER_LOCALE", locale)
    return Formatter(locale=locale)


def is_empty(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, (list, tuple, dict, set)) and not value


class RenderTemplateWidget(object):
    """
    Base template for every widget.
    Renders the ``template`` source with the app jinja environment,
    merging run time arguments over the constructor ones.
    """

    template = "{{ content }}"
    template_args = None

    def __init__(self, **kwargs):
        self.template_args = kwargs

    def __call__(self, **kwargs):
        jinja_env = current_app.jinja_env
        template = jinja_env.from_string(self.template)
        args = self.template_args.copy()
        args.update(kwargs)
        return Markup(template.render(args))


class DetailView(RenderTemplateWidget):
    """
    Displays one record as a table with view and edit modes.

    :param model: The record, a mapping or an object
    :param attributes: Attribute specifications, derived from the model
        when omitted (see :mod:`flask_detailview.attributes`)
    :param formatter: Formatter used for the view mode display
    :param flash_messages: Callable returning the pending alert messages as
        ``{category: message}``, reading and clearing them
    :param registry: Registry of pluggable input widgets
    :param form: An :class:`ActiveForm`, created from ``form_options``
        when omitted
    :param options: Widget options, see :class:`~flask_detailview.config.DetailViewConfig`
    """

    template = """{{ form_begin }}{{ content }}{{ form_end }}
{{ script }}"""

    script_template = """<script>
jQuery(function ($) {
    var $el = $("#{{ container_id }}");
    $el.detailView({{ plugin_options|tojson }});
{%- if tooltips %}
    $el.find("[data-toggle=tooltip]").tooltip();
{%- endif %}
});
</script>"""

    def __init__(
        self,
        model: Any = None,
        attributes: Optional[Sequence[Any]] = None,
        formatter: Optional[Formatter] = None,
        flash_messages: Optional[Callable[[], Dict[str, Any]]] = None,
        registry: Optional[InputWidgetRegistry] = None,
        form: Optional[ActiveForm] = None,
        **options
    ):
        super(DetailView, self).__init__()
        self.model = model
        self.raw_attributes = attributes
        self.config = load_config(options)
        self.formatter = formatter or default_formatter()
        self.flash_messages = flash_messages or pending_flash_messages
        self.registry = registry or default_registry
        self.form = form
        self.mode = self.config.mode
        self.attributes = []
        self._init_options()

    @property
    def bs_version(self) -> int:
        return self.config.bs_version

    def css(self, name: str) -> str:
        return BS_CSS[self.bs_version][name]

    def _init_options(self):
        cfg = self.config
        self.container = cfg.copy_of("container")
        self.table_options = cfg.copy_of("options")
        self.table_container = cfg.copy_of("table_container")
        self.row_options = cfg.copy_of("row_options")
        self.label_col_options = cfg.copy_of("label_col_options")
        self.value_col_options = cfg.copy_of("value_col_options")
        self.view_attribute_container = cfg.copy_of("view_attribute_container")
        self.edit_attribute_container = cfg.copy_of("edit_attribute_container")
        self.view_buttons_container = cfg.copy_of("view_buttons_container")
        self.edit_buttons_container = cfg.copy_of("edit_buttons_container")
        self.alert_container_options = cfg.copy_of("alert_container_options")
        self.alert_message_settings = {}
        for key, setting in cfg.alert_message_settings.items():
            self.alert_message_settings[key] = [setting] if isinstance(setting, str) else list(setting)
        for key, setting in DEFAULT_ALERT_MESSAGE_SETTINGS.items():
            self.alert_message_settings.setdefault(key, list(setting))

        if self.bs_version == 4:
            html.add_css_class(self.container, CSS_CONTAINER_BS4)
        self.child_table_options = {}
        if cfg.bootstrap:
            html.add_css_class(self.table_options, "table")
            if cfg.hover:
                html.add_css_class(self.table_options, "table-hover")
            if cfg.bordered:
                html.add_css_class(self.table_options, "table-bordered")
            if cfg.condensed:
                html.add_css_class(self.table_options, self.css(BS_TABLE_CONDENSED))
            self.child_table_options = {"class": self.table_options.get("class", "")}
            if cfg.striped:
                html.add_css_class(self.table_options, "table-striped")
        html.add_css_class(self.child_table_options, CSS_CHILD_TABLE)
        html.add_css_class(self.table_options, "detail-view")
        html.add_css_style(
            self.label_col_options,
            "text-align:{0};vertical-align:{1};".format(cfg.h_align, cfg.v_align),
        )

    def __call__(self, **kwargs):
        return self.render(**kwargs)

    def render(self, **kwargs) -> Markup:
        """
        Normalizes the attributes and renders the whole widget.

        Raises :class:`ConfigurationError` on any invalid attribute, no
        partial output is produced.
        """
        cfg = self.config
        if cfg.enable_edit_mode and self.form is None:
            self.form = ActiveForm.from_options(cfg.form_options)
        self.attributes = AttributeNormalizer(self.model, self.form, self).normalize(
            self.raw_attributes
        )
        if cfg.enable_edit_mode:
            self.validate_display()
        if not self.container.get("id"):
            self.container["id"] = "detail-view-{0}".format(next(_container_ids))
        html.add_css_class(self.alert_container_options, [self.css(BS_PANEL_BODY), CSS_ALERT_CONTAINER])

        buttons = self.render_button_container()
        output = self.render_detail_view()
        if cfg.bootstrap and cfg.panel:
            output = self.render_panel(output, buttons)
        # one pass over the trusted template, record data is never rescanned
        output = html.tag(
            "div",
            html.replace_tokens(cfg.main_template, {"{detail}": output, "{buttons}": buttons}),
            self.container,
        )
        context = {
            "content": output,
            "form_begin": self.form.begin() if cfg.enable_edit_mode else "",
            "form_end": self.form.end() if cfg.enable_edit_mode else "",
            "script": self.render_script(),
        }
        context.update(kwargs)
        return super(DetailView, self).__call__(**context)

    def render_script(self) -> Markup:
        """The script attaching the client plugin to the container."""
        template = current_app.jinja_env.from_string(self.script_template)
        return Markup(
            template.render(
                container_id=self.container["id"],
                plugin_options=self.plugin_options(),
                tooltips=self.config.tooltips,
            )
        )

    def _edit_models(self, specs):
        for spec in specs:
            if spec.columns:
                yield from self._edit_models(spec.columns)
            elif is_model(spec.edit_model):
                yield spec.edit_model

    def has_edit_errors(self) -> bool:
        if has_errors(self.model):
            return True
        return any(has_errors(model) for model in self._edit_models(self.attributes))

    def validate_display(self):
        """Resolves the mode and hides the inactive half of the widget."""
        none = "display:none"
        if self.has_edit_errors():
            log.debug(LOGMSG_DEB_MODE_FORCED)
            self.mode = MODE_EDIT
        if self.mode == MODE_EDIT:
            html.add_css_class(self.container, CSS_EDIT_MODE)
            html.add_css_style(self.view_attribute_container, none)
            html.add_css_style(self.view_buttons_container, none)
        else:
            html.add_css_class(self.container, CSS_VIEW_MODE)
            html.add_css_style(self.edit_attribute_container, none)
            html.add_css_style(self.edit_buttons_container, none)

    def render_detail_view(self) -> Markup:
        rows = [self.render_attribute_row(spec) for spec in self.attributes]
        options = dict(self.table_options)
        tag_name = options.pop("tag", "table")
        output = html.tag(tag_name, Markup("\n").join(rows), options)
        css = [CSS_DETAIL_VIEW]
        if self.config.bootstrap and self.config.responsive:
            css.append("table-responsive")
        table_container = dict(self.table_container)
        html.add_css_class(table_container, css)
        return html.tag("div", output, table_container)

    def render_attribute_row(self, spec: AttributeSpec) -> Markup:
        row_options = dict(spec.row_options if spec.row_options is not None else self.row_options)
        if spec.columns is not None:
            html.add_css_class(row_options, CSS_CHILD_TABLE_ROW)
            cells = Markup("").join(
                self.render_attribute_item(child, row_options) for child in spec.columns
            )
            content = html.tag(
                "td",
                html.tag("table", html.tag("tr", cells), self.child_table_options),
                {"class": CSS_CHILD_TABLE_CELL, "colspan": 2},
            )
        else:
            content = self.render_attribute_item(spec, row_options)
        return html.tag("tr", content, row_options)

    def input_type(self, kind: Any) -> Optional[InputType]:
        if isinstance(kind, InputType):
            return kind
        try:
            return InputType(kind)
        except (TypeError, ValueError):
            return None

    def render_attribute_item(self, spec: AttributeSpec, row_options: Optional[Dict[str, Any]] = None) -> Markup:
        cfg = self.config
        if spec.group:
            group_options = dict(spec.group_options)
            if not group_options.get("colspan"):
                group_options["colspan"] = 2
            return html.tag("th", spec.label or "", group_options)
        label_options = dict(
            spec.label_column_options if spec.label_column_options is not None else self.label_col_options
        )
        value_options = dict(
            spec.value_column_options if spec.value_column_options is not None else self.value_col_options
        )
        if row_options is not None:
            if cfg.hide_if_empty and is_empty(spec.value):
                html.add_css_class(row_options, CSS_VIEW_HIDDEN)
            if self.input_type(spec.input_kind) == InputType.HIDDEN:
                html.add_css_class(row_options, CSS_EDIT_HIDDEN)
        value = spec.value
        if cfg.stringify_arrays and isinstance(value, (list, tuple, dict, set)):
            value = pprint.pformat(value)
        if cfg.not_set_if_empty and value == "":
            value = None
        display = self.formatter.format(value, spec.format)
        view_container = dict(self.view_attribute_container)
        html.add_css_class(view_container, CSS_VIEW_ATTRIBUTE)
        output = html.tag("div", display, view_container) + Markup("\n")
        if cfg.enable_edit_mode:
            edit_container = dict(self.edit_attribute_container)
            html.add_css_class(edit_container, CSS_EDIT_ATTRIBUTE)
            edit_input = display if spec.display_only else self.render_form_attribute(spec)
            output += html.tag("div", edit_input, edit_container)
        return html.tag("th", spec.label, label_options) + Markup("\n") + html.tag("td", output, value_options)

    def render_form_attribute(self, spec: AttributeSpec) -> Markup:
        """
        Renders the edit mode control of an attribute, dispatching on its
        input kind.
        """
        if not spec.name:
            return Markup("")
        model = spec.edit_model if is_model(spec.edit_model) else self.model
        if spec.update_markup is not None:
            markup = spec.update_markup
            if is_deferred(markup):
                markup = markup(self.form, self)
            return Markup(markup)
        attr = spec.bound_name
        kind = spec.input_kind
        field_config = dict(spec.field_config)
        container = dict(spec.input_container)
        if spec.input_width:
            html.add_css_style(container, "width: {0}".format(spec.input_width))
        template = field_config.get("template", DEFAULT_FIELD_TEMPLATE)
        row = html.tag("div", Markup(template), container)
        if html.has_grid_col(container):
            row = html.tag("div", row, {"class": "row"})
        field_config["template"] = row
        options = dict(spec.input_options)
        widget_options = dict(spec.widget_options)
        input_type = self.input_type(kind)
        purpose = "as an input widget for the detail view edit mode"

        if input_type is None:
            known = isinstance(kind, str) and (kind in self.registry or is_import_path(kind))
            if not (inspect.isclass(kind) or known):
                raise ConfigurationError(
                    "Invalid input type '{0}' defined for the attribute '{1}'.".format(kind, spec.name),
                    attribute=spec.name,
                )
            widget_class = self._resolve_widget(kind, spec, purpose)
            if options:
                widget_options["options"] = options
            return self.form.field(model, attr, field_config).widget(widget_class, widget_options)
        field = self.form.field(model, attr, field_config)
        if input_type == InputType.WIDGET:
            widget_class = widget_options.pop("class", None)
            if not widget_class:
                raise ConfigurationError(
                    "Widget class not defined in 'widget_options' for the attribute '{0}'.".format(spec.name),
                    attribute=spec.name,
                )
            widget_class = self._resolve_widget(widget_class, spec, purpose)
            if options:
                widget_options["options"] = options
            return field.widget(widget_class, widget_options)
        if input_type in LIST_INPUTS:
            return getattr(field, input_type.value)(spec.items or [], options)
        if input_type == InputType.HTML5:
            return field.input(spec.html_input_type or "text", options)
        return getattr(field, input_type.value)(options)

    def _resolve_widget(self, kind, spec, purpose):
        log.debug("Resolving input widget %r for attribute %s", kind, spec.name)
        try:
            return self.registry.resolve(kind, purpose)
        except ConfigurationError as e:
            raise ConfigurationError(
                "{0} (attribute '{1}')".format(e.message, spec.name), attribute=spec.name
            )

    def render_button_container(self) -> Markup:
        """Both button toolbars inside the ``button_container`` div."""
        cfg = self.config
        html.add_css_class(self.view_buttons_container, CSS_BUTTONS_1)
        buttons = html.tag("span", self.render_buttons(1), self.view_buttons_container)
        if cfg.enable_edit_mode:
            html.add_css_class(self.edit_buttons_container, CSS_BUTTONS_2)
            buttons += html.tag("span", self.render_buttons(2), self.edit_buttons_container)
        return html.tag("div", buttons, cfg.copy_of("button_container"))

    def render_panel(self, items: Markup, buttons: Optional[Markup] = None) -> Markup:
        """Wraps the table in a bootstrap panel (BS3) or card (BS4)."""
        cfg = self.config
        if not cfg.bootstrap or not cfg.panel:
            return items
        if buttons is None:
            buttons = self.render_button_container()
        panel = cfg.copy_of("panel")
        bs4 = self.bs_version == 4
        options = dict(panel.get("options") or {})
        panel_type = panel.get("type", TYPE_DEFAULT)
        heading = panel.get("heading", "")
        footer = panel.get("footer", False)
        before = panel.get("before", "")
        after = panel.get("after", False)
        heading_options = dict(panel.get("heading_options") or {})
        title_options = dict(panel.get("title_options") or {})
        footer_options = dict(panel.get("footer_options") or {})
        before_options = dict(panel.get("before_options") or {})
        after_options = dict(panel.get("after_options") or {})
        panel_heading = panel_before = panel_after = panel_footer = Markup("")

        if cfg.panel_css_prefix:
            html.init_css(options, cfg.panel_css_prefix + panel_type)
        else:
            html.add_css_class(options, self.css(BS_PANEL))
            html.add_css_class(options, ("border-" if bs4 else "panel-") + panel_type)
        if after is False and footer is False:
            html.add_css_class(self.container, CSS_FLAT_BORDER)
        title_tag = title_options.pop("tag", "h5" if bs4 else "h3")
        html.init_css(title_options, "m-0" if bs4 else self.css(BS_PANEL_TITLE))
        title = html.tag(title_tag, Markup(heading) if heading else "", title_options)
        if heading is not False:
            color = ""
            if bs4:
                color = " bg-light" if panel_type == TYPE_DEFAULT else " text-white bg-" + panel_type
            html.init_css(heading_options, self.css(BS_PANEL_HEADING) + color)
            panel_heading = html.tag(
                "div",
                html.replace_tokens(cfg.panel_heading_template, {"{title}": title, "{buttons}": buttons}),
                heading_options,
            )
        if footer is not False:
            html.init_css(footer_options, self.css(BS_PANEL_FOOTER))
            panel_footer = html.tag("div", Markup(footer), footer_options)
        if before is not False:
            html.init_css(before_options, CSS_PANEL_BEFORE)
            alert_block = Markup("") if cfg.hide_alerts else self.render_alert_block() + Markup("\n")
            panel_before = html.tag("div", alert_block + Markup(before), before_options)
        if after is not False:
            html.init_css(after_options, CSS_PANEL_AFTER)
            panel_after = html.tag("div", Markup(after), after_options)
        out = html.replace_tokens(
            cfg.panel_template,
            {
                "{panelHeading}": panel_heading,
                "{type}": panel_type,
                "{items}": items,
                "{panelFooter}": panel_footer,
                "{panelBefore}": panel_before,
                "{panelAfter}": panel_after,
                "{title}": title,
                "{buttons}": buttons,
            },
        )
        return html.tag("div", out, options)

    def alert_template(self) -> Markup:
        """Alert markup with ``{class}`` and ``{content}`` tokens."""
        widget_options = self.config.copy_of("alert_widget_options")
        close = widget_options.get("close_button")
        if not close:
            button = Markup(
                '<button type="button" class="close" data-dismiss="alert" aria-hidden="true">&times;</button>'
            )
        else:
            close = dict(close)
            tag_name = close.pop("tag", "button")
            label = Markup(close.pop("label", "&times;"))
            if tag_name == "button":
                close.setdefault("type", "button")
            button = html.tag(tag_name, label, close)
        options = dict(widget_options.get("options") or {})
        css = "{class} fade " + self.css(BS_SHOW)
        options["class"] = "{0} {1}".format(options["class"], css) if options.get("class") else css
        options.setdefault("role", "alert")
        return html.tag("div", button + Markup("{content}"), options)

    def render_alert_block(self) -> Markup:
        """
        Renders the pending flash messages (and the error summary when
        ``show_error_summary`` is set) as bootstrap alerts.
        """
        flashes = dict(self.flash_messages() or {})
        if self.config.show_error_summary and self.form is not None and has_errors(self.model):
            flashes[ALERT_ERROR] = self.form.error_summary(self.model)
        options = dict(self.alert_container_options)
        if not flashes:
            html.add_css_style(options, "display:none")
        template = self.alert_template()
        alerts = []
        for category, message in flashes.items():
            if category not in self.alert_message_settings:
                log.warning(LOGMSG_WAR_ALERT_SKIPPED.format(category))
                continue
            alerts.append(
                html.replace_tokens(
                    template,
                    {
                        "{class}": " ".join(self.alert_message_settings[category]),
                        "{content}": message,
                    },
                )
            )
        body = Markup("").join(Markup("\n") + alert for alert in alerts)
        return html.tag("div", body + Markup("\n"), options)

    def render_buttons(self, mode: int = 1) -> Markup:
        template = self.config.buttons1 if mode == 1 else self.config.buttons2
        return html.replace_tokens(
            template, {"{" + kind + "}": self.render_button(kind) for kind in BUTTON_KINDS}
        )

    def render_button(self, kind: str) -> Markup:
        if not self.config.enable_edit_mode or kind not in BUTTON_ICONS:
            return Markup("")
        icon_bs3, icon_bs4 = BUTTON_ICONS[kind]
        return self.get_default_button(kind, icon_bs3, icon_bs4, BUTTON_TITLES[kind])

    def get_default_button(self, kind: str, icon_bs3: str, icon_bs4: str, title: Any) -> Markup:
        options = self.config.copy_of(kind + "_options")
        if self.bs_version == 4:
            css = ICON_PREFIX_BS4 + icon_bs4
        else:
            css = ICON_PREFIX_BS3 + icon_bs3
        label = options.pop("label", None)
        label = Markup(label) if label is not None else Markup('<i class="{0}"></i>').format(css)
        if not options.get("class"):
            options["class"] = CSS_ACTION_BUTTON
        html.add_css_class(options, "dv-btn-" + kind)
        options = dict({"title": title}, **options)
        if self.config.tooltips:
            options["data-toggle"] = "tooltip"
            options["data-container"] = "body"
        if kind == BUTTON_RESET:
            return html.reset_button(label, options)
        if kind == BUTTON_SAVE:
            return html.submit_button(label, options)
        if kind == BUTTON_DELETE:
            url = options.pop("url", "#")
            for key in ("params", "ajax_settings", "confirm", "show_error_stack"):
                options.pop(key, None)
            return html.a(label, url, options)
        options["type"] = "button"
        return html.button(label, options)

    def plugin_options(self) -> Dict[str, Any]:
        """Options passed to the ``detailView`` client plugin."""
        delete_options = self.config.delete_options
        options = {
            "fadeDelay": self.config.fade_delay,
            "alertTemplate": str(self.alert_template()),
            "alertMessageSettings": {
                key: " ".join(css) for key, css in self.alert_message_settings.items()
            },
            "deleteParams": delete_options.get("params", {}),
            "deleteAjaxSettings": delete_options.get("ajax_settings", {}),
            "deleteConfirm": str(
                delete_options.get("confirm", lazy_gettext("Are you sure you want to delete this item?"))
            ),
            "deleteErrorMessage": str(
                delete_options.get("error_message", lazy_gettext("The record could not be deleted."))
            ),
            "showErrorStack": bool(delete_options.get("show_error_stack", False)),
        }
        if self.config.enable_edit_mode:
            options["mode"] = self.mode
        return options


def detail_view(model: Any = None, attributes: Optional[Sequence[Any]] = None, **options) -> Markup:
    """Renders a :class:`DetailView` in one call, also exposed to Jinja."""
    return DetailView(model=model, attributes=attributes, **options)()


__all__ = ["DetailView", "RenderTemplateWidget", "detail_view", "pending_flash_messages"]
