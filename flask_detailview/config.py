"""
Detail view configuration.

Options are validated by :class:`DetailViewConfigSchema` and loaded into a
frozen :class:`DetailViewConfig`. Values are merged from, lowest first, the
schema defaults, ``app.config["DETAIL_VIEW_DEFAULTS"]`` when an application
context is active, and the options given to the widget.
"""

import copy
import dataclasses
import logging
from typing import Any, Dict, Optional

from flask import current_app, has_app_context
from marshmallow import RAISE, Schema, ValidationError, fields, post_load, validate

from .const import (
    ALIGN_MIDDLE,
    ALIGN_RIGHT,
    DEFAULT_PANEL_HEADING_TEMPLATE,
    DEFAULT_PANEL_TEMPLATE,
    H_ALIGNMENTS,
    MODE_EDIT,
    MODE_VIEW,
    V_ALIGNMENTS,
)
from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

APP_DEFAULTS_KEY = "DETAIL_VIEW_DEFAULTS"


def _options(**default):
    return fields.Dict(keys=fields.Str(), load_default=lambda: copy.deepcopy(default))


@dataclasses.dataclass(frozen=True)
class DetailViewConfig:
    mode: str
    fade_delay: int
    h_align: str
    v_align: str
    row_options: Dict[str, Any]
    label_col_options: Dict[str, Any]
    value_col_options: Dict[str, Any]
    hide_alerts: bool
    show_error_summary: bool
    not_set_if_empty: bool
    stringify_arrays: bool
    alert_container_options: Dict[str, Any]
    alert_widget_options: Dict[str, Any]
    alert_message_settings: Dict[str, Any]
    options: Dict[str, Any]
    bootstrap: bool
    bs_version: int
    bordered: bool
    striped: bool
    condensed: bool
    responsive: bool
    hover: bool
    enable_edit_mode: bool
    hide_if_empty: bool
    tooltips: bool
    form_options: Dict[str, Any]
    panel: Dict[str, Any]
    panel_css_prefix: Optional[str]
    panel_template: str
    panel_heading_template: str
    main_template: str
    button_container: Dict[str, Any]
    buttons1: str
    buttons2: str
    view_attribute_container: Dict[str, Any]
    edit_attribute_container: Dict[str, Any]
    view_buttons_container: Dict[str, Any]
    edit_buttons_container: Dict[str, Any]
    view_options: Dict[str, Any]
    update_options: Dict[str, Any]
    reset_options: Dict[str, Any]
    delete_options: Dict[str, Any]
    save_options: Dict[str, Any]
    container: Dict[str, Any]
    table_container: Dict[str, Any]

    def copy_of(self, name: str) -> Any:
        """A deep copy of an option, safe to mutate while rendering."""
        return copy.deepcopy(getattr(self, name))


class DetailViewConfigSchema(Schema):
    class Meta:
        unknown = RAISE

    mode = fields.Str(load_default=MODE_VIEW, validate=validate.OneOf([MODE_VIEW, MODE_EDIT]))
    fade_delay = fields.Int(load_default=800, validate=validate.Range(min=0))
    h_align = fields.Str(load_default=ALIGN_RIGHT, validate=validate.OneOf(H_ALIGNMENTS))
    v_align = fields.Str(load_default=ALIGN_MIDDLE, validate=validate.OneOf(V_ALIGNMENTS))
    row_options = _options()
    label_col_options = _options(style="width: 20%")
    value_col_options = _options()
    hide_alerts = fields.Bool(load_default=False)
    show_error_summary = fields.Bool(load_default=False)
    not_set_if_empty = fields.Bool(load_default=False)
    stringify_arrays = fields.Bool(load_default=True)
    alert_container_options = _options()
    alert_widget_options = _options()
    alert_message_settings = _options()
    options = _options()
    bootstrap = fields.Bool(load_default=True)
    bs_version = fields.Int(load_default=3, validate=validate.OneOf([3, 4]))
    bordered = fields.Bool(load_default=True)
    striped = fields.Bool(load_default=True)
    condensed = fields.Bool(load_default=False)
    responsive = fields.Bool(load_default=True)
    hover = fields.Bool(load_default=False)
    enable_edit_mode = fields.Bool(load_default=True)
    hide_if_empty = fields.Bool(load_default=False)
    tooltips = fields.Bool(load_default=True)
    form_options = _options()
    panel = _options()
    panel_css_prefix = fields.Str(load_default=None, allow_none=True)
    panel_template = fields.Str(load_default=DEFAULT_PANEL_TEMPLATE)
    panel_heading_template = fields.Str(load_default=DEFAULT_PANEL_HEADING_TEMPLATE)
    main_template = fields.Str(load_default="{detail}")
    button_container = _options(**{"class": "float-right pull-right"})
    buttons1 = fields.Str(load_default="{update} {delete}")
    buttons2 = fields.Str(load_default="{view} {reset} {save}")
    view_attribute_container = _options()
    edit_attribute_container = _options()
    view_buttons_container = _options()
    edit_buttons_container = _options()
    view_options = _options()
    update_options = _options()
    reset_options = _options()
    delete_options = _options()
    save_options = _options()
    container = _options()
    table_container = _options()

    @post_load
    def make_config(self, data, **kwargs):
        return DetailViewConfig(**data)


def app_defaults() -> Dict[str, Any]:
    if not has_app_context():
        return {}
    return dict(current_app.config.get(APP_DEFAULTS_KEY) or {})


def load_config(options: Optional[Dict[str, Any]] = None) -> DetailViewConfig:
    """
    Builds the configuration of one render.

    Raises :class:`ConfigurationError` for unknown option names or invalid
    values.
    """
    data = app_defaults()
    data.update(options or {})
    if data.get("panel") is False:
        data["panel"] = {}
    try:
        return DetailViewConfigSchema().load(data)
    except ValidationError as e:
        raise ConfigurationError("Invalid detail view options: {0}".format(e.messages))


