from enum import Enum


# Modes
MODE_VIEW = "view"
MODE_EDIT = "edit"

# Bootstrap contextual types
TYPE_DEFAULT = "default"
TYPE_PRIMARY = "primary"
TYPE_INFO = "info"
TYPE_DANGER = "danger"
TYPE_WARNING = "warning"
TYPE_SUCCESS = "success"
TYPE_ACTIVE = "active"

# Cell alignments
ALIGN_RIGHT = "right"
ALIGN_CENTER = "center"
ALIGN_LEFT = "left"
ALIGN_TOP = "top"
ALIGN_MIDDLE = "middle"
ALIGN_BOTTOM = "bottom"

H_ALIGNMENTS = (ALIGN_LEFT, ALIGN_CENTER, ALIGN_RIGHT)
V_ALIGNMENTS = (ALIGN_TOP, ALIGN_MIDDLE, ALIGN_BOTTOM)


class InputType(str, Enum):
    """
    Edit mode input kinds understood by the detail view.

    The value of each member is the name of the matching
    :class:`~flask_detailview.forms.ActiveField` method.
    """

    STATIC = "static_input"
    HIDDEN = "hidden_input"
    HIDDEN_STATIC = "hidden_static_input"
    TEXT = "text_input"
    TEXTAREA = "textarea"
    PASSWORD = "password_input"
    DROPDOWN_LIST = "drop_down_list"
    LIST_BOX = "list_box"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    CHECKBOX_LIST = "checkbox_list"
    RADIO_LIST = "radio_list"
    CHECKBOX_BUTTON_GROUP = "checkbox_button_group"
    RADIO_BUTTON_GROUP = "radio_button_group"
    FILE = "file_input"
    HTML5 = "input"
    WIDGET = "widget"

    def __str__(self):
        return self.value


# kinds rendered as field(items, options)
LIST_INPUTS = frozenset(
    (
        InputType.LIST_BOX,
        InputType.DROPDOWN_LIST,
        InputType.CHECKBOX_LIST,
        InputType.RADIO_LIST,
        InputType.CHECKBOX_BUTTON_GROUP,
        InputType.RADIO_BUTTON_GROUP,
    )
)

# Button placeholders
BUTTON_VIEW = "view"
BUTTON_UPDATE = "update"
BUTTON_DELETE = "delete"
BUTTON_SAVE = "save"
BUTTON_RESET = "reset"

BUTTON_KINDS = (BUTTON_VIEW, BUTTON_UPDATE, BUTTON_DELETE, BUTTON_SAVE, BUTTON_RESET)

# icon suffixes per bootstrap version: (bs3 glyphicon, bs4 font awesome)
BUTTON_ICONS = {
    BUTTON_VIEW: ("eye-open", "eye"),
    BUTTON_UPDATE: ("pencil", "pencil-alt"),
    BUTTON_DELETE: ("trash", "trash-alt"),
    BUTTON_SAVE: ("floppy-disk", "save"),
    BUTTON_RESET: ("ban-circle", "ban"),
}

ICON_PREFIX_BS3 = "glyphicon glyphicon-"
ICON_PREFIX_BS4 = "fas fa-"

# Flash/alert categories
ALERT_ERROR = "dv-detail-error"
ALERT_SUCCESS = "dv-detail-success"
ALERT_INFO = "dv-detail-info"
ALERT_WARNING = "dv-detail-warning"

DEFAULT_ALERT_MESSAGE_SETTINGS = {
    ALERT_ERROR: ["alert", "alert-danger"],
    ALERT_SUCCESS: ["alert", "alert-success"],
    ALERT_INFO: ["alert", "alert-info"],
    ALERT_WARNING: ["alert", "alert-warning"],
}

# CSS markers shared with the client plugin
CSS_VIEW_ATTRIBUTE = "dv-attribute"
CSS_EDIT_ATTRIBUTE = "dv-form-attribute"
CSS_VIEW_MODE = "dv-view-mode"
CSS_EDIT_MODE = "dv-edit-mode"
CSS_VIEW_HIDDEN = "dv-view-hidden"
CSS_EDIT_HIDDEN = "dv-edit-hidden"
CSS_BUTTONS_1 = "dv-buttons-1"
CSS_BUTTONS_2 = "dv-buttons-2"
CSS_CHILD_TABLE = "dv-child-table"
CSS_CHILD_TABLE_ROW = "dv-child-table-row"
CSS_CHILD_TABLE_CELL = "dv-child-table-cell"
CSS_ALERT_CONTAINER = "dv-alert-container"
CSS_DETAIL_VIEW = "dv-detail-view"
CSS_FLAT_BORDER = "dv-flat-b"
CSS_CONTAINER_BS4 = "dv-container-bs4"
CSS_PANEL_BEFORE = "dv-panel-before"
CSS_PANEL_AFTER = "dv-panel-after"
CSS_ACTION_BUTTON = "dv-action-btn"

# Bootstrap version dependent classes
BS_PANEL = "panel"
BS_PANEL_HEADING = "panel_heading"
BS_PANEL_TITLE = "panel_title"
BS_PANEL_BODY = "panel_body"
BS_PANEL_FOOTER = "panel_footer"
BS_TABLE_CONDENSED = "table_condensed"
BS_SHOW = "show"

BS_CSS = {
    3: {
        BS_PANEL: "panel",
        BS_PANEL_HEADING: "panel-heading",
        BS_PANEL_TITLE: "panel-title",
        BS_PANEL_BODY: "panel-body",
        BS_PANEL_FOOTER: "panel-footer",
        BS_TABLE_CONDENSED: "table-condensed",
        BS_SHOW: "in",
    },
    4: {
        BS_PANEL: "card",
        BS_PANEL_HEADING: "card-header",
        BS_PANEL_TITLE: "card-title",
        BS_PANEL_BODY: "card-body",
        BS_PANEL_FOOTER: "card-footer",
        BS_TABLE_CONDENSED: "table-sm",
        BS_SHOW: "show",
    },
}

DEFAULT_PANEL_TEMPLATE = """{panelHeading}
{panelBefore}
{items}
{panelAfter}
{panelFooter}"""

DEFAULT_PANEL_HEADING_TEMPLATE = """{buttons}
{title}
<div class="clearfix"></div>"""

DEFAULT_FIELD_TEMPLATE = "{input}\n{error}\n{hint}"

# Log messages
LOGMSG_ERR_CONFIG = "Detail view configuration error: {0}"
LOGMSG_DEB_NORMALIZED = "Normalized {0} attribute(s) for {1}"
LOGMSG_DEB_MODE_FORCED = "Model has validation errors, forcing edit mode"
LOGMSG_WAR_ALERT_SKIPPED = "Skipping flash message with unknown category {0}"
