"""
Server side of the delete request sent by the ``detailView`` plugin.

The plugin posts ``delete_options["params"]`` to the delete url and expects::

    {"success": true, "messages": {"dv-detail-success": "Record deleted."}}

Message keys are alert categories, see ``alert_message_settings``.
"""

from typing import Any, Dict, Optional

from flask import jsonify

from .const import ALERT_ERROR, ALERT_SUCCESS


def delete_response(success: bool, messages: Optional[Dict[str, Any]] = None, status: int = 200):
    """
    Builds the JSON answer of a delete request::

        @app.route("/post/<int:pk>/delete", methods=["POST"])
        def delete_post(pk):
            ...
            return delete_response(True, {ALERT_SUCCESS: "Post deleted."})

    :param success: Whether the record was deleted
    :param messages: ``{category: message}``, a plain string is filed under
        the success or error category
    :param status: HTTP status code
    """
    if messages is None:
        messages = {}
    elif isinstance(messages, str):
        messages = {ALERT_SUCCESS if success else ALERT_ERROR: messages}
    payload = {
        "success": bool(success),
        "messages": {key: str(value) for key, value in messages.items()},
    }
    return jsonify(payload), status
