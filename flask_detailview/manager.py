import logging
from typing import Optional

from flask import Blueprint, Flask, url_for
from markupsafe import Markup

from .config import APP_DEFAULTS_KEY
from .widgets import detail_view

log = logging.getLogger(__name__)

LOGMSG_INF_INIT = "Detail view extension initialized for {0}"

ASSETS_CSS = ("css/detail-view.css",)
ASSETS_JS = ("js/detail-view.js",)


class DetailViewManager(object):
    """
    Flask extension serving the detail view assets and exposing the widget
    to templates::

        app = Flask(__name__)
        DetailViewManager(app)

    and in a template::

        {{ detail_view_assets() }}
        {{ detail_view(record, ["title", "body:ntext"], panel={"heading": "Post"}) }}
    """

    def __init__(self, app: Optional[Flask] = None):
        self.app = app
        self.blueprint = None
        if app is not None:
            self.init_app(app)

    def create_blueprint(self) -> Blueprint:
        return Blueprint(
            "detailview",
            __name__,
            static_folder="static/detailview",
            static_url_path="/static/detailview",
        )

    def init_app(self, app: Flask):
        app.config.setdefault(APP_DEFAULTS_KEY, {})
        app.config.setdefault("DETAIL_VIEW_FORMATTER_LOCALE", "en_US")
        self.blueprint = self.create_blueprint()
        app.register_blueprint(self.blueprint)
        app.jinja_env.globals["detail_view"] = detail_view
        app.jinja_env.globals["detail_view_assets"] = self.assets
        app.extensions["detailview"] = self
        log.info(LOGMSG_INF_INIT.format(app.name))

    def assets(self) -> Markup:
        """Link and script tags of the widget assets, jQuery is not included."""
        tags = [
            Markup('<link rel="stylesheet" href="{0}">').format(
                url_for("detailview.static", filename=name)
            )
            for name in ASSETS_CSS
        ]
        tags.extend(
            Markup('<script src="{0}"></script>').format(url_for("detailview.static", filename=name))
            for name in ASSETS_JS
        )
        return Markup("\n").join(tags)
