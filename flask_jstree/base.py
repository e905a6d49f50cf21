import logging

from flask import current_app

from .assets import DEFAULT_JQUERY_URL, DEFAULT_JS_URL, DEFAULT_THEME, JsTreeAssets
from .const import (
    CONFIG_CSS_URL,
    CONFIG_JQUERY_URL,
    CONFIG_JS_URL,
    CONFIG_MULTI_SELECT,
    CONFIG_PLUGINS,
    CONFIG_THEME,
    CONFIG_TRANSLATION_CATEGORY,
    CONFIG_TREE_TYPE,
    CONFIG_TYPES,
    DEFAULT_PLUGINS,
    DEFAULT_TRANSLATION_CATEGORY,
    DEFAULT_TYPES,
    TREE_TYPE_ADJACENCY,
)
from .widgets import TreeWidget


log = logging.getLogger(__name__)


class JsTree(object):
    """
    Flask extension registering the tree widget defaults and
    template globals::

        app = Flask(__name__)
        JsTree(app)

    Templates can then use ``{{ jstree_assets() }}`` once per page and
    ``{{ jstree_widget(tree_data_route=...)() }}`` for each tree.
    """

    widget_class = TreeWidget

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault(CONFIG_PLUGINS, list(DEFAULT_PLUGINS))
        app.config.setdefault(CONFIG_TYPES, dict(DEFAULT_TYPES))
        app.config.setdefault(
            CONFIG_TRANSLATION_CATEGORY, DEFAULT_TRANSLATION_CATEGORY
        )
        app.config.setdefault(CONFIG_TREE_TYPE, TREE_TYPE_ADJACENCY)
        app.config.setdefault(CONFIG_MULTI_SELECT, False)
        # Assets
        app.config.setdefault(CONFIG_THEME, DEFAULT_THEME)
        app.config.setdefault(CONFIG_JQUERY_URL, DEFAULT_JQUERY_URL)
        app.config.setdefault(CONFIG_JS_URL, DEFAULT_JS_URL)
        app.config.setdefault(CONFIG_CSS_URL, None)

        app.extensions["jstree"] = self
        app.jinja_env.globals["jstree_widget"] = self.widget_class
        app.jinja_env.globals["jstree_assets"] = self.render_assets
        log.debug("Registered JsTree on %s", app.name)

    @staticmethod
    def render_assets():
        return JsTreeAssets.from_config(current_app.config)()
