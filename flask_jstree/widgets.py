import itertools
import logging
from collections import namedtuple

from flask import current_app, has_app_context
from markupsafe import Markup

from .const import (
    CONFIG_MULTI_SELECT,
    CONFIG_PLUGINS,
    CONFIG_TRANSLATION_CATEGORY,
    CONFIG_TREE_TYPE,
    CONFIG_TYPES,
    DEFAULT_PLUGINS,
    DEFAULT_TRANSLATION_CATEGORY,
    DEFAULT_TYPES,
    DOUBLE_CLICK_EVENT,
    TREE_TYPE_ADJACENCY,
    TREE_TYPES,
)
from .exceptions import ConfigurationError
from .menu import ContextMenuBuilder
from .scripts import MutationScriptGenerator
from .templating import render_template
from .utils import (
    dumps_js,
    js_identifier,
    JsExpression,
    merge_options,
    resolve_route,
    validate_route,
)


log = logging.getLogger(__name__)

_widget_ids = itertools.count()

WidgetOutput = namedtuple("WidgetOutput", ["markup", "script"])


class RenderTemplateWidget(object):
    """
    Base template for every widget
    Enables the possibility of rendering a template
     inside a template with run time options
    """

    template = "jstree/widget.html"
    template_args = None

    def __init__(self, **kwargs):
        self.template_args = kwargs

    def __call__(self, **kwargs):
        args = self.template_args.copy()
        args.update(kwargs)
        return Markup(render_template(self.template, **args))


class TreeWidget(RenderTemplateWidget):
    """
    jsTree widget bound to JSON endpoints.

    Renders an empty container and the script that turns it into a
    jsTree, loading nodes from ``tree_data_route`` and sending moves to
    ``change_parent_action`` and ``reorder_action``::

        tree = TreeWidget(
            tree_data_route=("CategoryApi.tree",),
            change_parent_action=("CategoryApi.change_parent",),
            context_menu_items={
                "edit": {"label": "Edit", "action": JsExpression("edit")},
            },
        )
        tree()

    Options left to ``None`` are read from the ``JSTREE_*`` keys of
    the current app config, or fall back to the package defaults.
    """

    init_template = "jstree/init.js"
    menu_builder_class = ContextMenuBuilder
    script_generator_class = MutationScriptGenerator

    def __init__(
        self,
        tree_data_route=None,
        tree_type=None,
        plugins=None,
        types=None,
        context_menu_items=None,
        options=None,
        menu_labels_translation_category=None,
        double_click_action=False,
        change_parent_action=False,
        reorder_action=False,
        multi_select=None,
        widget_id=None,
        translator=None,
        url_resolver=None,
        **kwargs
    ):
        """
        :param tree_data_route: route returning the JSON children of the
            node which id is given as ``id``. A literal URL, an
            ``(endpoint, values)`` tuple or an ``{"endpoint": ...}`` dict
        :param tree_type: ``adjacency`` (default) or ``nested-set``
        :param plugins: enabled jsTree plugins
        :param types: configuration of the jsTree types plugin
        :param context_menu_items: mapping or sequence of context menu
            items, see :class:`~flask_jstree.menu.ContextMenuItem`
        :param options: raw jsTree options, merged last
        :param menu_labels_translation_category: Flask-Babel domain of
            the menu labels, ``False`` disables translation
        :param double_click_action: javascript callback called with the
            double clicked node, or ``False``
        :param change_parent_action: route called when a node gets a
            new parent (adjacency trees) or ``False``
        :param reorder_action: route called to reorder nodes or ``False``
        :param multi_select: allow selecting more than one node
        :param widget_id: id of the container element
        :param translator: ``(category, label) -> label`` callable,
            Flask-Babel is used when not given
        :param url_resolver: ``url_for`` compatible callable
        """
        super(TreeWidget, self).__init__(**kwargs)
        self.tree_data_route = tree_data_route
        self.tree_type = tree_type
        self.plugins = plugins
        self.types = types
        self.context_menu_items = context_menu_items or {}
        self.options = options or {}
        self.menu_labels_translation_category = menu_labels_translation_category
        self.double_click_action = double_click_action
        self.change_parent_action = change_parent_action
        self.reorder_action = reorder_action
        self.multi_select = multi_select
        self.widget_id = widget_id or "jstree%d" % next(_widget_ids)
        self.url_resolver = url_resolver
        self.menu_builder = self.menu_builder_class(translator=translator)
        self.script_generator = self.script_generator_class()

    @staticmethod
    def _setting(value, config_key, default):
        if value is not None:
            return value
        if has_app_context():
            return current_app.config.get(config_key, default)
        return default

    def get_tree_type(self):
        tree_type = self._setting(self.tree_type, CONFIG_TREE_TYPE, TREE_TYPE_ADJACENCY)
        if tree_type not in TREE_TYPES:
            raise ConfigurationError("Unknown tree type: %r" % (tree_type,))
        return tree_type

    def get_plugins(self):
        return list(self._setting(self.plugins, CONFIG_PLUGINS, DEFAULT_PLUGINS))

    def get_types(self):
        return self._setting(self.types, CONFIG_TYPES, DEFAULT_TYPES)

    def get_translation_category(self):
        return self._setting(
            self.menu_labels_translation_category,
            CONFIG_TRANSLATION_CATEGORY,
            DEFAULT_TRANSLATION_CATEGORY,
        )

    def get_multi_select(self):
        return bool(self._setting(self.multi_select, CONFIG_MULTI_SELECT, False))

    def base_options(self, data_url, plugins):
        return {
            "plugins": plugins,
            "types": self.get_types(),
            "core": {
                "check_callback": True,
                "multiple": self.get_multi_select(),
                "data": {
                    "url": JsExpression(
                        "function (node) { return %s; }" % dumps_js(data_url)
                    ),
                    "data": JsExpression(
                        "function (node) { return {'id': node.id}; }"
                    ),
                    "error": JsExpression(
                        "function (o, textStatus, errorThrown) { alert(o.responseText); }"
                    ),
                },
            },
        }

    def get_options(self, data_url):
        """
        jsTree options: defaults, then the context menu, then
        the ``options`` given to the widget
        """
        plugins = self.get_plugins()
        menu_options = self.menu_builder.build(
            self.context_menu_items,
            translation_category=self.get_translation_category(),
            plugins=plugins,
        )
        return merge_options(
            self.base_options(data_url, plugins), menu_options, self.options
        )

    def assemble(self):
        """
        Builds the container markup and its initialization script.

        :raises ConfigurationError: when ``tree_data_route`` is missing or
            malformed, or the tree type is unknown
        :return: :class:`WidgetOutput`
        """
        if self.tree_data_route is None or self.tree_data_route is False:
            log.error("Tree widget %s has no tree_data_route", self.widget_id)
            raise ConfigurationError(
                "Attribute tree_data_route is required to use TreeWidget."
            )
        try:
            validate_route(self.tree_data_route, name="tree_data_route")
            tree_type = self.get_tree_type()
        except ConfigurationError as e:
            log.error("Tree widget %s: %s", self.widget_id, e)
            raise

        data_url = resolve_route(
            self.tree_data_route, self.url_resolver, name="tree_data_route"
        )
        behavior = self.script_generator.generate(
            tree_type,
            resolve_route(
                self.change_parent_action,
                self.url_resolver,
                name="change_parent_action",
            ),
            resolve_route(
                self.reorder_action, self.url_resolver, name="reorder_action"
            ),
            self.widget_id,
        )
        double_click_action = self.double_click_action
        if double_click_action is False:
            double_click_action = None

        script = render_template(
            self.init_template,
            tree_var=js_identifier(self.widget_id),
            selector="#%s" % self.widget_id,
            options=self.get_options(data_url),
            double_click_event=DOUBLE_CLICK_EVENT,
            double_click_action=double_click_action,
            behavior=behavior.render(),
        )
        markup = Markup('<div id="{}"></div>').format(self.widget_id)
        log.debug("Assembled %s tree widget %s", tree_type, self.widget_id)
        return WidgetOutput(markup, script)

    def __call__(self, **kwargs):
        markup, script = self.assemble()
        return super(TreeWidget, self).__call__(markup=markup, script=script, **kwargs)
