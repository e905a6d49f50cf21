import logging
from collections.abc import Mapping

from flask import current_app, has_app_context
from flask_babel import Domain

from .const import CONTEXTMENU_PLUGIN
from .utils import JsExpression


log = logging.getLogger(__name__)


def _get_domain(category):
    if not has_app_context():
        return Domain(domain=category)
    # Domain caches catalogs on the instance, keep one set per app
    domains = current_app.extensions.setdefault("jstree_babel_domains", {})
    if category not in domains:
        domains[category] = Domain(domain=category)
    return domains[category]


def babel_translator(category, text):
    """
    Default label translator, looks ``text`` up in the Flask-Babel
    domain named after ``category``.
    """
    return _get_domain(category).gettext(text)


class ContextMenuItem(object):
    """
    A jsTree context menu entry.

    :param label: the label, translated when the menu is built
    :param action: javascript callback receiving the jsTree item data,
        a ``str`` is wrapped in a :class:`JsExpression`
    :param key: key of the entry in the menu, optional when items are
        given as a mapping
    :param attrs: any other jsTree item attribute (``icon``,
        ``separator_before``, ``_disabled``...)
    """

    def __init__(self, label, action=None, key=None, **attrs):
        self.label = label
        self.action = action
        self.key = key
        self.attrs = attrs

    def to_dict(self):
        item = dict(self.attrs)
        item["label"] = self.label
        if self.action is not None:
            item["action"] = (
                self.action
                if isinstance(self.action, JsExpression)
                else JsExpression(self.action)
            )
        return item

    def __repr__(self):
        return "<ContextMenuItem %s: %s>" % (self.key, self.label)


class ContextMenuBuilder(object):
    """
    Builds the jsTree ``contextmenu`` options fragment from menu items.
    """

    def __init__(self, translator=None):
        self.translator = translator or babel_translator

    def translate(self, category, label):
        """
        Translates a label, never raises. When the lookup fails the
        raw label is used.
        """
        try:
            return self.translator(category, label)
        except Exception as e:
            log.warning(
                "Could not translate context menu label %r (%s): %s",
                label,
                category,
                e,
            )
            return label

    @staticmethod
    def _iter_items(items):
        if isinstance(items, Mapping):
            for key, item in items.items():
                yield str(key), item
            return
        for index, item in enumerate(items):
            key = getattr(item, "key", None)
            yield str(index) if key is None else str(key), item

    def build(self, items, translation_category=False, plugins=None):
        """
        :param items: mapping of key to item, or a sequence of items.
            Items are dicts or :class:`ContextMenuItem`, a ``str`` action is
            taken as javascript
        :param translation_category: Flask-Babel domain used for
            the labels, ``False`` or ``None`` keeps them untouched
        :param plugins: the plugins already enabled on the tree
        :return: options fragment, empty when there are no items
        """
        options = {}
        if not items:
            return options
        plugins = list(plugins or [])
        if CONTEXTMENU_PLUGIN not in plugins:
            options["plugins"] = plugins + [CONTEXTMENU_PLUGIN]

        menu_items = {}
        for key, item in self._iter_items(items):
            if isinstance(item, ContextMenuItem):
                item = item.to_dict()
            else:
                item = dict(item)
                if isinstance(item.get("action"), str) and not isinstance(
                    item["action"], JsExpression
                ):
                    item["action"] = JsExpression(item["action"])
            if translation_category not in (False, None) and "label" in item:
                item["label"] = self.translate(translation_category, item["label"])
            menu_items[key] = item
        options["contextmenu"] = {"items": menu_items}
        return options
