"""
Tests for the context menu fragment builder.
"""

import unittest
from unittest.mock import Mock, patch

from flask import Flask

from flask_jstree.menu import (
    _get_domain,
    babel_translator,
    ContextMenuBuilder,
    ContextMenuItem,
)
from flask_jstree.utils import dumps_js, JsExpression


def french(category, text):
    return {("app", "Delete"): "Supprimer", ("app", "Edit"): "Modifier"}[
        (category, text)
    ]


class TestContextMenuBuilder(unittest.TestCase):
    def setUp(self):
        self.builder = ContextMenuBuilder(translator=french)

    def test_no_items_no_fragment(self):
        self.assertEqual(self.builder.build({}, "app", ["dnd"]), {})
        self.assertEqual(self.builder.build([], "app", ["dnd"]), {})
        self.assertEqual(self.builder.build(None, "app", ["dnd"]), {})

    def test_adds_missing_plugin(self):
        fragment = self.builder.build(
            {"delete": {"label": "Delete"}}, False, ["dnd", "types"]
        )
        self.assertEqual(fragment["plugins"], ["dnd", "types", "contextmenu"])

    def test_keeps_enabled_plugin(self):
        fragment = self.builder.build(
            {"delete": {"label": "Delete"}}, False, ["contextmenu", "dnd"]
        )
        self.assertNotIn("plugins", fragment)

    def test_translates_labels(self):
        fragment = self.builder.build({"delete": {"label": "Delete"}}, "app", [])
        self.assertEqual(
            fragment["contextmenu"]["items"]["delete"]["label"], "Supprimer"
        )

    def test_translation_disabled(self):
        translator = Mock()
        builder = ContextMenuBuilder(translator=translator)
        for category in (False, None):
            fragment = builder.build({"delete": {"label": "Delete"}}, category, [])
            self.assertEqual(
                fragment["contextmenu"]["items"]["delete"]["label"], "Delete"
            )
        translator.assert_not_called()

    def test_translation_failure_falls_back(self):
        builder = ContextMenuBuilder(translator=Mock(side_effect=RuntimeError("no")))
        with self.assertLogs("flask_jstree.menu", level="WARNING"):
            fragment = builder.build({"delete": {"label": "Delete"}}, "app", [])
        self.assertEqual(fragment["contextmenu"]["items"]["delete"]["label"], "Delete")

    def test_keeps_order_and_keys(self):
        items = {
            "zeta": {"label": "Edit"},
            "alpha": {"label": "Delete"},
            "10": {"label": "Edit"},
        }
        fragment = self.builder.build(items, "app", [])
        self.assertEqual(list(fragment["contextmenu"]["items"]), ["zeta", "alpha", "10"])

    def test_sequence_items_keyed_by_index(self):
        fragment = self.builder.build(
            [{"label": "Edit"}, ContextMenuItem("Delete", key="remove")], "app", []
        )
        self.assertEqual(
            fragment["contextmenu"]["items"],
            {"0": {"label": "Modifier"}, "remove": {"label": "Supprimer"}},
        )

    def test_dict_str_action_is_javascript(self):
        fragment = self.builder.build(
            {"open": {"label": "Edit", "action": "function (data) {}"}}, False, []
        )
        action = fragment["contextmenu"]["items"]["open"]["action"]
        self.assertIsInstance(action, JsExpression)
        self.assertIn('"action": function (data) {}', dumps_js(fragment))

    def test_items_are_not_mutated(self):
        item = {"label": "Delete"}
        self.builder.build({"delete": item}, "app", [])
        self.assertEqual(item, {"label": "Delete"})

    def test_context_menu_item(self):
        item = ContextMenuItem(
            "Delete", action="function (data) {}", icon="fa fa-trash"
        ).to_dict()
        self.assertEqual(item["label"], "Delete")
        self.assertEqual(item["icon"], "fa fa-trash")
        self.assertIsInstance(item["action"], JsExpression)


class TestBabelTranslator(unittest.TestCase):
    def test_uses_category_domain(self):
        domain = Mock()
        domain.gettext.return_value = "Supprimer"
        with patch("flask_jstree.menu._get_domain", return_value=domain) as get:
            self.assertEqual(babel_translator("app", "Delete"), "Supprimer")
        get.assert_called_once_with("app")
        domain.gettext.assert_called_once_with("Delete")

    def test_default_builder_outside_app_context(self):
        fragment = ContextMenuBuilder().build({"delete": {"label": "Delete"}}, "app", [])
        self.assertEqual(fragment["contextmenu"]["items"]["delete"]["label"], "Delete")

    def test_domains_cached_per_app(self):
        first, second = Flask("first"), Flask("second")
        with first.app_context():
            domain = _get_domain("app")
            self.assertIs(_get_domain("app"), domain)
        with second.app_context():
            self.assertIsNot(_get_domain("app"), domain)
        self.assertIs(first.extensions["jstree_babel_domains"]["app"], domain)
