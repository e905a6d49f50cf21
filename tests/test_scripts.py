"""
Tests for the move bindings of adjacency list and nested set trees.
"""

import unittest

import pytest

from flask_jstree.const import TREE_TYPE_ADJACENCY, TREE_TYPE_NESTED_SET
from flask_jstree.exceptions import ConfigurationError
from flask_jstree.scripts import MutationScriptGenerator


NESTED_SET_FIELDS = [
    "node_id",
    "parent",
    "position",
    "old_parent",
    "old_position",
    "is_multi",
    "siblings",
]


class TestAdjacencyBindings(unittest.TestCase):
    def setUp(self):
        self.generator = MutationScriptGenerator()

    def test_both_endpoints_bind_independently(self):
        script = self.generator.generate(
            TREE_TYPE_ADJACENCY, "/parent", "/reorder", "tree1"
        )
        change_parent, reorder = script.bindings
        self.assertEqual(change_parent.name, "change_parent")
        self.assertEqual(change_parent.method, "get")
        self.assertEqual(change_parent.url, "/parent")
        self.assertEqual(change_parent.payload_fields, ["id", "parent_id"])
        self.assertEqual(change_parent.payload["id"], "data.node.id")
        self.assertEqual(change_parent.payload["parent_id"], "data.parent")
        self.assertEqual(reorder.name, "reorder")
        self.assertEqual(reorder.method, "post")
        self.assertEqual(reorder.url, "/reorder")
        self.assertEqual(reorder.payload_fields, ["order"])
        for binding in script:
            self.assertEqual(binding.event, "move_node.jstree")

    def test_rendered_requests(self):
        js = self.generator.generate(
            TREE_TYPE_ADJACENCY, "/parent", "/reorder", "tree1"
        ).render()
        self.assertEqual(js.count("jsTree_tree1.on('move_node.jstree'"), 2)
        self.assertIn(
            '$.get("/parent", {"id": data.node.id, "parent_id": data.parent}, "json")',
            js,
        )
        self.assertIn('$.post("/reorder", {"order": order}, "json")', js)
        self.assertIn("$this.find('.jstree-node').each(function (i, node) {", js)
        self.assertIn("order[node.id] = i;", js)
        # refresh after success and failure alike
        self.assertEqual(js.count(".always(function () {"), 2)
        self.assertEqual(js.count("$this.jstree('refresh');"), 2)
        self.assertEqual(js.count("alert(response.error);"), 2)
        self.assertEqual(js.count("alert(o.responseText);"), 2)

    def test_reorder_only(self):
        script = self.generator.generate(TREE_TYPE_ADJACENCY, None, "/reorder", "t")
        self.assertEqual([b.name for b in script], ["reorder"])

    def test_change_parent_only(self):
        script = self.generator.generate(TREE_TYPE_ADJACENCY, "/parent", None, "t")
        self.assertEqual([b.name for b in script], ["change_parent"])

    def test_no_endpoints(self):
        script = self.generator.generate(TREE_TYPE_ADJACENCY, None, None, "t")
        self.assertEqual(len(script), 0)
        self.assertEqual(script.render(), "")


class TestNestedSetBindings(unittest.TestCase):
    def setUp(self):
        self.generator = MutationScriptGenerator()

    def test_change_parent_endpoint_gets_full_payload(self):
        script = self.generator.generate(TREE_TYPE_NESTED_SET, "/parent", None, "t")
        (binding,) = script.bindings
        self.assertEqual(binding.url, "/parent")
        self.assertEqual(binding.method, "post")
        self.assertEqual(binding.payload_fields, NESTED_SET_FIELDS)

    def test_reorder_endpoint_takes_priority(self):
        script = self.generator.generate(
            TREE_TYPE_NESTED_SET, "/parent", "/reorder", "t"
        )
        (binding,) = script.bindings
        self.assertEqual(binding.url, "/reorder")

    def test_no_endpoints(self):
        script = self.generator.generate(TREE_TYPE_NESTED_SET, None, None, "t")
        self.assertEqual(len(script), 0)

    def test_rendered_request(self):
        js = self.generator.generate(
            TREE_TYPE_NESTED_SET, None, "/move", "tree2"
        ).render()
        self.assertEqual(js.count("move_node.jstree"), 1)
        self.assertIn("var parent = $this.jstree(true).get_node(data.parent);", js)
        self.assertIn("var siblings = (parent && parent.children) || [];", js)
        self.assertIn('"siblings": siblings', js)
        self.assertIn('"is_multi": data.is_multi', js)
        self.assertIn("$this.jstree('refresh');", js)
        self.assertTrue(js.rstrip().endswith("});"))


def test_unknown_tree_type():
    with pytest.raises(ConfigurationError):
        MutationScriptGenerator().generate("closure-table", "/a", "/b", "t")
