"""
Client side behaviour bound to jsTree ``move_node`` events.

Bindings are built as plain data (:class:`MoveBinding`) and only turned
into javascript by :meth:`BehaviorScript.render`.
Every binding posts the move to the server, alerts the ``error`` of the
JSON response or the raw response text on transport failure, and always
refreshes the tree afterwards so the server state wins over whatever
jsTree did locally.
"""

import logging

from .const import MOVE_NODE_EVENT, TREE_TYPE_ADJACENCY, TREE_TYPE_NESTED_SET
from .exceptions import ConfigurationError
from .templating import render_template
from .utils import js_identifier, JsExpression


log = logging.getLogger(__name__)


class MoveBinding(object):
    """
    One request sent on a jsTree ``move_node`` event.

    :param name: identifies the binding (``change_parent``, ``reorder``,
        ``move``)
    :param method: jQuery shorthand used for the request, ``get`` or ``post``
    :param url: the endpoint URL
    :param payload: mapping of request parameter to :class:`JsExpression`
        evaluated in the event handler (``data`` holds the event data)
    :param statements: javascript statements run before the request
    """

    template = "jstree/move_binding.js"
    event = MOVE_NODE_EVENT

    def __init__(self, name, method, url, payload, statements=None):
        self.name = name
        self.method = method
        self.url = url
        self.payload = payload
        self.statements = statements or []

    @property
    def payload_fields(self):
        return list(self.payload.keys())

    def render(self, tree_var):
        return render_template(self.template, binding=self, tree_var=tree_var)

    def __repr__(self):
        return "<MoveBinding %s %s %s>" % (self.name, self.method.upper(), self.url)


class BehaviorScript(object):
    """The move bindings of one tree widget"""

    def __init__(self, tree_type, widget_id, bindings=None):
        self.tree_type = tree_type
        self.widget_id = widget_id
        self.bindings = bindings or []

    @property
    def tree_var(self):
        return js_identifier(self.widget_id)

    def render(self):
        return "\n".join(binding.render(self.tree_var) for binding in self.bindings)

    def __iter__(self):
        return iter(self.bindings)

    def __len__(self):
        return len(self.bindings)


class MutationScriptGenerator(object):
    """
    Generates the move bindings for a tree storage model.

    Adjacency list trees get up to two independent bindings, both fired
    by the same move: one changing the parent of the moved node and one
    sending the position of every rendered node. Their requests are not
    ordered in any way.

    Nested set trees get a single binding sending the full move
    description to the reorder endpoint, or to the change parent
    endpoint when there's no reorder one.
    """

    def generate(self, tree_type, change_parent_url, reorder_url, widget_id):
        if tree_type == TREE_TYPE_ADJACENCY:
            bindings = self.adjacency_bindings(change_parent_url, reorder_url)
        elif tree_type == TREE_TYPE_NESTED_SET:
            bindings = self.nested_set_bindings(change_parent_url, reorder_url)
        else:
            raise ConfigurationError("Unknown tree type: %r" % (tree_type,))
        log.debug(
            "Generated %d move bindings for %s tree %s",
            len(bindings),
            tree_type,
            widget_id,
        )
        return BehaviorScript(tree_type, widget_id, bindings)

    def adjacency_bindings(self, change_parent_url, reorder_url):
        bindings = []
        if change_parent_url:
            bindings.append(
                MoveBinding(
                    "change_parent",
                    "get",
                    change_parent_url,
                    {
                        "id": JsExpression("data.node.id"),
                        "parent_id": JsExpression("data.parent"),
                    },
                )
            )
        if reorder_url:
            # positions of all rendered nodes, not only the moved node siblings,
            # so moves across branches renumber unrelated nodes too. Scoped to
            # this tree instead of a page wide $('.jstree-node') scan
            bindings.append(
                MoveBinding(
                    "reorder",
                    "post",
                    reorder_url,
                    {"order": JsExpression("order")},
                    statements=[
                        "var order = {};",
                        "$this.find('.jstree-node').each(function (i, node) {",
                        "    order[node.id] = i;",
                        "});",
                    ],
                )
            )
        return bindings

    def nested_set_bindings(self, change_parent_url, reorder_url):
        url = reorder_url or change_parent_url
        if not url:
            return []
        return [
            MoveBinding(
                "move",
                "post",
                url,
                {
                    "node_id": JsExpression("data.node.id"),
                    "parent": JsExpression("data.parent"),
                    "position": JsExpression("data.position"),
                    "old_parent": JsExpression("data.old_parent"),
                    "old_position": JsExpression("data.old_position"),
                    "is_multi": JsExpression("data.is_multi"),
                    "siblings": JsExpression("siblings"),
                },
                statements=[
                    "var parent = $this.jstree(true).get_node(data.parent);",
                    "var siblings = (parent && parent.children) || [];",
                ],
            )
        ]
