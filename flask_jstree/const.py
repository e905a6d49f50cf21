TREE_TYPE_ADJACENCY = "adjacency"
TREE_TYPE_NESTED_SET = "nested-set"
TREE_TYPES = (TREE_TYPE_ADJACENCY, TREE_TYPE_NESTED_SET)

CONTEXTMENU_PLUGIN = "contextmenu"

DEFAULT_PLUGINS = ["wholerow", "contextmenu", "dnd", "types", "state"]
""" Enabled jsTree plugins, see http://www.jstree.com/plugins/ """

DEFAULT_TYPES = {
    "show": {"icon": "fa fa-file-o"},
    "list": {"icon": "fa fa-list"},
}
""" Configuration for the jsTree types plugin """

DEFAULT_TRANSLATION_CATEGORY = "app"

MOVE_NODE_EVENT = "move_node.jstree"
DOUBLE_CLICK_EVENT = "dblclick.jstree"

# Flask config keys
CONFIG_PLUGINS = "JSTREE_PLUGINS"
CONFIG_TYPES = "JSTREE_TYPES"
CONFIG_TRANSLATION_CATEGORY = "JSTREE_TRANSLATION_CATEGORY"
CONFIG_TREE_TYPE = "JSTREE_TREE_TYPE"
CONFIG_MULTI_SELECT = "JSTREE_MULTI_SELECT"
CONFIG_THEME = "JSTREE_THEME"
CONFIG_JQUERY_URL = "JSTREE_JQUERY_URL"
CONFIG_JS_URL = "JSTREE_JS_URL"
CONFIG_CSS_URL = "JSTREE_CSS_URL"
