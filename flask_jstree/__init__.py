__author__ = "Flask-JsTree contributors"
__version__ = "1.0.0"

from .base import JsTree  # noqa: F401
from .const import TREE_TYPE_ADJACENCY, TREE_TYPE_NESTED_SET  # noqa: F401
from .exceptions import ConfigurationError, JsTreeException  # noqa: F401
from .menu import ContextMenuBuilder, ContextMenuItem  # noqa: F401
from .scripts import BehaviorScript, MoveBinding, MutationScriptGenerator  # noqa: F401
from .utils import JsExpression, merge_options  # noqa: F401
from .widgets import TreeWidget, WidgetOutput  # noqa: F401
