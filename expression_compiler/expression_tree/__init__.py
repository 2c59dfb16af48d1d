"""Expression Tree Module

Compiled expression tree: nodes, native operators, node pool and
constant folding.
"""

from .expression import Expression
from .core.node import (
    Node,
    ConstantNode,
    VariableNode,
    FunctionNode,
    ClosureNode
)
from .core.operators import NodeType, MAX_ARITY, call_function
from .optimization import NodePool, get_global_pool, clear_global_pool, ConstantFolder, fold_constants
from .utils import ExpressionValidator, format_tree, print_tree

__all__ = [
    "Expression",
    "Node", "ConstantNode", "VariableNode", "FunctionNode", "ClosureNode",
    "NodeType", "MAX_ARITY", "call_function",
    "NodePool", "get_global_pool", "clear_global_pool", "ConstantFolder", "fold_constants",
    "ExpressionValidator", "format_tree", "print_tree"
]
