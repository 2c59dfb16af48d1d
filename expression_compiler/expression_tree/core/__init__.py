"""Core expression tree components."""

from .node import Node, ConstantNode, VariableNode, FunctionNode, ClosureNode
from .operators import NodeType, MAX_ARITY, call_function

__all__ = [
  'Node', 'ConstantNode', 'VariableNode', 'FunctionNode', 'ClosureNode',
  'NodeType', 'MAX_ARITY', 'call_function'
]
