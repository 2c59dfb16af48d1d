import sys
from typing import List, Optional, TextIO
from ..core.node import Node, ConstantNode, VariableNode, FunctionNode, ClosureNode
from .tree_utils import walk_with_depth


def _describe(node: Node) -> str:
  if isinstance(node, ConstantNode):
    return f"{node.value:f}"
  if isinstance(node, VariableNode):
    return f"bound {node.name}"
  if isinstance(node, ClosureNode):
    return f"c{node.arity} {node.name}"
  if isinstance(node, FunctionNode):
    return f"f{node.arity} {node.name}"
  return repr(node)


def format_tree(root: Optional[Node]) -> str:
  """Indented dump of node kinds, arities and values, one node per line"""
  if root is None:
    return ''
  lines: List[str] = []
  for node, depth in walk_with_depth(root):
    lines.append(' ' * depth + _describe(node))
  return '\n'.join(lines) + '\n'


def print_tree(root: Optional[Node], file: Optional[TextIO] = None):
  (file or sys.stdout).write(format_tree(root))
