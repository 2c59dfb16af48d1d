import numpy as np
from ..core.node import Node, ConstantNode, FunctionNode
from .memory_pool import NodePool, get_global_pool


class ConstantFolder:
  """Post-order constant folding over a freshly parsed tree"""

  def __init__(self, pool: NodePool = None):
    self.pool = pool or get_global_pool()
    self.folded_count = 0

  def fold(self, node: Node) -> Node:
    """Fold node and return the node that replaces it in its parent"""
    if not isinstance(node, FunctionNode):
      return node

    children = node.children
    for i, child in enumerate(children):
      children[i] = self.fold(child)

    if not node.pure:
      return node
    if not all(isinstance(child, ConstantNode) for child in children):
      return node

    with np.errstate(all='ignore'):
      value = node.evaluate()
    node.release(self.pool)
    self.folded_count += 1
    return self.pool.get_constant_node(value)


def fold_constants(root: Node, pool: NodePool = None) -> Node:
  """Fold every pure subtree whose arguments are all constant"""
  return ConstantFolder(pool).fold(root)
