import numpy as np
from ..core.node import Node
from .tree_utils import validate_tree_structure, is_fully_folded


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, check_folded: bool = False) -> bool:
    if node is None:
      return False
    if not validate_tree_structure(node):
      return False
    if check_folded:
      return is_fully_folded(node)
    return True

  @staticmethod
  def has_finite_value(node: Node) -> bool:
    """Evaluate once and report whether the result is finite"""
    if not ExpressionValidator.is_valid_expression(node):
      return False
    with np.errstate(all='ignore'):
      return bool(np.isfinite(node.evaluate()))
