import numpy as np
import sympy as sp
from typing import Optional
from .core.node import Node
from .optimization.memory_pool import NodePool, get_global_pool
from .utils.tree_utils import calculate_tree_depth


class Expression:
  """Owner of a compiled expression tree"""

  __slots__ = ('root', 'pool', '_string_cache')

  def __init__(self, root: Node, pool: Optional[NodePool] = None):
    self.root = root
    self.pool = pool or get_global_pool()
    self._string_cache: Optional[str] = None

  def evaluate(self) -> float:
    """Walk the tree; variables are re-read on every call"""
    if self.root is None:
      return np.nan
    with np.errstate(all='ignore'):
      return float(self.root.evaluate())

  def to_string(self) -> str:
    if self.root is None:
      return ''
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def to_sympy(self) -> sp.Expr:
    if self.root is None:
      return sp.nan
    return self.root.to_sympy()

  def copy(self) -> 'Expression':
    """Independent copy of the nodes; variable storage stays shared"""
    if self.root is None:
      return Expression(None, self.pool)
    return Expression(self.root.copy(self.pool), self.pool)

  def size(self) -> int:
    """Node count"""
    return 0 if self.root is None else self.root.size()

  def depth(self) -> int:
    return 0 if self.root is None else calculate_tree_depth(self.root)

  def free(self):
    """Release every node to the pool; the expression evaluates to NaN afterwards"""
    if self.root is not None:
      self.pool.release_tree(self.root)
    self.root = None
    self._string_cache = None

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"
