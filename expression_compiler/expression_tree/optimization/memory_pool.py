from typing import Any, Callable, List, TYPE_CHECKING, Optional
import threading

if TYPE_CHECKING:
  from ..core.node import Node, VariableNode, ConstantNode, FunctionNode, ClosureNode


class NodePool:
  """Memory pool recycling the nodes of freed expression trees"""

  def __init__(self, initial_size: int = 1000, max_pool_size: int = 500):
    self.max_pool_size = max_pool_size
    self.constant_pool: List['ConstantNode'] = []
    self.variable_pool: List['VariableNode'] = []
    self.function_pool: List['FunctionNode'] = []
    self.closure_pool: List['ClosureNode'] = []
    self._preallocate(initial_size)

  def _preallocate(self, size: int):
    # Import here to avoid circular imports
    from ..core.node import VariableNode, ConstantNode, FunctionNode, ClosureNode

    quarter = size // 4
    for _ in range(quarter):
      self.constant_pool.append(ConstantNode.__new__(ConstantNode))
      self.variable_pool.append(VariableNode.__new__(VariableNode))
      self.function_pool.append(FunctionNode.__new__(FunctionNode))
      self.closure_pool.append(ClosureNode.__new__(ClosureNode))

  def get_constant_node(self, value: float) -> 'ConstantNode':
    from ..core.node import ConstantNode
    try:
      node = self.constant_pool.pop()
    except IndexError:
      return ConstantNode(value)
    node.__init__(value)
    return node

  def get_variable_node(self, binding: Any, name: str = '') -> 'VariableNode':
    from ..core.node import VariableNode
    try:
      node = self.variable_pool.pop()
    except IndexError:
      return VariableNode(binding, name)
    node.__init__(binding, name)
    return node

  def get_function_node(self, function: Callable, arity: int, children: List['Node'],
                        pure: bool = True, name: str = '') -> 'FunctionNode':
    from ..core.node import FunctionNode
    try:
      node = self.function_pool.pop()
    except IndexError:
      return FunctionNode(function, arity, children, pure, name)
    node.__init__(function, arity, children, pure, name)
    return node

  def get_closure_node(self, function: Callable, arity: int, children: List['Node'],
                       context: Any = None, pure: bool = False, name: str = '') -> 'ClosureNode':
    from ..core.node import ClosureNode
    try:
      node = self.closure_pool.pop()
    except IndexError:
      return ClosureNode(function, arity, children, context, pure, name)
    node.__init__(function, arity, children, context, pure, name)
    return node

  def return_node(self, node: 'Node'):
    """Return a single node to the pool for reuse"""
    from ..core.node import VariableNode, ConstantNode, FunctionNode, ClosureNode

    # ClosureNode before FunctionNode: it is a subclass
    if isinstance(node, ClosureNode):
      pool = self.closure_pool
    elif isinstance(node, FunctionNode):
      pool = self.function_pool
    elif isinstance(node, ConstantNode):
      pool = self.constant_pool
    elif isinstance(node, VariableNode):
      pool = self.variable_pool
    else:
      return
    if len(pool) < self.max_pool_size:
      pool.append(node)

  def release_tree(self, root: 'Node'):
    """Return a whole tree to the pool"""
    root.release(self)

  def get_stats(self) -> dict:
    """Get pool statistics"""
    return {
      'constant_pool_size': len(self.constant_pool),
      'variable_pool_size': len(self.variable_pool),
      'function_pool_size': len(self.function_pool),
      'closure_pool_size': len(self.closure_pool)
    }

  def clear(self):
    """Clear all pools"""
    self.constant_pool.clear()
    self.variable_pool.clear()
    self.function_pool.clear()
    self.closure_pool.clear()


# Global instance - process-local initialization with optimized locking
_GLOBAL_POOL: Optional[NodePool] = None
_INITIALIZED = False
_POOL_LOCK = threading.Lock()


def get_global_pool() -> NodePool:
  """Get the global pool instance"""
  global _GLOBAL_POOL, _INITIALIZED

  # Fast path - no locking needed once initialized
  if _INITIALIZED and _GLOBAL_POOL is not None:
    return _GLOBAL_POOL

  with _POOL_LOCK:
    if not _INITIALIZED or _GLOBAL_POOL is None:
      _GLOBAL_POOL = NodePool()
      _INITIALIZED = True

  return _GLOBAL_POOL


def clear_global_pool():
  """Clear the global pool"""
  global _GLOBAL_POOL, _INITIALIZED
  with _POOL_LOCK:
    if _GLOBAL_POOL is not None:
      _GLOBAL_POOL.clear()
    _GLOBAL_POOL = None
    _INITIALIZED = False
