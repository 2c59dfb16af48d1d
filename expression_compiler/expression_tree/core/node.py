import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional
from .operators import (
  NodeType, MAX_ARITY, INFIX_SYMBOLS, call_function,
  add, sub, mul, divide, fmod, power, negate, comma,
  fac, ncr, npr, e, pi, fabs, acos, asin, atan, atan2, ceil, cos, cosh,
  exp, floor, ln, log10, sin, sinh, sqrt, tan, tanh
)
from ...logging_system import log_warning

# sympy equivalents of the native callables, keyed by callable
SYMPY_FUNCTIONS = {
  add: lambda a, b: sp.Add(a, b),
  sub: lambda a, b: sp.Add(a, sp.Mul(-1, b)),
  mul: lambda a, b: sp.Mul(a, b),
  divide: lambda a, b: sp.Mul(a, sp.Pow(b, -1)),
  fmod: lambda a, b: sp.Mod(a, b),
  power: lambda a, b: sp.Pow(a, b),
  negate: lambda a: -a,
  comma: lambda a, b: b,
  fac: lambda a: sp.factorial(sp.floor(a)),
  ncr: lambda n, r: sp.binomial(sp.floor(n), sp.floor(r)),
  npr: lambda n, r: sp.ff(sp.floor(n), sp.floor(r)),
  e: lambda: sp.E,
  pi: lambda: sp.pi,
  fabs: sp.Abs,
  acos: sp.acos,
  asin: sp.asin,
  atan: sp.atan,
  atan2: sp.atan2,
  ceil: sp.ceiling,
  cos: sp.cos,
  cosh: sp.cosh,
  exp: sp.exp,
  floor: sp.floor,
  ln: sp.log,
  log10: lambda a: sp.log(a, 10),
  sin: sp.sin,
  sinh: sp.sinh,
  sqrt: sp.sqrt,
  tan: sp.tan,
  tanh: sp.tanh,
}


def _pool_or_global(pool):
  if pool is not None:
    return pool
  from ..optimization.memory_pool import get_global_pool
  return get_global_pool()


class Node(ABC):
  """Base node of a compiled expression tree"""

  __slots__ = ()

  node_type: NodeType

  @property
  def arity(self) -> int:
    return 0

  @property
  def children(self) -> List['Node']:
    return []

  @property
  def pure(self) -> bool:
    return True

  @abstractmethod
  def evaluate(self) -> float:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def copy(self, pool=None) -> 'Node':
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count of the subtree"""
    return 1 + sum(child.size() for child in self.children)

  def _reset(self) -> None:
    """Drop references held by the node before it is recycled"""

  def release(self, pool) -> None:
    """Return this subtree to the pool, children first"""
    children = list(self.children)
    # Cleared before the node is visible to other users of the pool
    self._reset()
    for child in children:
      child.release(pool)
    pool.return_node(self)


class ConstantNode(Node):
  __slots__ = ('value',)

  node_type = NodeType.CONSTANT

  def __init__(self, value: float):
    self.value = float(value)

  def evaluate(self) -> float:
    return self.value

  def to_string(self) -> str:
    return f"{self.value:g}"

  def copy(self, pool=None) -> 'ConstantNode':
    return _pool_or_global(pool).get_constant_node(self.value)

  def to_sympy(self):
    if np.isnan(self.value):
      return sp.nan
    if np.isinf(self.value):
      return sp.oo if self.value > 0 else -sp.oo
    return sp.Float(self.value)


class VariableNode(Node):
  __slots__ = ('binding', 'name')

  node_type = NodeType.VARIABLE

  def __init__(self, binding: np.ndarray, name: str = ''):
    self.binding = binding
    self.name = name

  def evaluate(self) -> float:
    # Storage is re-read on every evaluation
    return float(self.binding.item())

  def to_string(self) -> str:
    return self.name

  def copy(self, pool=None) -> 'VariableNode':
    return _pool_or_global(pool).get_variable_node(self.binding, self.name)

  def to_sympy(self):
    return sp.Symbol(self.name)

  def _reset(self) -> None:
    self.binding = None


class FunctionNode(Node):
  __slots__ = ('function', '_arity', '_children', '_pure', 'name')

  node_type = NodeType.FUNCTION

  def __init__(self, function: Callable, arity: int, children: List[Node],
               pure: bool = True, name: str = ''):
    self.function = function
    self._arity = arity
    self._children = list(children)
    self._pure = pure
    self.name = name or getattr(function, '__name__', 'f')

  @property
  def arity(self) -> int:
    return self._arity

  @property
  def children(self) -> List[Node]:
    return self._children

  @property
  def pure(self) -> bool:
    return self._pure

  def _call(self, args: List[float]) -> Any:
    return call_function(self.function, self._arity, args)

  def evaluate(self) -> float:
    if not 0 <= self._arity <= MAX_ARITY:
      return np.nan
    args = [child.evaluate() for child in self._children]
    try:
      return float(self._call(args))
    except (ArithmeticError, ValueError) as exc:
      log_warning(f"'{self.name}' failed during evaluation, using NaN: {exc}")
      return np.nan

  def to_string(self) -> str:
    args = [child.to_string() for child in self._children]
    symbol = INFIX_SYMBOLS.get(self.function)
    if symbol is not None and len(args) == 2:
      return f"({args[0]} {symbol} {args[1]})"
    if self.function is negate and len(args) == 1:
      return f"-{args[0]}"
    if self.function is comma and len(args) == 2:
      return f"({args[0]}, {args[1]})"
    if self._arity == 0:
      return self.name
    return f"{self.name}({', '.join(args)})"

  def copy(self, pool=None) -> 'FunctionNode':
    pool = _pool_or_global(pool)
    return pool.get_function_node(
      self.function, self._arity, [child.copy(pool) for child in self._children],
      self._pure, self.name)

  def to_sympy(self):
    args = [child.to_sympy() for child in self._children]
    converter = SYMPY_FUNCTIONS.get(self.function)
    if converter is not None:
      return converter(*args)
    return sp.Function(self.name)(*args)

  def _reset(self) -> None:
    self._children = []


class ClosureNode(FunctionNode):
  __slots__ = ('context',)

  node_type = NodeType.CLOSURE

  def __init__(self, function: Callable, arity: int, children: List[Node],
               context: Any = None, pure: bool = False, name: str = ''):
    super().__init__(function, arity, children, pure, name)
    self.context = context

  def _call(self, args: List[float]) -> Any:
    return call_function(self.function, self._arity, args, self.context, closure=True)

  def copy(self, pool=None) -> 'ClosureNode':
    pool = _pool_or_global(pool)
    return pool.get_closure_node(
      self.function, self._arity, [child.copy(pool) for child in self._children],
      self.context, self._pure, self.name)

  def _reset(self) -> None:
    super()._reset()
    self.context = None
