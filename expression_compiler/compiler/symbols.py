"""
Symbol table: the fixed built-in registry plus caller-supplied bindings.

Caller-supplied entries are scanned linearly, in order, and shadow the
built-ins. The built-ins are kept alphabetically sorted and searched with a
binary search on the exact identifier.
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, Optional, Tuple

import numpy as np

from ..expression_tree.core import operators as ops
from ..expression_tree.core.operators import MAX_ARITY
from .options import CompilerOptions, DEFAULT_OPTIONS

IDENTIFIER_PATTERN = re.compile(r'[a-z][a-z0-9_]*\Z')


class SymbolKind(IntEnum):
  VARIABLE = 0
  FUNCTION = 1
  CLOSURE = 2


@dataclass(frozen=True)
class Variable:
  """A named binding: variable storage, a native function or a closure

  For VARIABLE entries `address` is a single-element numpy array that is
  read on every evaluation. For FUNCTION and CLOSURE entries it is the
  callable; closures receive `context` as their first argument.
  """
  name: str
  address: Any
  kind: SymbolKind = SymbolKind.VARIABLE
  arity: int = 0
  pure: bool = False
  context: Any = None

  def __post_init__(self):
    if not isinstance(self.name, str) or not IDENTIFIER_PATTERN.match(self.name):
      raise ValueError(f"Invalid identifier: {self.name!r}")
    if not 0 <= self.arity <= MAX_ARITY:
      raise ValueError(f"Arity of '{self.name}' must be within 0..{MAX_ARITY}, got {self.arity}")
    if self.kind == SymbolKind.VARIABLE:
      if self.arity != 0:
        raise ValueError(f"Variable '{self.name}' cannot take arguments")
      if not isinstance(self.address, np.ndarray) or self.address.size != 1:
        raise TypeError(f"Variable '{self.name}' must be bound to a single-element numpy array")
    elif not callable(self.address):
      raise TypeError(f"Function '{self.name}' must be bound to a callable")

  @property
  def is_function(self) -> bool:
    return self.kind != SymbolKind.VARIABLE


def make_binding(value: float = 0.0) -> np.ndarray:
  """External storage for a bound variable; assign with `binding[...] = v`"""
  return np.array(value, dtype=np.float64)


def _builtin(name: str, function, arity: int) -> Variable:
  return Variable(name, function, SymbolKind.FUNCTION, arity, pure=True)


# Must stay in alphabetical order
BUILTINS: Tuple[Variable, ...] = (
  _builtin('abs', ops.fabs, 1),
  _builtin('acos', ops.acos, 1),
  _builtin('asin', ops.asin, 1),
  _builtin('atan', ops.atan, 1),
  _builtin('atan2', ops.atan2, 2),
  _builtin('ceil', ops.ceil, 1),
  _builtin('cos', ops.cos, 1),
  _builtin('cosh', ops.cosh, 1),
  _builtin('e', ops.e, 0),
  _builtin('exp', ops.exp, 1),
  _builtin('fac', ops.fac, 1),
  _builtin('floor', ops.floor, 1),
  _builtin('ln', ops.ln, 1),
  _builtin('log', ops.log10, 1),
  _builtin('log10', ops.log10, 1),
  _builtin('ncr', ops.ncr, 2),
  _builtin('npr', ops.npr, 2),
  _builtin('pi', ops.pi, 0),
  _builtin('pow', ops.power, 2),
  _builtin('sin', ops.sin, 1),
  _builtin('sinh', ops.sinh, 1),
  _builtin('sqrt', ops.sqrt, 1),
  _builtin('tan', ops.tan, 1),
  _builtin('tanh', ops.tanh, 1),
)

NATURAL_LOG_BUILTINS: Tuple[Variable, ...] = tuple(
  _builtin('log', ops.ln, 1) if entry.name == 'log' else entry
  for entry in BUILTINS
)


def find_builtin(name: str, builtins: Tuple[Variable, ...] = BUILTINS) -> Optional[Variable]:
  """Binary search for an exact name in an alphabetically sorted registry"""
  imin = 0
  imax = len(builtins) - 1
  while imax >= imin:
    i = imin + (imax - imin) // 2
    candidate = builtins[i].name
    if name == candidate:
      return builtins[i]
    if name > candidate:
      imin = i + 1
    else:
      imax = i - 1
  return None


class SymbolTable:
  """Identifier resolution for one compilation"""

  def __init__(self, variables: Iterable[Variable] = (), options: CompilerOptions = DEFAULT_OPTIONS):
    self.variables: Tuple[Variable, ...] = tuple(variables)
    self.builtins = NATURAL_LOG_BUILTINS if options.natural_log else BUILTINS

  def lookup(self, name: str) -> Optional[Variable]:
    # Caller bindings first so they can shadow built-ins
    for entry in self.variables:
      if entry.name == name:
        return entry
    return find_builtin(name, self.builtins)
