"""Entry points used by command-line tools, fuzzers and benchmarks."""

from typing import Iterable, Optional, TextIO, Tuple

import numpy as np

from .compiler.compiler import ExpressionCompiler
from .compiler.options import CompilerOptions
from .compiler.symbols import Variable
from .expression_tree.expression import Expression
from .expression_tree.utils.printer import format_tree as _format_root, print_tree

_DEFAULT_COMPILER = ExpressionCompiler()


def _compiler_for(options: Optional[CompilerOptions]) -> ExpressionCompiler:
  if options is None:
    return _DEFAULT_COMPILER
  return ExpressionCompiler(options)


def compile_expression(expression: str, variables: Iterable[Variable] = (),
                       options: Optional[CompilerOptions] = None) -> Tuple[Optional[Expression], int]:
  """Compile text to a tree; the offset is 0 on success, else a 1-based position"""
  return _compiler_for(options).compile(expression, variables)


def evaluate(tree: Optional[Expression]) -> float:
  """Evaluate a compiled tree; an absent tree yields NaN"""
  if tree is None:
    return np.nan
  return tree.evaluate()


def interpret(expression: str, options: Optional[CompilerOptions] = None) -> Tuple[float, int]:
  """Compile, evaluate and free an expression without variables"""
  tree, error = compile_expression(expression, (), options)
  if tree is None:
    return np.nan, error
  value = evaluate(tree)
  free(tree)
  return value, error


def free(tree: Optional[Expression]):
  """Release every node of the tree; safe on None"""
  if tree is not None:
    tree.free()


def format_tree(tree: Optional[Expression]) -> str:
  return _format_root(tree.root if tree is not None else None)


def debug_print(tree: Optional[Expression], file: Optional[TextIO] = None):
  """Write an indented dump of the tree (diagnostic only)"""
  print_tree(tree.root if tree is not None else None, file)
