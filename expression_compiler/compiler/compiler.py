from typing import Iterable, Optional, Tuple

from ..expression_tree.core.node import Node
from ..expression_tree.expression import Expression
from ..expression_tree.optimization.constant_folding import ConstantFolder
from ..expression_tree.optimization.memory_pool import NodePool, get_global_pool
from ..logging_system import LogLevel, log_debug, log_info
from .options import CompilerOptions, DEFAULT_OPTIONS
from .parser import Parser
from .symbols import SymbolTable, Variable
from .tokenizer import Tokenizer, TokenType


class ExpressionCompiler:
  """Tokenizer, parser and constant folder configured by one set of options"""

  def __init__(self, options: Optional[CompilerOptions] = None, pool: Optional[NodePool] = None):
    self.options = options or DEFAULT_OPTIONS
    self.pool = pool or get_global_pool()

  def parse(self, expression: str, variables: Iterable[Variable] = ()) -> Tuple[Optional[Node], int]:
    """Parse without folding; returns (root, 0) or (None, 1-based error offset)"""
    tokens = Tokenizer(expression, SymbolTable(variables, self.options))
    root = Parser(tokens, self.options, self.pool).parse()

    if tokens.type != TokenType.END:
      root.release(self.pool)
      error = tokens.cursor or 1
      log_debug(f"Compilation of {expression!r} failed near position {error}")
      return None, error
    return root, 0

  def compile(self, expression: str, variables: Iterable[Variable] = ()) -> Tuple[Optional[Expression], int]:
    """Compile to a folded tree; returns (expression, 0) or (None, error offset)"""
    root, error = self.parse(expression, variables)
    if root is None:
      return None, error

    folder = ConstantFolder(self.pool)
    root = folder.fold(root)
    log_info(f"Compiled {expression!r}: folded {folder.folded_count} nodes", LogLevel.DETAILED)
    return Expression(root, self.pool), 0
