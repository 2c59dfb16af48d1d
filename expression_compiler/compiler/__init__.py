"""Compiler pipeline: symbol table, tokenizer, parser and driver."""

from .options import CompilerOptions, DEFAULT_OPTIONS
from .symbols import (
  SymbolKind, Variable, SymbolTable, BUILTINS, NATURAL_LOG_BUILTINS,
  find_builtin, make_binding
)
from .tokenizer import Tokenizer, TokenType
from .parser import Parser
from .compiler import ExpressionCompiler

__all__ = [
  'CompilerOptions', 'DEFAULT_OPTIONS',
  'SymbolKind', 'Variable', 'SymbolTable', 'BUILTINS', 'NATURAL_LOG_BUILTINS',
  'find_builtin', 'make_binding',
  'Tokenizer', 'TokenType', 'Parser', 'ExpressionCompiler'
]
