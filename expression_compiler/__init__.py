# Python

"""Expression Compiler Package

Compiles arithmetic expressions into trees that can be evaluated
repeatedly against externally mutated variables.

Quick Start:
    from expression_compiler import compile_expression, evaluate, make_binding, Variable

    x = make_binding()
    tree, error = compile_expression("x^2 + 1", [Variable("x", x)])
    x[...] = 3.0
    evaluate(tree)  # => 10.0
"""

from .api import compile_expression, evaluate, interpret, free, format_tree, debug_print
from .compiler import (
  CompilerOptions, ExpressionCompiler, SymbolKind, Variable, SymbolTable,
  Tokenizer, TokenType, Parser, make_binding
)
from .expression_tree import (
  Expression, Node, ConstantNode, VariableNode, FunctionNode, ClosureNode, NodeType
)
from .logging_system import LogLevel, configure_logging, set_log_level, get_logger

__version__ = "0.1.0"
__all__ = [
  "compile_expression", "evaluate", "interpret", "free", "format_tree", "debug_print",
  "CompilerOptions", "ExpressionCompiler", "SymbolKind", "Variable", "SymbolTable",
  "Tokenizer", "TokenType", "Parser", "make_binding",
  "Expression", "Node", "ConstantNode", "VariableNode", "FunctionNode", "ClosureNode", "NodeType",
  "LogLevel", "configure_logging", "set_log_level", "get_logger"
]
