"""
Recursive-descent parser producing an unoptimized expression tree.

Grammar, loosest to tightest binding:

    list   = expr {"," expr}
    expr   = term {("+" | "-") term}
    term   = factor {("*" | "/" | "%") factor}
    factor = power {"^" power}
    power  = {("-" | "+")} base
    base   = number | variable
           | function0 ["(" ")"]
           | function1 power
           | functionN "(" expr {"," expr} ")"
           | "(" list ")"

A structural mismatch puts the tokenizer into its error state; parsing
still unwinds and builds a best-effort tree which the caller discards.
"""

from typing import List, Tuple

import numpy as np

from ..expression_tree.core import operators as ops
from ..expression_tree.core.node import Node
from ..expression_tree.optimization.memory_pool import NodePool, get_global_pool
from .options import CompilerOptions, DEFAULT_OPTIONS
from .tokenizer import Tokenizer, TokenType


class Parser:

  def __init__(self, tokens: Tokenizer, options: CompilerOptions = DEFAULT_OPTIONS,
               pool: NodePool = None):
    self.tokens = tokens
    self.options = options
    self.pool = pool or get_global_pool()

  def parse(self) -> Node:
    """Parse a whole list; the caller checks that the input is exhausted"""
    self.tokens.advance()
    return self._list()

  def _infix(self, function, left: Node, right: Node) -> Node:
    return self.pool.get_function_node(function, 2, [left, right], True, function.__name__)

  def _negate(self, operand: Node) -> Node:
    return self.pool.get_function_node(ops.negate, 1, [operand], True, 'negate')

  def _is_infix(self, *functions) -> bool:
    return self.tokens.type == TokenType.INFIX and self.tokens.function in functions

  def _list(self) -> Node:
    node = self._expr()
    while self.tokens.type == TokenType.SEP:
      self.tokens.advance()
      node = self._infix(ops.comma, node, self._expr())
    return node

  def _expr(self) -> Node:
    node = self._term()
    while self._is_infix(ops.add, ops.sub):
      function = self.tokens.function
      self.tokens.advance()
      node = self._infix(function, node, self._term())
    return node

  def _term(self) -> Node:
    node = self._factor()
    while self._is_infix(ops.mul, ops.divide, ops.fmod):
      function = self.tokens.function
      self.tokens.advance()
      node = self._infix(function, node, self._factor())
    return node

  def _factor(self) -> Node:
    node, negative = self._signed_base()

    if self.options.pow_from_right:
      operands = [node]
      while self._is_infix(ops.power):
        self.tokens.advance()
        operands.append(self._power())
      node = operands.pop()
      while operands:
        node = self._infix(ops.power, operands.pop(), node)
    else:
      while self._is_infix(ops.power):
        self.tokens.advance()
        node = self._infix(ops.power, node, self._power())

    # A leading sign applies to the whole power chain: -a^b is -(a^b)
    return self._negate(node) if negative else node

  def _signed_base(self) -> Tuple[Node, bool]:
    negative = False
    while self._is_infix(ops.add, ops.sub):
      if self.tokens.function is ops.sub:
        negative = not negative
      self.tokens.advance()
    return self._base(), negative

  def _power(self) -> Node:
    node, negative = self._signed_base()
    return self._negate(node) if negative else node

  def _base(self) -> Node:
    tokens = self.tokens

    if tokens.type == TokenType.NUMBER:
      node = self.pool.get_constant_node(tokens.value)
      tokens.advance()
    elif tokens.type == TokenType.VARIABLE:
      node = self.pool.get_variable_node(tokens.binding, tokens.name)
      tokens.advance()
    elif tokens.type == TokenType.FUNCTION:
      node = self._call()
    elif tokens.type == TokenType.OPEN:
      tokens.advance()
      node = self._list()
      self._expect_close()
    else:
      node = self.pool.get_constant_node(np.nan)
      tokens.fail()

    return node

  def _expect_close(self):
    if self.tokens.type != TokenType.CLOSE:
      self.tokens.fail()
    else:
      self.tokens.advance()

  def _call(self) -> Node:
    tokens = self.tokens
    function, arity, pure = tokens.function, tokens.arity, tokens.pure
    closure, context, name = tokens.closure, tokens.context, tokens.name
    tokens.advance()

    children: List[Node] = []
    if arity == 0:
      if tokens.type == TokenType.OPEN:
        tokens.advance()
        self._expect_close()
    elif arity == 1:
      children.append(self._power())
    elif tokens.type != TokenType.OPEN:
      tokens.fail()
    else:
      for _ in range(arity):
        tokens.advance()
        children.append(self._expr())
        if tokens.type != TokenType.SEP:
          break
      if len(children) != arity:
        tokens.fail()
      else:
        self._expect_close()

    # Keep the child count equal to the arity in best-effort trees
    while len(children) < arity:
      children.append(self.pool.get_constant_node(np.nan))

    if closure:
      return self.pool.get_closure_node(function, arity, children, context, pure, name)
    return self.pool.get_function_node(function, arity, children, pure, name)
