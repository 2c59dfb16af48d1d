import re
from enum import IntEnum
from typing import Any, Callable, Optional

from ..expression_tree.core import operators as ops
from .symbols import SymbolKind, SymbolTable

NUMBER_PATTERN = re.compile(r'(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
IDENTIFIER_PATTERN = re.compile(r'[a-z][a-z0-9_]*')

INFIX_OPERATORS = {
  '+': ops.add,
  '-': ops.sub,
  '*': ops.mul,
  '/': ops.divide,
  '^': ops.power,
  '%': ops.fmod,
}

WHITESPACE = ' \t\n\r'


class TokenType(IntEnum):
  NULL = 0
  ERROR = 1
  END = 2
  SEP = 3
  OPEN = 4
  CLOSE = 5
  NUMBER = 6
  VARIABLE = 7
  INFIX = 8
  FUNCTION = 9


class Tokenizer:
  """Cursor over the input producing one typed token at a time

  The current token lives in the tokenizer's fields. Once an error token
  has been produced it stays current; advancing at end of input keeps
  returning END.
  """

  def __init__(self, text: str, symbols: SymbolTable):
    self.text = text
    self.symbols = symbols
    self.cursor = 0
    self.type = TokenType.NULL
    self._clear_payload()

  def _clear_payload(self):
    self.value: float = 0.0
    self.binding: Any = None
    self.function: Optional[Callable] = None
    self.arity = 0
    self.pure = False
    self.closure = False
    self.context: Any = None
    self.name = ''

  def fail(self):
    self.type = TokenType.ERROR

  @property
  def failed(self) -> bool:
    return self.type == TokenType.ERROR

  def advance(self):
    if self.type == TokenType.ERROR:
      return
    self.type = TokenType.NULL
    self._clear_payload()

    text = self.text
    while self.type == TokenType.NULL:
      if self.cursor >= len(text):
        self.type = TokenType.END
        return

      ch = text[self.cursor]
      if '0' <= ch <= '9' or ch == '.':
        self._read_number()
      elif 'a' <= ch <= 'z':
        self._read_identifier()
      else:
        self.cursor += 1
        if ch in INFIX_OPERATORS:
          self.type = TokenType.INFIX
          self.function = INFIX_OPERATORS[ch]
        elif ch == '(':
          self.type = TokenType.OPEN
        elif ch == ')':
          self.type = TokenType.CLOSE
        elif ch == ',':
          self.type = TokenType.SEP
        elif ch not in WHITESPACE:
          self.type = TokenType.ERROR

  def _read_number(self):
    match = NUMBER_PATTERN.match(self.text, self.cursor)
    if match is None:
      # A lone '.' is not a literal
      self.cursor += 1
      self.type = TokenType.ERROR
      return
    self.value = float(match.group())
    self.cursor = match.end()
    self.type = TokenType.NUMBER

  def _read_identifier(self):
    match = IDENTIFIER_PATTERN.match(self.text, self.cursor)
    self.cursor = match.end()
    self.name = match.group()

    entry = self.symbols.lookup(self.name)
    if entry is None:
      self.type = TokenType.ERROR
    elif entry.kind == SymbolKind.VARIABLE:
      self.type = TokenType.VARIABLE
      self.binding = entry.address
    else:
      self.type = TokenType.FUNCTION
      self.function = entry.address
      self.arity = entry.arity
      self.pure = entry.pure
      if entry.kind == SymbolKind.CLOSURE:
        self.closure = True
        self.context = entry.context
