import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from expression_compiler import (
  CompilerOptions, SymbolKind, Variable, compile_expression, debug_print,
  evaluate, free, interpret, make_binding
)


def show_error(text, error):
  """Print the expression with a caret under the failing position"""
  print(f"\t{text}")
  print(f"\t{' ' * (error - 1)}^")
  print(f"Error near position {error}")


def distance_table():
  x = make_binding()
  y = make_binding()
  text = "sqrt(x^2+y^2)"
  tree, error = compile_expression(text, [Variable("x", x), Variable("y", y)])
  if tree is None:
    show_error(text, error)
    return

  print(f"Compiled: {tree.to_string()}")
  debug_print(tree)
  for xv, yv in [(3.0, 4.0), (5.0, 12.0), (8.0, 15.0)]:
    x[...] = xv
    y[...] = yv
    print(f"  x={xv:g}, y={yv:g} -> {evaluate(tree):g}")
  free(tree)


def sampled_closure():
  # Closure reading from a numpy array passed as its context
  samples = np.linspace(0.0, 1.0, 11)

  def sample(ctx, i):
    return ctx[int(i) % len(ctx)]

  t = make_binding()
  tree, _ = compile_expression("sample(t)*100", [
    Variable("t", t),
    Variable("sample", sample, SymbolKind.CLOSURE, 1, context=samples),
  ])
  values = []
  for i in range(0, 11, 2):
    t[...] = i
    values.append(evaluate(tree))
  print("Sampled:", values)
  free(tree)


def main():
  for text in ["5*5", "2^3^2", "fac(10)/ncr(10,3)", "log(100)", "1+*2"]:
    value, error = interpret(text)
    if error:
      show_error(text, error)
    else:
      print(f"{text} = {value:g}")

  value, _ = interpret("2^3^2", CompilerOptions(pow_from_right=True))
  print(f"2^3^2 (right to left) = {value:g}")
  value, _ = interpret("log(e)", CompilerOptions(natural_log=True))
  print(f"log(e) (natural) = {value:g}")

  distance_table()
  sampled_closure()

  # Reports offset 11, the end of the unknown identifier "y2"
  text = "sqrt(x^2+y2)"
  x = make_binding()
  y = make_binding()
  tree, error = compile_expression(text, [Variable("x", x), Variable("y", y)])
  if tree is None:
    show_error(text, error)


if __name__ == "__main__":
  main()
