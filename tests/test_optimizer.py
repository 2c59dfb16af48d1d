import numpy as np
import pytest

from expression_compiler import (
    ClosureNode, ConstantNode, ExpressionCompiler, FunctionNode, SymbolKind,
    Variable, VariableNode, compile_expression, make_binding
)
from expression_compiler.expression_tree import ConstantFolder, fold_constants
from expression_compiler.expression_tree.core import operators as ops
from expression_compiler.expression_tree.utils import is_fully_folded, validate_tree_structure


@pytest.mark.parametrize("text", [
    "1+2*3",
    "sqrt(2)^2",
    "fac(5)/ncr(5,2)",
    "-(1+2)^2",
    "pi*e",
    "1/0",
    "sqrt(-1)",
    "(1,2,3)",
    "atan2(1,2)+pow(2,0.5)",
])
def test_folding_is_transparent(text):
    compiler = ExpressionCompiler()
    unfolded, error = compiler.parse(text)
    assert error == 0
    with np.errstate(all="ignore"):
        reference = unfolded.evaluate()

    tree, error = compiler.compile(text)
    assert isinstance(tree.root, ConstantNode)
    np.testing.assert_equal(tree.root.value, reference)
    np.testing.assert_equal(tree.evaluate(), reference)


def test_parenthesized_constants_fold_next_to_variable(xy):
    x, _, variables = xy
    grouped, _ = compile_expression("x+(1+5)", variables)
    chained, _ = compile_expression("x+1+5", variables)

    assert grouped.root.function is ops.add
    assert isinstance(grouped.root.children[0], VariableNode)
    assert isinstance(grouped.root.children[1], ConstantNode)
    assert grouped.root.children[1].value == 6.0
    assert grouped.size() == 3

    # (x+1)+5 has no all-constant subtree
    assert chained.size() == 5
    assert isinstance(chained.root.children[0], FunctionNode)

    for value in (-2.0, 0.0, 3.5):
        x[...] = value
        assert grouped.evaluate() == chained.evaluate() == value + 6.0


def test_variables_are_never_folded(xy):
    x, _, variables = xy
    tree, _ = compile_expression("x*0", variables)
    assert isinstance(tree.root, FunctionNode)
    x[...] = np.inf
    assert np.isnan(tree.evaluate())


def test_pure_user_function_folded_once():
    calls = []

    def twice(a):
        calls.append(a)
        return 2 * a

    tree, _ = compile_expression("twice(3)+1", [Variable("twice", twice, SymbolKind.FUNCTION, 1, pure=True)])
    assert isinstance(tree.root, ConstantNode)
    assert tree.root.value == 7.0
    assert calls == [3.0]
    tree.evaluate()
    tree.evaluate()
    assert calls == [3.0]


def test_impure_function_kept_but_arguments_folded():
    counter = {"n": 0}

    def tick(a):
        counter["n"] += 1
        return a + counter["n"]

    tree, _ = compile_expression("tick(1+2)", [Variable("tick", tick, SymbolKind.FUNCTION, 1)])
    assert isinstance(tree.root, FunctionNode)
    assert isinstance(tree.root.children[0], ConstantNode)
    assert tree.root.children[0].value == 3.0
    assert counter["n"] == 0
    assert tree.evaluate() == 4.0
    assert tree.evaluate() == 5.0


def test_closures_not_folded_unless_pure():
    context = {"k": 2.0}

    def scale(ctx, a):
        return ctx["k"] * a

    impure = Variable("scale", scale, SymbolKind.CLOSURE, 1, context=context)
    tree, _ = compile_expression("scale 3", [impure])
    assert isinstance(tree.root, ClosureNode)
    assert tree.evaluate() == 6.0
    context["k"] = 5.0
    assert tree.evaluate() == 15.0

    pure = Variable("scale", scale, SymbolKind.CLOSURE, 1, pure=True, context=context)
    tree, _ = compile_expression("scale 3", [pure])
    assert isinstance(tree.root, ConstantNode)
    assert tree.root.value == 15.0


def test_compiled_trees_satisfy_fold_postcondition(xy):
    _, _, variables = xy
    for text in ("x+(1+5)", "sin(x)*cos(pi/4)", "ncr(x, 2)+fac(3)", "-(2^3)^x"):
        tree, error = compile_expression(text, variables)
        assert error == 0
        assert validate_tree_structure(tree.root)
        assert is_fully_folded(tree.root)


def test_fold_counts_folded_nodes(pool):
    compiler = ExpressionCompiler(pool=pool)
    root, _ = compiler.parse("(1+2)*(3+4)")
    folder = ConstantFolder(pool)
    root = folder.fold(root)
    assert root.value == 21.0
    assert folder.folded_count == 3
    # Three function nodes and six constants went back to the pool and
    # each fold took one constant out again for its result
    stats = pool.get_stats()
    assert stats["function_pool_size"] == 3
    assert stats["constant_pool_size"] == 3


def test_fold_constants_leaves_leaves_alone(xy):
    x, _, _ = xy
    leaf = VariableNode(x, "x")
    assert fold_constants(leaf) is leaf
    constant = ConstantNode(2.0)
    assert fold_constants(constant) is constant
