import pytest

from expression_compiler import Variable, make_binding
from expression_compiler.expression_tree import NodePool


@pytest.fixture
def xy():
    """Bound storage for x and y plus their lookup entries"""
    x = make_binding()
    y = make_binding()
    return x, y, [Variable("x", x), Variable("y", y)]


@pytest.fixture
def pool():
    return NodePool(initial_size=0)
