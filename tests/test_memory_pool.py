from expression_compiler import ClosureNode, ConstantNode, ExpressionCompiler, FunctionNode, SymbolKind, Variable
from expression_compiler.expression_tree import NodePool, clear_global_pool, get_global_pool
from expression_compiler.expression_tree.core import operators as ops


def test_preallocation_split_between_kinds():
    pool = NodePool(initial_size=40)
    assert pool.get_stats() == {
        'constant_pool_size': 10,
        'variable_pool_size': 10,
        'function_pool_size': 10,
        'closure_pool_size': 10,
    }


def test_recycled_nodes_are_reinitialized(pool):
    node = pool.get_function_node(ops.add, 2, [ConstantNode(1.0), ConstantNode(2.0)])
    pool.release_tree(node)
    assert pool.get_stats()['function_pool_size'] == 1
    assert node.children == []

    again = pool.get_function_node(ops.mul, 2, [ConstantNode(3.0), ConstantNode(4.0)], name='mul')
    assert again is node
    assert again.evaluate() == 12.0
    assert again.name == 'mul'


def test_free_visits_exactly_the_declared_children(xy):
    _, _, variables = xy
    pool = NodePool(initial_size=0)
    compiler = ExpressionCompiler(pool=pool)
    tree, _ = compiler.compile("x*y + sin(x) - y", variables)
    assert tree.size() == 8
    tree.free()
    assert pool.get_stats() == {
        'constant_pool_size': 0,
        'variable_pool_size': 4,
        'function_pool_size': 4,
        'closure_pool_size': 0,
    }


def test_closure_nodes_return_to_their_own_pool(pool):
    context = object()
    entry = Variable("f", lambda ctx, a: a, SymbolKind.CLOSURE, 1, context=context)
    tree, _ = ExpressionCompiler(pool=pool).compile("f 1", [entry])
    assert isinstance(tree.root, ClosureNode)
    assert tree.root.context is context
    root = tree.root
    tree.free()
    assert root.context is None
    assert pool.get_stats()['closure_pool_size'] == 1
    assert pool.get_stats()['function_pool_size'] == 0


def test_pool_size_is_bounded():
    pool = NodePool(initial_size=0, max_pool_size=2)
    for _ in range(5):
        pool.return_node(ConstantNode(0.0))
    assert pool.get_stats()['constant_pool_size'] == 2


def test_global_pool_lifecycle():
    first = get_global_pool()
    assert get_global_pool() is first
    clear_global_pool()
    second = get_global_pool()
    assert second is not first
    assert isinstance(second.get_function_node(ops.negate, 1, [ConstantNode(1.0)]), FunctionNode)


class EagerPool(NodePool):
    """Hands each returned function node straight back out, as a concurrent compile would"""

    def __init__(self):
        super().__init__(initial_size=0)
        self.reissued = []

    def return_node(self, node):
        super().return_node(node)
        children = [ConstantNode(1.0), ConstantNode(2.0)]
        if isinstance(node, ClosureNode):
            self.reissued.append(self.get_closure_node(ops.add, 2, children, context='fresh'))
        elif isinstance(node, FunctionNode):
            self.reissued.append(self.get_function_node(ops.add, 2, children))


def test_released_function_node_reused_immediately_keeps_new_children():
    pool = EagerPool()
    released = FunctionNode(ops.negate, 1, [ConstantNode(5.0)])
    released.release(pool)
    reused = pool.reissued[0]
    assert reused is released
    assert len(reused.children) == reused.arity == 2
    assert reused.evaluate() == 3.0


def test_released_closure_node_reused_immediately_keeps_new_context():
    pool = EagerPool()
    released = ClosureNode(lambda ctx, a: a, 1, [ConstantNode(5.0)], context='stale')
    released.release(pool)
    reused = pool.reissued[0]
    assert reused is released
    assert reused.context == 'fresh'
    assert len(reused.children) == reused.arity == 2


def test_copy_allocates_from_the_expression_pool(xy, pool):
    _, _, variables = xy
    tree, _ = ExpressionCompiler(pool=pool).compile("x*2 + sin(y)", variables)
    duplicate = tree.copy()
    assert duplicate.pool is pool
    tree.free()
    duplicate.free()
    assert pool.get_stats() == {
        'constant_pool_size': 2,
        'variable_pool_size': 4,
        'function_pool_size': 6,
        'closure_pool_size': 0,
    }
