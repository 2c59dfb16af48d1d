"""
Tree Utility Functions

Traversal and analysis helpers shared by the optimizer, the validator and
the debug printer.
"""

from typing import Callable, Iterator, List, Tuple, TypeVar, cast

from ..core.node import Node, ConstantNode, VariableNode, FunctionNode, ClosureNode
from ..core.operators import MAX_ARITY

T = TypeVar('T', bound=Node)


def get_all_nodes(node: Node, traversal_order: str = 'depth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'depth_first' (default, pre-order) or 'breadth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'depth_first':
        return [n for n, _ in walk_with_depth(node)]
    elif traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children)

    return all_nodes


def walk_with_depth(node: Node, depth: int = 0) -> Iterator[Tuple[Node, int]]:
    """Pre-order walk yielding (node, depth) pairs, children left to right"""
    yield node, depth
    for child in node.children:
        yield from walk_with_depth(child, depth + 1)


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    if not node.children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in node.children)


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    """Find all nodes of a specific class in the tree."""
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]


def find_nodes_by_name(node: Node, name: str) -> List[Node]:
    """Find all variable and function nodes bound to the given identifier."""
    return [n for n in get_all_nodes(node)
            if isinstance(n, (VariableNode, FunctionNode)) and n.name == name]


def apply_to_all_nodes(node: Node, func: Callable[[Node], T]) -> List[T]:
    """Apply a function to all nodes in pre-order."""
    return [func(n) for n in get_all_nodes(node)]


def validate_tree_structure(node: Node) -> bool:
    """
    Validate that the tree structure is consistent and well-formed.

    Leaves carry no children, function and closure nodes carry exactly
    `arity` children and the arity is within 0..MAX_ARITY.
    """
    for current in get_all_nodes(node):
        if isinstance(current, FunctionNode):
            if not 0 <= current.arity <= MAX_ARITY:
                return False
            if len(current.children) != current.arity:
                return False
            if not callable(current.function):
                return False
        elif isinstance(current, (ConstantNode, VariableNode)):
            if current.children:
                return False
        else:
            return False
    return True


def is_fully_folded(node: Node) -> bool:
    """True if no pure function node has only constant children."""
    for current in get_all_nodes(node):
        if isinstance(current, FunctionNode) and current.pure:
            if all(isinstance(child, ConstantNode) for child in current.children):
                return False
    return True


# Convenience functions for common operations
def get_constants(node: Node) -> List[ConstantNode]:
    """Get all constant nodes in the tree."""
    return cast(List[ConstantNode], find_nodes_by_type(node, ConstantNode))


def get_variables(node: Node) -> List[VariableNode]:
    """Get all variable nodes in the tree."""
    return cast(List[VariableNode], find_nodes_by_type(node, VariableNode))


def get_functions(node: Node) -> List[FunctionNode]:
    """Get all function and closure nodes in the tree."""
    return cast(List[FunctionNode], find_nodes_by_type(node, FunctionNode))


def get_closures(node: Node) -> List[ClosureNode]:
    """Get all closure nodes in the tree."""
    return cast(List[ClosureNode], find_nodes_by_type(node, ClosureNode))
