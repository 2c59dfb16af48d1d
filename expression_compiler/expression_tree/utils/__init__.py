"""Utilities for expression trees."""

from .validator import ExpressionValidator
from .printer import format_tree, print_tree
from .tree_utils import (
    get_all_nodes, walk_with_depth, calculate_tree_depth,
    find_nodes_by_type, find_nodes_by_name, apply_to_all_nodes,
    validate_tree_structure, is_fully_folded,
    get_constants, get_variables, get_functions, get_closures
)

__all__ = [
    'ExpressionValidator', 'format_tree', 'print_tree',
    'get_all_nodes', 'walk_with_depth', 'calculate_tree_depth',
    'find_nodes_by_type', 'find_nodes_by_name', 'apply_to_all_nodes',
    'validate_tree_structure', 'is_fully_folded',
    'get_constants', 'get_variables', 'get_functions', 'get_closures'
]
