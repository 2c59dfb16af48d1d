"""Optimization utilities for expression trees."""

from .memory_pool import NodePool, get_global_pool, clear_global_pool
from .constant_folding import ConstantFolder, fold_constants

__all__ = ['NodePool', 'get_global_pool', 'clear_global_pool', 'ConstantFolder', 'fold_constants']
