import math

import pytest

from expression_compiler import (
    LogLevel, SymbolKind, Variable, compile_expression, configure_logging, get_logger,
    make_binding, set_log_level
)
from expression_compiler.expression_tree import ExpressionValidator


@pytest.fixture
def verbose_log(tmp_path):
    path = tmp_path / "compiler.log"
    logger = configure_logging(LogLevel.VERBOSE, log_to_file=True, log_file_path=str(path))
    yield path
    for handler in list(logger.logger.handlers):
        handler.close()
    configure_logging(LogLevel.MODERATE)


def test_failed_compile_is_logged(verbose_log):
    tree, error = compile_expression("1+")
    assert tree is None
    assert "failed near position 2" in verbose_log.read_text()


def test_fold_statistics_are_logged(verbose_log):
    compile_expression("(1+2)*3")
    assert "folded 2 nodes" in verbose_log.read_text()


def test_debug_messages_hidden_below_verbose(verbose_log):
    set_log_level(LogLevel.DETAILED)
    compile_expression("1+")
    assert verbose_log.read_text() == ""
    assert get_logger().log_level == LogLevel.DETAILED


def test_validator(xy):
    _, _, variables = xy
    tree, _ = compile_expression("x + 2*3", variables)
    assert ExpressionValidator.is_valid_expression(tree.root, check_folded=True)
    assert not ExpressionValidator.is_valid_expression(None)

    tree, _ = compile_expression("ln(0)")
    assert not ExpressionValidator.has_finite_value(tree.root)
    tree, _ = compile_expression("ln(1)")
    assert ExpressionValidator.has_finite_value(tree.root)


def test_fold_statistics_follow_log_level(verbose_log):
    set_log_level(LogLevel.DETAILED)
    compile_expression("(1+2)*3")
    assert "folded 2 nodes" in verbose_log.read_text()
    set_log_level(LogLevel.MINIMAL)
    compile_expression("4*5")
    assert "folded 1 nodes" not in verbose_log.read_text()


def test_failing_user_callable_is_warned(verbose_log):
    def reciprocal(a):
        return 1 / a

    set_log_level(LogLevel.MINIMAL)
    tree, _ = compile_expression("reciprocal(x)", [
        Variable("reciprocal", reciprocal, SymbolKind.FUNCTION, 1),
        Variable("x", make_binding(0.0)),
    ])
    assert math.isnan(tree.evaluate())
    assert "'reciprocal' failed during evaluation" in verbose_log.read_text()
    assert "WARNING" in verbose_log.read_text()
