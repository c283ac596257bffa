"""Expression model.

Symbolic trees for unary predicates and selectors, the visitor used to
rewrite them (parameter unification), a compiler into Python callables and a
text formatter.
"""

from .compiler import ExpressionCompiler, compile_lambda
from .formatter import ExpressionFormatter, format_expression
from .nodes import (
    FUNCTIONS,
    BoolOp,
    Call,
    Compare,
    Constant,
    Expression,
    Lambda,
    Member,
    Not,
    Parameter,
)
from .proxy import ExpressionProxy, capture, unwrap
from .visitor import (
    ExpressionVisitor,
    ParameterVisitor,
    free_parameters,
    replace_parameter,
    with_parameter,
)

__all__ = (
    "FUNCTIONS",
    "BoolOp",
    "Call",
    "Compare",
    "Constant",
    "Expression",
    "ExpressionCompiler",
    "ExpressionFormatter",
    "ExpressionProxy",
    "ExpressionVisitor",
    "Lambda",
    "Member",
    "Not",
    "Parameter",
    "ParameterVisitor",
    "capture",
    "compile_lambda",
    "format_expression",
    "free_parameters",
    "replace_parameter",
    "unwrap",
    "with_parameter",
)
