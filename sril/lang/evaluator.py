"""Tree-walking evaluation of parsed sril statements. The syntax tree is a closed set of node types (see
pure/lexical.py), so evaluation is a single dispatch on the node's type rather than a method on every node.
"""

from sril.lang import value
from sril.lang.error import DivisionByZeroError, IntegerOverflowError, SrilException
from sril.pure.lexical import Block, BindingDef, BindingUsage, Number, Operation, Operator


def truncated_div(lhs, rhs):
    """Integer division rounding toward zero, unlike Python's floor division."""
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


ARITHMETIC = {
    Operator.ADD: lambda lhs, rhs: lhs + rhs,
    Operator.SUB: lambda lhs, rhs: lhs - rhs,
    Operator.MUL: lambda lhs, rhs: lhs * rhs,
    Operator.DIV: truncated_div,
}


def evaluate_operation(operation):
    lhs, rhs = operation.lhs.value, operation.rhs.value

    if operation.op is Operator.DIV and rhs == 0:
        raise DivisionByZeroError(lhs)

    result = ARITHMETIC[operation.op](lhs, rhs)
    if not value.in_range(result):
        raise IntegerOverflowError(str(operation))

    return value.Number(result)


def evaluate_block(block, env):
    """Evaluates block's statements in a child of env and returns the last one's value. Bindings made inside the
    block die with the child environment. Bindings made before a failing statement are not rolled back.
    """
    if not block.statements:
        return value.Unit

    child = env.create_child()

    *leading, last = block.statements
    for statement in leading:
        evaluate(statement, child)

    return evaluate(last, child)


def evaluate(node, env):
    """Evaluates a Statement (BindingDef or any Expression) against env and returns its Value. Only a BindingDef
    changes env.
    """
    if isinstance(node, BindingDef):
        env.store_binding(node.name, evaluate(node.val, env))
        return value.Unit

    if isinstance(node, Number):
        return value.Number(node.value)

    if isinstance(node, Operation):
        return evaluate_operation(node)

    if isinstance(node, BindingUsage):
        return env.get_binding_value(node.name)

    if isinstance(node, Block):
        return evaluate_block(node, env)

    raise SrilException(f"cannot evaluate '{type(node).__name__}'", internal=True)
