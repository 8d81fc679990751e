import unittest

from sril.lang import value
from sril.lang.env import Environment
from sril.lang.error import BindingNotFoundError, DivisionByZeroError, IntegerOverflowError, SrilException
from sril.lang.evaluator import evaluate, evaluate_block, evaluate_operation, truncated_div
from sril.pure.lexical import Block, BindingDef, BindingUsage, Number, Operation, Operator


class OperationTestCase(unittest.TestCase):

    def test_evaluate_operation(self):
        cases = {
            Operation(Number(10), Number(10), Operator.ADD): value.Number(20),
            Operation(Number(1), Number(5), Operator.SUB): value.Number(-4),
            Operation(Number(5), Number(6), Operator.MUL): value.Number(30),
            Operation(Number(200), Number(20), Operator.DIV): value.Number(10),
            Operation(Number(7), Number(2), Operator.DIV): value.Number(3),
            Operation(Number(0), Number(9), Operator.DIV): value.Number(0),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate_operation(case), str(case))

    def test_division_by_zero(self):
        with self.assertRaises(DivisionByZeroError) as ctx:
            evaluate_operation(Operation(Number(10), Number(0), Operator.DIV))
        self.assertEqual("attempt to divide '10' by zero", str(ctx.exception))

    def test_overflow(self):
        should_raise = [
            Operation(Number(2147483647), Number(1), Operator.ADD),
            Operation(Number(65536), Number(65536), Operator.MUL),
            Operation(Number(-2147483648), Number(1), Operator.SUB),
            Operation(Number(-2147483648), Number(-1), Operator.DIV),
        ]
        for case in should_raise:
            self.assertRaises(IntegerOverflowError, evaluate_operation, case)

        self.assertEqual(value.Number(-2147483647),
                         evaluate_operation(Operation(Number(0), Number(2147483647), Operator.SUB)))

    def test_truncated_div(self):
        cases = {(7, 2): 3, (-7, 2): -3, (7, -2): -3, (-7, -2): 3, (0, 5): 0}
        for (lhs, rhs), expected in cases.items():
            self.assertEqual(expected, truncated_div(lhs, rhs), (lhs, rhs))


class EvaluateTestCase(unittest.TestCase):

    def test_number(self):
        self.assertEqual(value.Number(5), evaluate(Number(5), Environment()))

    def test_binding_def(self):
        env = Environment()
        self.assertIs(value.Unit, evaluate(BindingDef("whatever", Number(-10)), env))
        self.assertEqual(value.Number(-10), env.get_binding_value("whatever"))

    def test_binding_usage(self):
        env = Environment()
        env.store_binding("ten", value.Number(10))
        self.assertEqual(value.Number(10), evaluate(BindingUsage("ten"), env))

        with self.assertRaises(BindingNotFoundError) as ctx:
            evaluate(BindingUsage("i_dont_exist"), env)
        self.assertEqual("binding with name 'i_dont_exist' does not exist", ctx.exception.msg)

    def test_unknown_node(self):
        with self.assertRaises(SrilException) as ctx:
            evaluate(object(), Environment())
        self.assertTrue(ctx.exception.internal)


class BlockTestCase(unittest.TestCase):

    def test_empty_block(self):
        self.assertIs(value.Unit, evaluate_block(Block(()), Environment()))
        self.assertIs(value.Unit, evaluate(Block(()), Environment()))

    def test_last_statement_value(self):
        cases = {
            Block((Number(10),)): value.Number(10),
            Block((Number(25),)): value.Number(25),
            Block((BindingDef("one", Number(1)), BindingUsage("one"))): value.Number(1),
            Block((Number(100), Number(30), Operation(Number(10), Number(7), Operator.SUB))): value.Number(3),
            Block((BindingDef("a", Number(10)), BindingDef("b", BindingUsage("a")), BindingUsage("b"))):
                value.Number(10),
            Block((Block((Number(4),)),)): value.Number(4),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case, Environment()), str(case))

    def test_only_binding_defs(self):
        block = Block((
            BindingDef("foo", Number(5)),
            BindingDef("bar", Number(4)),
            BindingDef("baz", Number(3)),
        ))
        self.assertIs(value.Unit, evaluate(block, Environment()))

    def test_sees_parent_bindings(self):
        env = Environment()
        env.store_binding("x", value.Number(12))

        self.assertEqual(value.Number(12), evaluate_block(Block((BindingUsage("x"),)), env))
        self.assertEqual(value.Number(12), evaluate(Block((Block(()), BindingUsage("x"))), env))

    def test_shadowing_does_not_leak(self):
        env = Environment()
        env.store_binding("x", value.Number(12))

        block = Block((BindingDef("x", Number(1)), BindingDef("y", Number(2)), BindingUsage("x")))
        self.assertEqual(value.Number(1), evaluate(block, env))

        self.assertEqual(value.Number(12), env.get_binding_value("x"))
        self.assertNotIn("y", env)

    def test_undefined_binding(self):
        should_raise = [
            Block((BindingUsage("nope"),)),
            Block((BindingDef("a", Number(1)), BindingUsage("nope"))),
            Block((Block((BindingDef("inner", Number(1)),)), BindingUsage("inner"))),
        ]
        for case in should_raise:
            self.assertRaises(BindingNotFoundError, evaluate, case, Environment())

    def test_failed_binding_def_stores_nothing(self):
        env = Environment()
        self.assertRaises(DivisionByZeroError, evaluate, BindingDef("a", Operation(Number(1), Number(0), Operator.DIV)),
                          env)
        self.assertNotIn("a", env)


if __name__ == '__main__':
    unittest.main()
