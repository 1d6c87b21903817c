import unittest

from regcalc.lang.error import InvalidInput, UnknownOperator
from regcalc.lang.lexical import Grammar, MutationStmt, PrintStmt, QuitStmt
from regcalc.pure.lazy import BinaryOp, Literal, Reference
from regcalc.pure.table import RegisterTable


class GrammarTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "A ADD 5": ["a", "add", "5"],
            "  print  a\tB \n": ["print", "a", "b"],
            "Quit": ["quit"],
            "": [],
            "   \n": [],
        }
        for case, result in cases.items():
            self.assertEqual(result, Grammar.tokenize(case), case)

    def test_echo(self):
        cases = {"[a, add, 5]": ["a", "add", "5"], "[print]": ["print"], "[]": []}
        for result, case in cases.items():
            self.assertEqual(result, Grammar.echo(case), result)

    def test_infer(self):
        cases = {
            "quit": QuitStmt,
            "quit now please": QuitStmt,
            "print": PrintStmt,
            "print a b c": PrintStmt,
            "a add 5": MutationStmt,
            "a bogus b": MutationStmt,
            "help add -5": MutationStmt,
            "a add 99999999999": MutationStmt,
        }
        for case, result in cases.items():
            self.assertIsInstance(Grammar.infer(Grammar.tokenize(case), case), result, case)

        should_raise = ["a", "a add", "a add 5 6", "a-b add 5", "a add 5.5", "a add b-c", "-5 add 1", "hello"]
        for case in should_raise:
            self.assertRaises(InvalidInput, Grammar.infer, Grammar.tokenize(case), case)

    def test_invalid_input_diagnosis(self):
        with self.assertRaises(InvalidInput) as context:
            Grammar.infer(Grammar.tokenize("  a add b-c"), "  a add b-c")

        error = context.exception
        self.assertEqual("a add b-c", error.expr)
        self.assertEqual((6, 9), (error.start, error.end))

    def test_statement_fields(self):
        stmt = Grammar.infer(["print", "a", "b"])
        self.assertEqual(["a", "b"], stmt.names)
        self.assertEqual("print a b", str(stmt))

        stmt = Grammar.infer(["a", "divide", "b"])
        self.assertEqual(("a", "divide", "b"), (stmt.register, stmt.op, stmt.operand))
        self.assertEqual(MutationStmt(["a", "divide", "b"]), stmt)
        self.assertEqual("MutationStmt('a divide b')", repr(stmt))


class MutationStmtTestCase(unittest.TestCase):

    def setUp(self):
        self.registers = RegisterTable()

    def build(self, line, width=32):
        return Grammar.infer(Grammar.tokenize(line), line).build(self.registers, width)

    def test_first_assignment_ignores_operator(self):
        for op in ["add", "subtract", "multiply", "divide", "bogus"]:
            self.assertEqual(Literal(5), self.build(f"x {op} 5"), op)

    def test_later_assignment(self):
        self.registers.put("x", Literal(5))
        cases = {
            "x add 3": BinaryOp("add", Literal(5), Literal(3)),
            "x subtract -3": BinaryOp("subtract", Literal(5), Literal(-3)),
            "x multiply y": BinaryOp("multiply", Literal(5), Reference("y")),
            "x divide x": BinaryOp("divide", Literal(5), Literal(5)),
        }
        for case, result in cases.items():
            self.assertEqual(result, self.build(case), case)

    def test_unknown_operator(self):
        self.registers.put("x", Literal(5))
        with self.assertRaises(UnknownOperator) as context:
            self.build("x modulo 2")

        self.assertIn("bad int operator", context.exception.msg)
        self.assertEqual(Literal(5), self.registers.get("x"))

    def test_operand_aliasing(self):
        self.registers.put("a", BinaryOp("add", Literal(1), Literal(2)))

        self.assertIs(self.registers.get("a"), self.build("b add a"))
        self.assertIs(self.registers.get("a"), self.build("b add A"))
        self.assertEqual(Reference("x"), self.build("b add x"))

    def test_operand_literals(self):
        cases = {
            "b add 2147483647": Literal(2147483647),
            "b add -2147483648": Literal(-2147483648),
            "b add +12": Literal(12),
            "b add 2147483648": Reference("2147483648"),
        }
        for case, result in cases.items():
            self.assertEqual(result, self.build(case), case)

        self.assertEqual(Reference("200"), self.build("b add 200", width=8))
        self.assertRaises(InvalidInput, self.build, "b add -2147483649")


if __name__ == '__main__':
    unittest.main()
