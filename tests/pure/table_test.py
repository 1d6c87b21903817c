import unittest

from regcalc.pure.lazy import BinaryOp, Literal, Reference
from regcalc.pure.table import RegisterTable


class RegisterTableTestCase(unittest.TestCase):

    def setUp(self):
        self.registers = RegisterTable()

    def test_get(self):
        self.assertIsNone(self.registers.get("a"))

        self.registers.put("a", Literal(5))
        for case in ["a", "A"]:
            self.assertEqual(Literal(5), self.registers.get(case), case)

    def test_put_replaces(self):
        self.registers.put("Reg", Literal(1))
        self.registers.put("reg", BinaryOp("add", Literal(1), Reference("x")))

        self.assertEqual(1, len(self.registers))
        self.assertEqual(BinaryOp("add", Literal(1), Reference("x")), self.registers.get("REG"))

    def test_put_invalid(self):
        should_raise = ["", "a-b", "a b", "é", "+5"]
        for case in should_raise:
            self.assertRaises(ValueError, self.registers.put, case, Literal(1))

        should_raise = [5, "5", None]
        for case in should_raise:
            self.assertRaises(TypeError, self.registers.put, "a", case)

        self.assertEqual(0, len(self.registers))

    def test_contains_and_iter(self):
        for name in ["b", "C", "a_1"]:
            self.registers.put(name, Literal(0))

        self.assertIn("B", self.registers)
        self.assertNotIn("d", self.registers)
        self.assertNotIn(5, self.registers)
        self.assertEqual(["a_1", "b", "c"], list(self.registers))
        self.assertEqual("RegisterTable(a_1=0, b=0, c=0)", repr(self.registers))


if __name__ == '__main__':
    unittest.main()
