"""Lazy register values and their evaluation.

A register does not hold a number but a small expression tree, which is only evaluated when the register is printed:

```
<lazy-value> ::= <literal>                          ; signed fixed-width integer
               | <reference>                        ; name of a register, looked up at evaluation time
               | <lazy-value> <op> <lazy-value>     ; "binary op", op is one of add/subtract/multiply/divide
```

Because references are resolved by name through the register table, redefining a register changes the value of every
expression that references it. Lazy values themselves are immutable, so registers may freely share subtrees.
"""

from abc import abstractmethod, ABC
import re

from regcalc.lang import numerical
from regcalc.lang.error import CyclicReference, DivisionByZero, UnknownOperator, UnresolvedReference


class LazyValue(ABC):
    """Superclass that represents any node of a lazy expression tree."""
    __slots__ = ()

    @property
    @abstractmethod
    def nodes(self):
        """Child nodes of this value, in evaluation order."""

    @property
    @abstractmethod
    def expr(self):
        """Readable infix rendering of this value."""

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"{type(self).__name__}('{self.expr}')"

    def __str__(self):
        return self.expr


class Literal(LazyValue):
    """A signed integer."""
    __slots__ = ("number",)

    def __init__(self, number):
        if isinstance(number, bool) or not isinstance(number, int):
            raise TypeError(f"expected int, got '{number!r}'")
        object.__setattr__(self, "number", number)

    @property
    def nodes(self):
        return []

    @property
    def expr(self):
        return str(self.number)

    def __eq__(self, other):
        return isinstance(other, Literal) and self.number == other.number

    def __hash__(self):
        return hash((Literal, self.number))


class Reference(LazyValue):
    """Name of a register. Resolved by table lookup every time it is evaluated."""
    __slots__ = ("name",)
    NAME = re.compile(r"\w+", re.ASCII)

    def __init__(self, name):
        if not Reference.check_grammar(name):
            raise ValueError(f"'{name}' is not a valid register name")
        object.__setattr__(self, "name", name.lower())

    @staticmethod
    def check_grammar(name):
        """Whether or not name is a valid register name: one or more letters, digits or underscores."""
        return isinstance(name, str) and Reference.NAME.fullmatch(name) is not None

    @property
    def nodes(self):
        return []

    @property
    def expr(self):
        return self.name

    def __eq__(self, other):
        return isinstance(other, Reference) and self.name == other.name

    def __hash__(self):
        return hash((Reference, self.name))


class BinaryOp(LazyValue):
    """An operator applied to two lazy values. Both sides are always evaluated, lhs first."""
    __slots__ = ("op", "lhs", "rhs")
    OPERATORS = tuple(numerical.OPERATIONS)

    def __init__(self, op, lhs, rhs):
        """Use build for operator tokens that come from user input."""
        if op not in BinaryOp.OPERATORS:
            raise ValueError(f"'{op}' is not an operator")
        if not isinstance(lhs, LazyValue) or not isinstance(rhs, LazyValue):
            raise TypeError("operands of a BinaryOp must be LazyValues")

        object.__setattr__(self, "op", op)
        object.__setattr__(self, "lhs", lhs)
        object.__setattr__(self, "rhs", rhs)

    @classmethod
    def build(cls, op, lhs, rhs):
        """Returns BinaryOp(op, lhs, rhs), raising UnknownOperator if op is not an operator."""
        if op not in cls.OPERATORS:
            raise UnknownOperator(op)
        return cls(op, lhs, rhs)

    @property
    def nodes(self):
        return [self.lhs, self.rhs]

    @property
    def expr(self):
        return f"({self.lhs.expr} {self.op} {self.rhs.expr})"

    def __eq__(self, other):
        return (isinstance(other, BinaryOp) and self.op == other.op
                and self.lhs == other.lhs and self.rhs == other.rhs)

    def __hash__(self):
        return hash((BinaryOp, self.op, self.lhs, self.rhs))


class Evaluator:
    """Demand-driven post-order evaluation of lazy values against a register table. Uses an explicit stack instead of
    recursion, so deep expression trees (one level per mutation) are not limited by Python's recursion limit.
    """

    def __init__(self, registers, width=numerical.WIDTH, error_handler=None):
        """registers only needs a get(name) method returning a LazyValue or None. error_handler receives trace steps."""
        self.registers = registers
        self.width = width
        self.error_handler = error_handler

    def _step(self, kind, expr):
        if self.error_handler is not None:
            self.error_handler.register_step(kind, expr)

    @staticmethod
    def _target(value, target):
        return target if target is not None else value.expr

    def evaluate(self, value, target=None):
        """Returns value as an int. target names the register being evaluated and is only used for error messages.
        Raises UnresolvedReference, DivisionByZero or CyclicReference.
        """
        operands = []
        resolving = []  # chain of register names whose values are being evaluated
        done = {}       # id(node): result, for subtrees shared between copied register values
        stack = [(value, False)]

        while stack:
            node, expanded = stack.pop()

            if not expanded and id(node) in done:
                operands.append(done[id(node)])

            elif isinstance(node, Literal):
                operands.append(node.number)

            elif isinstance(node, Reference) and expanded:
                resolving.pop()
                done[id(node)] = operands[-1]

            elif isinstance(node, Reference):
                if node.name in resolving:
                    chain = " -> ".join(resolving[resolving.index(node.name):] + [node.name])
                    raise CyclicReference(self._target(value, target), chain)

                found = self.registers.get(node.name)
                if found is None:
                    raise UnresolvedReference(self._target(value, target), node.name)

                self._step("ref", node.name)
                resolving.append(node.name)
                stack.append((node, True))
                stack.append((found, False))

            elif isinstance(node, BinaryOp) and expanded:
                rhs = operands.pop()
                lhs = operands.pop()
                try:
                    result = numerical.apply(node.op, lhs, rhs, self.width)
                except ZeroDivisionError:
                    raise DivisionByZero(self._target(value, target)) from None

                self._step("op", f"{lhs} {node.op} {rhs} = {result}")
                operands.append(result)
                done[id(node)] = result

            elif isinstance(node, BinaryOp):
                stack.append((node, True))
                stack.append((node.rhs, False))
                stack.append((node.lhs, False))

            else:
                raise TypeError(f"cannot evaluate '{node!r}'")

        result, = operands
        return numerical.wrap(result, self.width)
