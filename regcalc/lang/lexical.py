"""Lexical analysis of calculator input lines. Lines are case-insensitive: each line is lowercased and split on runs of
whitespace before its grammar is inferred.

All grammar can be loosely defined as follows:

```
<quit_stmt>     ::= "quit" <token>*                 ; trailing tokens are ignored
<print_stmt>    ::= "print" <register>*             ; undefined registers print nothing
<mutation_stmt> ::= <register> <op> <operand>       ; first assignment ignores <op>

<register>      ::= [A-Za-z0-9_]+
<operand>       ::= [+-]?[0-9]+ | <register>
```

Anything else is invalid input.
"""

from abc import abstractmethod, ABC

from regcalc.lang import numerical
from regcalc.lang.error import InvalidInput
from regcalc.pure.lazy import BinaryOp, Literal, Reference


class Grammar(ABC):
    """Superclass representing any statement of the calculator."""

    def __init__(self, tokens, original_expr=None):
        """Assumes check_grammar has been run."""
        self.tokens = list(tokens)
        self.expr = " ".join(self.tokens)
        self.original_expr = self.expr if original_expr is None else original_expr  # used for error messages
        self._cls = type(self).__name__

    @staticmethod
    @abstractmethod
    def check_grammar(tokens, original_expr):
        """This method should check whether tokens are this statement's grammar. It should also raise an InvalidInput if
        the tokens are similar to the accepted grammar but syntactically invalid. original_expr is used for error
        messages.
        """

    @staticmethod
    def tokenize(line):
        """Lowercases line and splits it on whitespace."""
        return line.lower().split()

    @staticmethod
    def echo(tokens):
        """Human-readable rendering of a tokenized line: '[a, add, 5]'."""
        return "[" + ", ".join(tokens) + "]"

    @staticmethod
    def locate(token, original_expr):
        """Returns (start, end) of token in the stripped original_expr, for error diagnoses."""
        start = max(original_expr.strip().lower().find(token), 0)
        return start, start + len(token)

    @classmethod
    def infer(cls, tokens, original_expr=None):
        """Infers the type of statement that tokens are and returns an object of the correct Grammar subclass."""
        if original_expr is None:
            original_expr = " ".join(tokens)

        for subclass in cls.__subclasses__():
            if subclass.check_grammar(tokens, original_expr):
                return subclass(tokens, original_expr)

        raise InvalidInput(original_expr.strip())

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.tokens == self.tokens

    def __hash__(self):
        return hash(self.expr)


class QuitStmt(Grammar):
    """Terminates the calculator."""

    @staticmethod
    def check_grammar(tokens, original_expr):
        return bool(tokens) and tokens[0] == "quit"


class PrintStmt(Grammar):
    """Prints the value of each named register that exists."""

    def __init__(self, tokens, original_expr=None):
        super().__init__(tokens, original_expr)
        self.names = self.tokens[1:]

    @staticmethod
    def check_grammar(tokens, original_expr):
        return bool(tokens) and tokens[0] == "print"


class MutationStmt(Grammar):
    """<register> <op> <operand>. Stores operand in register if it has no value yet, else stores the op applied to the
    register's current value and operand.
    """

    def __init__(self, tokens, original_expr=None):
        super().__init__(tokens, original_expr)
        self.register, self.op, self.operand = self.tokens

    @staticmethod
    def check_grammar(tokens, original_expr):
        if len(tokens) != 3:
            return False

        register, __, operand = tokens
        if not Reference.check_grammar(register):
            offending = register
        elif not (Reference.check_grammar(operand) or numerical.LITERAL.fullmatch(operand)):
            offending = operand
        else:
            return True

        start, end = Grammar.locate(offending, original_expr)
        raise InvalidInput(original_expr.strip(), start=start, end=end)

    def operand_value(self, registers, width=numerical.WIDTH):
        """Returns the LazyValue of this statement's operand. An existing register is copied by value, so later changes
        to it are not seen; a register that doesn't exist yet becomes a Reference that is resolved when printed.
        """
        num = numerical.number(self.operand, width)
        if num is not None:
            return Literal(num)

        if not Reference.check_grammar(self.operand):  # a literal out of range
            start, end = Grammar.locate(self.operand, self.original_expr)
            raise InvalidInput(self.original_expr.strip(), start=start, end=end)

        current = registers.get(self.operand)
        return current if current is not None else Reference(self.operand)

    def build(self, registers, width=numerical.WIDTH):
        """Returns the new LazyValue of self.register without storing it. Raises UnknownOperator if the register exists
        and self.op is not an operator.
        """
        rhs = self.operand_value(registers, width)
        current = registers.get(self.register)
        if current is None:
            return rhs
        return BinaryOp.build(self.op, current, rhs)
