"""Register calculator with lazily evaluated registers.

Every register holds an expression tree instead of a number, so assigning to a register changes the value of every
register whose expression references it. Basic program flow:
    1. Lexical analysis: each line is lowercased, tokenized and inferred as a quit, print or mutation statement
        - See regcalc/lang/lexical.py for the line grammar
    2. Mutation: builds a new lazy value from the register's old value and the operand, and stores it
        - See regcalc/pure/lazy.py for lazy values, regcalc/pure/table.py for the register table
    3. Evaluation: only happens on print, by walking the expression tree and resolving references by name

"""

__version__ = "1.0.0"
