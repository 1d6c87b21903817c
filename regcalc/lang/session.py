"""Session control for the calculator. Processes input lines one at a time against a register table, either from a
file or from the interactive shell.
"""

from regcalc.lang.config import Config
from regcalc.lang.error import InputError
from regcalc.lang.lexical import Grammar, MutationStmt, PrintStmt, QuitStmt
from regcalc.pure.lazy import Evaluator
from regcalc.pure.table import RegisterTable


class Session:
    """Governs a calculator session, which owns the register table for its whole lifetime."""
    SH_FILE = "<stdin>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, config=None):
        self.config = config if config is not None else Config()

        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path  # used for error messages
        self.registers = RegisterTable()
        self.evaluator = Evaluator(self.registers, self.config.width, error_handler)

        self.running = True  # becomes False on 'quit'; nothing is processed afterwards

    def add(self, line, line_num=0):
        """Processes one line: echoes its tokens, then quits, prints, or mutates a register. Returns the processed
        statement, or None if the line was blank or invalid. Errors are reported and never leave the table changed.
        """
        if not self.running:
            return None

        tokens = Grammar.tokenize(line)
        if self.config.echo:
            print(Grammar.echo(tokens))

        if not tokens:
            return None

        processed = None
        self.error_handler.register_line(self.path, line.rstrip("\r\n"), line_num)  # in case error is raised
        with self.error_handler:
            stmt = Grammar.infer(tokens, line)

            if isinstance(stmt, QuitStmt):
                self.running = False

            elif isinstance(stmt, PrintStmt):
                self.print_registers(stmt.names)

            elif isinstance(stmt, MutationStmt):
                self.registers.put(stmt.register, stmt.build(self.registers, self.config.width))

            processed = stmt

        self.error_handler.remove_line(self.path)  # every print target's error was reported against this line
        return processed

    def print_registers(self, names):
        """Evaluates and prints each register in names. Undefined registers print nothing; a register that fails to
        evaluate reports the error without affecting the others.
        """
        for name in names:
            value = self.registers.get(name)
            if value is None:
                continue

            with self.error_handler:
                print(self.evaluator.evaluate(value, name))

    def run_file(self):
        """Processes every line of self.path until end of file or 'quit'."""
        try:
            with open(self.path, "r") as file:
                for line_num, line in enumerate(file, 1):
                    self.add(line, line_num)
                    if not self.running:
                        break
        except (OSError, UnicodeDecodeError) as error:
            raise InputError(self.path, getattr(error, "strerror", None) or error) from error
