"""Error handling for the register calculator. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every non-fatal error is contained within one input line, so the handler reports it and lets the loop continue.
Fatal errors (unreadable input, interrupts, internal errors) go to stderr and terminate with exit status 1.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a regcalc error. exprs are formatted into msg and
    highlighted; exprs[0] should be the offending expr that caused the error.
    """
    template = "{}"

    def __init__(self, *exprs, msg=None, start=0, end=-1, diagnosis=True, internal=False, fatal=False):
        exprs = [str(expr) for expr in exprs] or [""]
        msg = self.template if msg is None else msg

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        self.fatal = fatal or internal
        super().__init__(self.msg)


class InvalidInput(GenericException):
    """Raised when a line is neither a command nor a well-formed mutation."""
    template = "Invalid input. Try again"


class UnknownOperator(GenericException):
    """Raised when a mutation on an existing register names an operator that does not exist."""
    template = "Unable to perform operation: bad int operator: '{}'"


class UnresolvedReference(GenericException):
    """Raised during evaluation when a reference names a register that is not in the table."""
    template = "Unable to evaluate '{}': register '{}' is undefined"


class DivisionByZero(GenericException):
    template = "Unable to evaluate '{}': division by zero"


class CyclicReference(GenericException):
    """Raised during evaluation when a register (indirectly) refers to itself."""
    template = "Unable to evaluate '{}': cyclic reference {}"


class InputError(GenericException):
    template = "unable to read '{}': {}"

    def __init__(self, *exprs, **kwargs):
        kwargs.setdefault("diagnosis", False)
        super().__init__(*exprs, fatal=True, **kwargs)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom regcalc errors."""
    ERROR = "red"
    TRACE = "cyan"

    def __init__(self, verbose=False, trace=False):
        self.verbose = verbose
        self.trace = trace
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before a line is processed."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line was processed successfully."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, expr):
        """Prints a single evaluation step if tracing is enabled."""
        if self.trace:
            print(colored(f"  {kind:<4}", ErrorHandler.TRACE, attrs=["bold"]) + str(expr))

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error, which must be a GenericException. Non-fatal errors are printed to stdout; fatal errors are
        printed to stderr and terminate the process.
        """
        error_msg = ""
        if self.verbose:
            for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
                if line is not None:
                    error_msg += f"  File '{file}', line {line_num}:\n"
                    error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        if error.fatal:
            error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
            print(error_msg, file=sys.stderr)
            sys.exit(1)

        print(error_msg + error.msg)
        if self.verbose and not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException(msg="keyboard interrupt", fatal=True))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None and issubclass(exc_type, OSError):
            self.throw(GenericException(f"{exc_type.__name__}: {exc_val}", diagnosis=False, fatal=True))
        elif exc_type is not None:
            self.throw(GenericException(f"{exc_type.__name__}: {exc_val}", msg="unknown error: '{}'", internal=True))

        return not do_exit
