"""Run-time configuration of a calculator session."""

from dataclasses import dataclass

from regcalc.lang import numerical


@dataclass
class Config:
    """Options shared by a Session and its ErrorHandler. Defaults reproduce the calculator's original output."""
    width: int = numerical.WIDTH  # bits per register value
    echo: bool = True             # echo every tokenized line before processing it
    trace: bool = False           # print evaluation steps
    verbose: bool = False         # print tracebacks and diagnoses with errors
    color: bool = True

    def __post_init__(self):
        if self.width not in numerical.WIDTHS:
            raise ValueError(f"width must be one of {', '.join(map(str, numerical.WIDTHS))}, got {self.width}")

    @classmethod
    def from_args(cls, args):
        """Builds a Config from parsed command-line args (see regcalc.main)."""
        return cls(width=args.width, echo=not args.no_echo, trace=args.trace, verbose=args.verbose,
                   color=not args.no_color)
