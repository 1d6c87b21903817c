"""Register table: the single mapping from register name to its current lazy value."""

from regcalc.pure.lazy import LazyValue, Reference


class RegisterTable:
    """Maps normalized (lowercase) register names to LazyValues. Entries are replaced, never deleted."""

    def __init__(self):
        self._registers = {}

    @staticmethod
    def normalize(name):
        return name.lower()

    def get(self, name):
        """Returns the current value of register name, or None if it was never assigned."""
        return self._registers.get(self.normalize(name))

    def put(self, name, value):
        """Replaces the value of register name with value."""
        if not Reference.check_grammar(name):
            raise ValueError(f"'{name}' is not a valid register name")
        if not isinstance(value, LazyValue):
            raise TypeError(f"register values must be LazyValues, got '{value!r}'")

        self._registers[self.normalize(name)] = value

    def __contains__(self, name):
        return isinstance(name, str) and self.normalize(name) in self._registers

    def __len__(self):
        return len(self._registers)

    def __iter__(self):
        return iter(sorted(self._registers))

    def __repr__(self):
        return f"RegisterTable({', '.join(f'{name}={value.expr}' for name, value in sorted(self._registers.items()))})"
