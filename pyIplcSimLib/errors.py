# File: pyIplcSimLib/errors.py
# --------------------------------------------------------------------
# Exceptions raised by the simulator.
#
# Date  \ 19 Oct 2026

class IplcSimError(Exception):
    """Base class for every simulator failure."""


class ConfigError(IplcSimError):
    """The requested cache configuration cannot be built."""


class InvariantViolation(IplcSimError):
    """Internal bookkeeping is corrupted (e.g. no LRU victim in a set)."""


class MalformedInput(IplcSimError):
    """A trace line could not be turned into an instruction record."""

    def __init__(self, msg, lineno=None, line=None, pc=None):
        self.lineno = lineno
        self.line   = line
        self.pc     = pc

        where = []
        if lineno is not None: where.append(f"line {lineno}")
        if pc     is not None: where.append(f"address {pc:#x}")
        if where:
            msg = f"{msg} ({', '.join(where)})"
        super().__init__(msg)
