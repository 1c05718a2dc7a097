# File: pyIplcSimLib/trace/feeder.py
# --------------------------------------------------------------------
# Trace reader: turns "<hex pc> <mnemonic> <operands>" lines into
# instruction records and pushes them through a processor.
#
# Date  \ 19 Oct 2026

import logging
import re

from pyIplcSimLib.arch.insts import (RType, LoadWord, StoreWord, Branch,
                                     Jump, Syscall, Nop)
from pyIplcSimLib.errors     import MalformedInput

log = logging.getLogger(__name__)

_leading_int = re.compile(r'\s*([+-]?\d+)')


def atoi(text):
    """Leading decimal integer of text, 0 if there is none."""
    match = _leading_int.match(text)
    return int(match.group(1)) if match else 0


def parse_reg(token):
    if token.endswith(','):
        token = token[:-1]
    if token.startswith('$'):
        token = token[1:]
    return atoi(token)


def parse_hex(token, what, lineno, line):
    try:
        return int(token, 16)
    except ValueError:
        raise MalformedInput(f"Malformed {what} {token!r}",
                             lineno=lineno, line=line) from None


def parse_line(line, lineno=None):
    """Decode one trace line into an instruction record."""
    tokens = line.split()
    if len(tokens) < 2:
        raise MalformedInput("Malformed instruction", lineno=lineno, line=line)

    pc       = parse_hex(tokens[0], 'instruction address', lineno, line)
    mnemonic = tokens[1]

    def expect(n, kind):
        if len(tokens) < n:
            raise MalformedInput(f"Malformed {kind} instruction ({mnemonic})",
                                 lineno=lineno, line=line, pc=pc)

    if mnemonic.startswith(('add', 'sll', 'ori')):
        expect(5, 'RTYPE')
        return RType(pc=pc, mnemonic=mnemonic, dest=parse_reg(tokens[2]),
                     reg1=parse_reg(tokens[3]), reg2=parse_reg(tokens[4]))

    if mnemonic.startswith('lui'):
        expect(4, 'RTYPE')
        return RType(pc=pc, mnemonic=mnemonic, dest=parse_reg(tokens[2]),
                     reg1=-1, reg2=-1)

    if mnemonic.startswith(('lw', 'sw')):
        expect(5, 'memory')
        reg          = parse_reg(tokens[2])
        data_address = parse_hex(tokens[4], 'data address', lineno, line)
        # Base registers are not tracked
        if mnemonic.startswith('lw'):
            return LoadWord(pc=pc, dest=reg, base=-1, data_address=data_address)
        return StoreWord(pc=pc, src=reg, base=-1, data_address=data_address)

    if mnemonic.startswith('beq'):
        return Branch(pc=pc, reg1=-1, reg2=-1)

    if mnemonic.startswith(('jal', 'jr', 'j')):
        return Jump(pc=pc, mnemonic=mnemonic)

    if mnemonic.startswith('syscall'):
        return Syscall(pc=pc)

    if mnemonic.startswith('nop'):
        return Nop(pc=pc)

    raise MalformedInput(f"Do not know how to process instruction: {mnemonic}",
                         lineno=lineno, line=line, pc=pc)


class Feeder:
    def __init__(self, proc, on_insert=None):
        self.proc      = proc
        self.on_insert = on_insert
        self.lineno    = 0

    def feed_inst(self, inst):
        self.proc.fetch(inst.pc)
        self.proc.insert(inst)
        if self.on_insert is not None:
            self.on_insert(inst)
        return inst

    def feed_line(self, line):
        self.lineno += 1
        if not line.strip():
            return None
        return self.feed_inst(parse_line(line, self.lineno))

    def feed(self, lines):
        count = 0
        for line in lines:
            if self.feed_line(line) is not None:
                count += 1
        return count

    def run(self, path):
        log.info("Reading trace %s", path)
        with open(path, 'r') as trace:
            count = self.feed(trace)
        log.info("Fed %d instructions from %s", count, path)
        return count
