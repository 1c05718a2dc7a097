# File: pyIplcSimLib/arch/insts.py
# --------------------------------------------------------------------
# Instruction records carried through the pipeline slots.
#
# Only register identifiers and addresses are kept; no values are
# ever computed. Register -1 means "not tracked".
#
# Date  \ 19 Oct 2026

from dataclasses import dataclass


@dataclass
class Inst:
    pc: int = 0

    mnemonic = 'undef'

    def uses(self, reg):
        """True if an instruction in the ALU stage touches reg."""
        return False

    def linetrace(self):
        return f"{self.mnemonic}@{self.pc:#x}"


@dataclass
class RType(Inst):
    mnemonic: str = 'add'
    dest: int = 0
    reg1: int = 0
    reg2: int = 0    # register or constant

    def uses(self, reg):
        return reg in (self.reg1, self.reg2, self.dest)


@dataclass
class LoadWord(Inst):
    dest: int = 0
    base: int = -1
    data_address: int = 0

    mnemonic = 'lw'

    @property
    def mem_reg(self):
        return self.dest

    def uses(self, reg):
        return reg in (self.dest, self.base)


@dataclass
class StoreWord(Inst):
    src: int = 0
    base: int = -1
    data_address: int = 0

    mnemonic = 'sw'

    @property
    def mem_reg(self):
        return self.src

    def uses(self, reg):
        return reg in (self.base, self.src)


@dataclass
class Branch(Inst):
    reg1: int = -1
    reg2: int = -1

    mnemonic = 'beq'

    def uses(self, reg):
        return reg in (self.reg1, self.reg2)


@dataclass
class Jump(Inst):
    mnemonic: str = 'j'


@dataclass
class Syscall(Inst):
    mnemonic = 'syscall'


@dataclass
class Nop(Inst):
    mnemonic = 'nop'


# Instructions that go to the data cache in the Mem stage
MEM_INSTS = (LoadWord, StoreWord)
