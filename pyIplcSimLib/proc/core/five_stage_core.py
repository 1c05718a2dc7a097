# five_stage_core.py
# --------------------------------------------------------------------
# Five-stage in-order timing core.
#
# The core does not execute anything. It moves instruction records
# through Fetch/Decode/ALU/Mem/Writeback one cycle at a time and
# charges cycles for branch mispredictions, data cache misses and
# load/store hazards against the instruction in the ALU stage.
#
# Date  \ 19 Oct 2026

import logging

from pyIplcSimLib.arch.insts import (RType, LoadWord, StoreWord, Branch,
                                     Jump, Syscall, Nop, MEM_INSTS)

log = logging.getLogger(__name__)

# Flat penalty for any cache miss
CACHE_MISS_DELAY = 10

# Stage slots
F, D, X, M, W = range(5)
NUM_STAGES    = 5
STAGE_NAMES   = ('F', 'D', 'X', 'M', 'W')


class FiveStageTimingCore():
  def __init__(s, cache, bp):
    # Cycle Count
    s.cycle_count = 0

    # Counters
    s.inst_count          = 0
    s.branch_count        = 0
    s.correct_predictions = 0

    # Pipeline slots; None is a bubble
    s.pipeline = [None] * NUM_STAGES

    # Address of the instruction being fetched next
    s.pc = 0

    # Unified cache consulted by the Mem stage
    s.cache = cache

    # Static branch predictor
    s.bp = bp

  def occupied(s, stage):
    inst = s.pipeline[stage]
    return inst is not None and inst.pc != 0

  # Nothing left but bubbles and nops
  def empty(s):
    return all(inst is None or isinstance(inst, Nop) for inst in s.pipeline)

  #=====================================================================
  # Writeback Stage
  #=====================================================================
  def w(s):
    if s.occupied(W):
      s.inst_count += 1
      log.debug("Retired instruction at %#x (%s) at cycle %d",
                s.pipeline[W].pc, s.pipeline[W].mnemonic, s.cycle_count)

  #=====================================================================
  # Decode Stage (branch resolution)
  #=====================================================================
  def d(s):
    br = s.pipeline[D]
    if not isinstance(br, Branch):
      return

    s.branch_count += 1

    # Fall-through sits in F iff the branch was not taken
    nxt   = s.pipeline[F]
    taken = not (nxt is not None and br.pc + 4 == nxt.pc)

    # Only judge the prediction once something was actually fetched
    if not s.occupied(F):
      return

    if taken == s.bp.predict(br.pc):
      s.correct_predictions += 1
      log.debug("Branch at %#x %s, predicted correctly", br.pc,
                'taken' if taken else 'not taken')
      return

    log.debug("Branch at %#x %s, mispredicted (fetch %#x)", br.pc,
              'taken' if taken else 'not taken', nxt.pc)

    # Penalty cycle: everything behind Fetch moves one step
    s.cycle_count += 1
    s.pipeline[W] = s.pipeline[M]
    s.pipeline[M] = s.pipeline[X]
    s.pipeline[X] = s.pipeline[D]
    s.w()

    s.pipeline[D] = None

  #=====================================================================
  # Memory Stage
  #=====================================================================
  def m(s):
    minst = s.pipeline[M]
    if not isinstance(minst, MEM_INSTS):
      return

    if s.cache.access(minst.data_address, 'D'):
      log.debug("DATA HIT:\t Address %#x", minst.data_address)

      # Stall if the instruction behind us touches our register
      xinst = s.pipeline[X]
      if xinst is not None and xinst.uses(minst.mem_reg):
        log.debug("Data hazard on $%d between %#x and %#x",
                  minst.mem_reg, minst.pc, xinst.pc)
        s.cycle_count += 1
    else:
      log.debug("DATA MISS:\t Address %#x", minst.data_address)
      s.cycle_count += CACHE_MISS_DELAY - 1

  #=====================================================================
  # Tick
  #=====================================================================
  def tick(s):
    s.w()
    s.d()
    s.m()

    s.cycle_count += 1

    s.pipeline[W] = s.pipeline[M]
    s.pipeline[M] = s.pipeline[X]
    s.pipeline[X] = s.pipeline[D]
    s.pipeline[D] = s.pipeline[F]
    s.pipeline[F] = None

  #=====================================================================
  # Instruction insertion
  #=====================================================================
  def insert(s, inst):
    s.tick()
    s.pipeline[F] = inst
    return inst

  def rtype(s, mnemonic, dest, reg1, reg2_or_constant):
    return s.insert(RType(pc=s.pc, mnemonic=mnemonic, dest=dest,
                          reg1=reg1, reg2=reg2_or_constant))

  def lw(s, dest, base, data_address):
    return s.insert(LoadWord(pc=s.pc, dest=dest, base=base,
                             data_address=data_address))

  def sw(s, src, base, data_address):
    return s.insert(StoreWord(pc=s.pc, src=src, base=base,
                              data_address=data_address))

  def branch(s, reg1, reg2):
    return s.insert(Branch(pc=s.pc, reg1=reg1, reg2=reg2))

  def jump(s, mnemonic):
    return s.insert(Jump(pc=s.pc, mnemonic=mnemonic))

  def syscall(s):
    return s.insert(Syscall(pc=s.pc))

  def nop(s):
    return s.insert(Nop(pc=s.pc))

  def drain(s):
    while not s.empty():
      s.tick()

  #=====================================================================
  # Linetrace
  #=====================================================================
  def linetrace(s):
    lt_buf = f"(cyc: {s.cycle_count:>6})"
    for name, inst in zip(STAGE_NAMES, s.pipeline):
      slot = inst.linetrace() if inst is not None else ' '
      lt_buf += f" | {name}: {slot: <16}"
    return lt_buf
