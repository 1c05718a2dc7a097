# File: pyIplcSimLib/proc/five_stage_proc.py
# --------------------------------------------------------------------
# Five-stage in-order processor with a unified cache and a static
# branch predictor.
#
# Date  \ 19 Oct 2026

import logging

from pyIplcSimLib.proc.core        import FiveStageTimingCore, CACHE_MISS_DELAY
from pyIplcSimLib.mem.cache        import SetAssociativeCache
from pyIplcSimLib.predictor.static import StaticPredictor
from pyIplcSimLib.report           import SimStats

log = logging.getLogger(__name__)


class FiveStageInorderProcessor:
    def __init__(self,
                 index_bits:    int  = 10,
                 block_words:   int  = 1,
                 assoc:         int  = 1,
                 predict_taken: bool = False):
        # 1) Unified cache (raises ConfigError before anything else exists)
        self.cache = SetAssociativeCache(index_bits, block_words, assoc)

        # 2) Branch predictor
        self.bp = StaticPredictor(predict_taken)

        # 3) Core
        self.core = FiveStageTimingCore(self.cache, self.bp)

        self.stats = None

    # Instruction fetch: a miss keeps the pipeline moving while the
    # line is brought in; the insert itself accounts for the last cycle.
    def fetch(self, pc):
        self.core.pc = pc
        hit = self.cache.access(pc, 'I')
        if hit:
            log.debug("INST HIT:\t Address %#x", pc)
        else:
            log.debug("INST MISS:\t Address %#x", pc)
            for _ in range(CACHE_MISS_DELAY - 1):
                self.core.tick()
        return hit

    # Insertion passthrough
    def insert(self, inst):       return self.core.insert(inst)
    def rtype(self, *args):       return self.core.rtype(*args)
    def lw(self, *args):          return self.core.lw(*args)
    def sw(self, *args):          return self.core.sw(*args)
    def branch(self, *args):      return self.core.branch(*args)
    def jump(self, mnemonic):     return self.core.jump(mnemonic)
    def syscall(self):            return self.core.syscall()
    def nop(self):                return self.core.nop()

    def finalize(self):
        """Flush the pipeline and freeze the counters."""
        if self.stats is None:
            self.core.drain()
            self.stats = SimStats(
                accesses            = self.cache.accesses,
                hits                = self.cache.hits,
                misses              = self.cache.misses,
                cycles              = self.core.cycle_count,
                instructions        = self.core.inst_count,
                branches            = self.core.branch_count,
                correct_predictions = self.core.correct_predictions,
            )
        return self.stats

    # Combined linetrace
    def linetrace(self):
        core_lt  = self.core.linetrace()
        cache_lt = self.cache.linetrace()
        parts = [core_lt]
        if cache_lt: parts.append(cache_lt)
        return ' | '.join(parts)
