# File: pyIplcSimLib/report.py
# --------------------------------------------------------------------
# Final statistics snapshot and its text report.
#
# Date  \ 19 Oct 2026

from dataclasses import dataclass


@dataclass(frozen=True)
class SimStats:
    accesses:            int
    hits:                int
    misses:              int
    cycles:              int
    instructions:        int
    branches:            int
    correct_predictions: int

    @property
    def miss_rate(self) -> float:
        if self.accesses == 0:
            return 0.0
        return self.misses / self.accesses

    @property
    def cpi(self) -> float:
        if self.instructions == 0:
            return 0.0
        return self.cycles / self.instructions


def format_config(cache, bp) -> str:
    return "\n".join([
        "Cache Configuration ",
        f"   Index: {cache.index_bits} bits or {cache.num_sets} lines ",
        f"   BlockSize: {cache.block_words} ",
        f"   Associativity: {cache.assoc} ",
        f"   BlockOffSetBits: {cache.offset_bits} ",
        f"   CacheSize: {cache.size_bits} ",
        f"   Branch Prediction: {'TAKEN' if bp.predict_taken else 'NOT taken'} ",
    ])


def format_report(stats: SimStats) -> str:
    return "\n".join([
        " Cache Performance ",
        f"\t Number of Cache Accesses is {stats.accesses} ",
        f"\t Number of Cache Misses is {stats.misses} ",
        f"\t Number of Cache Hits is {stats.hits} ",
        f"\t Cache Miss Rate is {stats.miss_rate:f} ",
        "",
        "Pipeline Performance ",
        f"\t Total Cycles is {stats.cycles} ",
        f"\t Total Instructions is {stats.instructions} ",
        f"\t Total Branch Instructions is {stats.branches} ",
        f"\t Total Correct Branch Predictions is {stats.correct_predictions} ",
        f"\t CPI is {stats.cpi:f} ",
    ])
