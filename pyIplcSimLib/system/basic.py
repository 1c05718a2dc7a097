# File: pyIplcSimLib/system/basic.py
# --------------------------------------------------------------------
# A basic system: a five-stage processor fed from a trace file
#
# Date  \ 19 Oct 2026

from pyIplcSimLib.proc  import FiveStageInorderProcessor
from pyIplcSimLib.trace import Feeder

class BasicSystem:
    def __init__(s,
                 doLinetrace:       bool   = False,
                 index_bits:        int    = 10,
                 block_words:       int    = 1,
                 assoc:             int    = 1,
                 predict_taken:     bool   = False,
                 out                       = print):
        # 1) Processor with cache & BP
        s.proc = FiveStageInorderProcessor(
            index_bits    = index_bits,
            block_words   = block_words,
            assoc         = assoc,
            predict_taken = predict_taken
        )

        # 2) Linetrace?
        s.doLinetrace = doLinetrace
        s.out         = out

        # 3) Trace feeder, dumping the pipeline after every instruction
        s.feeder = Feeder(s.proc, on_insert=s.dump)

    def dump(s, inst):
        if s.doLinetrace:
            s.out(s.linetrace())

    def run(s, path):
        s.feeder.run(path)
        return s.proc.finalize()

    def run_lines(s, lines):
        s.feeder.feed(lines)
        return s.proc.finalize()

    def linetrace(s):
        if not s.doLinetrace: return ''
        return s.proc.linetrace()
