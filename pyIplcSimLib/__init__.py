# pyIplcSimLib
# --------------------------------------------------------------------
# Instruction pipeline / cache timing simulator.

__version__ = "0.1.0"
