# File: pyIplcSimLib/mem/cache/set_assoc_cache.py
# --------------------------------------------------------------------
# Unified set-associative cache with exact LRU replacement.
#
# Only tags are modelled; there is no data array and no lower-level
# memory. An access answers hit/miss and updates the recency ranks.
#
# Date  \ 19 Oct 2026

import logging
import math

from pyIplcSimLib.errors import ConfigError, InvariantViolation

log = logging.getLogger(__name__)

# Capacity limit in bytes; the derived size is counted in bits.
MAX_CACHE_SIZE = 10240


class CacheWay:
    __slots__ = ("valid", "tag", "recency")

    def __init__(self):
        self.valid   = False
        self.tag     = 0
        self.recency = 0

    def __repr__(self):
        return f"CacheWay(valid={self.valid}, tag={self.tag:#x}, recency={self.recency})"


class SetAssociativeCache:
    def __init__(self, index_bits=10, block_words=1, assoc=1):
        for name, val in (('index', index_bits),
                          ('blocksize', block_words),
                          ('associativity', assoc)):
            if not isinstance(val, int) or val <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {val!r}")

        self.index_bits  = index_bits
        self.block_words = block_words
        self.assoc       = assoc
        self.num_sets    = 1 << index_bits
        self.offset_bits = int(round(math.log2(block_words * 4)))

        # Data bits + tag bits + valid bit, per line
        line_bits = (32 * block_words) + 33 - index_bits - self.offset_bits
        self.size_bits = assoc * self.num_sets * line_bits

        log.info("Cache configuration: index %d bits (%d sets), blocksize %d, "
                 "assoc %d, offset %d bits, size %d bits",
                 index_bits, self.num_sets, block_words, assoc,
                 self.offset_bits, self.size_bits)

        if self.size_bits > MAX_CACHE_SIZE * 8:
            raise ConfigError(
                f"Cache too big: {self.size_bits} bits for index={index_bits} "
                f"blocksize={block_words} assoc={assoc}, "
                f"greater than MAX SIZE of {MAX_CACHE_SIZE} bytes")

        # Storage
        self.sets = [[CacheWay() for _ in range(assoc)]
                     for _ in range(self.num_sets)]

        # Stats
        self.accesses = 0
        self.hits     = 0
        self.misses   = 0

        # Last event marker for linetrace (IH/IM/DH/DM)
        self.last_event = ''

    #=================================================================
    # Address decomposition
    #=================================================================
    @staticmethod
    def get_bits(address, low, high):
        """Bits [low, high] (inclusive) of address."""
        mask = (1 << (high + 1)) - 1
        return (address & mask) >> low

    def decompose(self, address):
        index = self.get_bits(address, self.offset_bits,
                              self.offset_bits + self.index_bits - 1)
        tag   = self.get_bits(address, self.index_bits + self.offset_bits, 31)
        return index, tag

    #=================================================================
    # Lookup
    #=================================================================
    def lookup(self, index, tag):
        """Way number holding tag in set index, or None."""
        for i, way in enumerate(self.sets[index]):
            if way.valid and way.tag == tag:
                return i
        return None

    def access(self, address, port='D'):
        """Look address up, update LRU state and stats; returns True on a hit."""
        index, tag = self.decompose(address)
        log.debug("Address %x: Tag= %x, Index= %x", address, tag, index)

        self.accesses += 1
        way = self.lookup(index, tag)
        if way is not None:
            self.hits += 1
            self.promote(index, way)
            self.last_event = port + 'H'
            return True

        self.misses += 1
        self.install(index, tag)
        self.last_event = port + 'M'
        return False

    #=================================================================
    # LRU bookkeeping
    #=================================================================
    def promote(self, index, way):
        """Make way the most recently used line of its set."""
        cset     = self.sets[index]
        old_rank = cset[way].recency

        cset[way].recency = self.assoc
        for i, other in enumerate(cset):
            # Everything used after this way moves one step down
            if i != way and other.recency > old_rank:
                other.recency -= 1

    def select_victim(self, index):
        cset = self.sets[index]
        for i, way in enumerate(cset):
            if not way.valid:
                return i

        lowest = min(way.recency for way in cset)
        ranked = [i for i, way in enumerate(cset) if way.recency == lowest]
        if len(ranked) != 1:
            raise InvariantViolation(
                f"No LRU victim in set {index:#x}: recency ranks "
                f"{[way.recency for way in cset]}")
        return ranked[0]

    def install(self, index, tag):
        """Place tag in set index, evicting the LRU line if the set is full."""
        victim = self.select_victim(index)
        way    = self.sets[index][victim]

        if way.valid:
            log.debug("Evicting tag %x from set %x way %d", way.tag, index, victim)

        way.tag   = tag
        way.valid = True
        self.promote(index, victim)
        return victim

    #=================================================================
    # Stats
    #=================================================================
    @property
    def miss_rate(self):
        if self.accesses == 0:
            return 0.0
        return self.misses / self.accesses

    # Linetrace shows last event, then clear it
    def linetrace(self):
        ev = self.last_event or ''
        self.last_event = ''
        return ev
