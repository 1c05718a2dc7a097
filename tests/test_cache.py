import unittest

from pyIplcSimLib.errors import ConfigError, InvariantViolation
from pyIplcSimLib.mem.cache import SetAssociativeCache


def set_addr(cache, index, tag):
    return (tag << (cache.index_bits + cache.offset_bits)) | (index << cache.offset_bits)


class TestConfiguration(unittest.TestCase):

    def test_default_direct_mapped_fits(self):
        cache = SetAssociativeCache(10, 1, 1)
        self.assertEqual(cache.num_sets, 1024)
        self.assertEqual(cache.offset_bits, 2)
        self.assertEqual(cache.size_bits, 1024 * 53)
        self.assertEqual(len(cache.sets), 1024)
        self.assertTrue(all(len(s) == 1 for s in cache.sets))
        self.assertTrue(all(not w.valid and w.recency == 0
                            for s in cache.sets for w in s))

    def test_offset_bits_rounds(self):
        self.assertEqual(SetAssociativeCache(2, 4, 1).offset_bits, 4)
        # log2(12) = 3.58
        self.assertEqual(SetAssociativeCache(2, 3, 1).offset_bits, 4)
        # log2(20) = 4.32
        self.assertEqual(SetAssociativeCache(2, 5, 1).offset_bits, 4)

    def test_too_big(self):
        with self.assertRaises(ConfigError) as ctx:
            SetAssociativeCache(10, 1, 2)
        self.assertIn("assoc=2", str(ctx.exception))

    def test_non_positive_parameters(self):
        for args in ((0, 1, 1), (4, 0, 1), (4, 1, 0), (4, -1, 1)):
            with self.assertRaises(ConfigError):
                SetAssociativeCache(*args)


class TestDecompose(unittest.TestCase):

    def test_get_bits(self):
        self.assertEqual(SetAssociativeCache.get_bits(0x2135C690, 4, 11), 0x69)
        self.assertEqual(SetAssociativeCache.get_bits(0xFFFFFFFF, 0, 31), 0xFFFFFFFF)
        self.assertEqual(SetAssociativeCache.get_bits(0x80000000, 31, 31), 1)

    def test_fields(self):
        cache = SetAssociativeCache(10, 1, 1)
        self.assertEqual(cache.decompose(0x12345678), (0x19E, 0x12345))
        self.assertEqual(cache.decompose(0x0), (0, 0))
        self.assertEqual(cache.decompose(0x4), (1, 0))

    def test_reassembly_is_consistent(self):
        for params in ((10, 1, 1), (4, 4, 2), (3, 2, 4), (1, 8, 1)):
            cache = SetAssociativeCache(*params)
            for address in (0x0, 0x4, 0x7fffeffc, 0x00400024, 0xdeadbeef, 0xffffffff):
                index, tag = cache.decompose(address)
                rebuilt = set_addr(cache, index, tag)
                self.assertEqual(cache.decompose(rebuilt), (index, tag))


class TestAccess(unittest.TestCase):

    def test_direct_mapped_scenario(self):
        cache = SetAssociativeCache(10, 1, 1)
        self.assertFalse(cache.access(0x0))
        self.assertFalse(cache.access(0x4))
        self.assertTrue(cache.access(0x0))
        self.assertEqual((cache.accesses, cache.hits, cache.misses), (3, 1, 2))

    def test_direct_mapped_conflict(self):
        cache = SetAssociativeCache(10, 1, 1)
        a = set_addr(cache, 5, 1)
        b = set_addr(cache, 5, 2)
        self.assertFalse(cache.access(a))
        self.assertFalse(cache.access(b))
        self.assertFalse(cache.access(a))

    def test_two_way_alternating(self):
        cache = SetAssociativeCache(4, 1, 2)
        a = set_addr(cache, 3, 1)
        b = set_addr(cache, 3, 2)
        results = [cache.access(addr) for addr in (a, b, a, b, a, b)]
        self.assertEqual(results, [False, False, True, True, True, True])
        self.assertAlmostEqual(cache.miss_rate, 2 / 6)

    def test_lru_eviction_law(self):
        k = 4
        tags = range(1, k + 2)
        cache = SetAssociativeCache(2, 1, k)
        for tag in tags:
            self.assertFalse(cache.access(set_addr(cache, 0, tag)))
        # The other k are still resident
        for tag in tags[1:]:
            self.assertTrue(cache.access(set_addr(cache, 0, tag)))

    def test_lru_evicts_first_tag(self):
        k = 4
        cache = SetAssociativeCache(2, 1, k)
        for tag in range(1, k + 2):
            cache.access(set_addr(cache, 1, tag))
        self.assertFalse(cache.access(set_addr(cache, 1, 1)))

    def test_hit_refreshes_recency(self):
        cache = SetAssociativeCache(4, 1, 2)
        a, b, c = (set_addr(cache, 0, t) for t in (1, 2, 3))
        cache.access(a)
        cache.access(b)
        self.assertTrue(cache.access(a))
        # b is now the LRU line
        self.assertFalse(cache.access(c))
        self.assertTrue(cache.access(a))
        self.assertFalse(cache.access(b))

    def test_repeated_hits_then_misses(self):
        cache = SetAssociativeCache(4, 1, 2)
        a, b, c, d = (set_addr(cache, 2, t) for t in (1, 2, 3, 4))
        for addr in (a, b, b, b, c, d, a):
            cache.access(addr)
        self.assertEqual(cache.misses, 5)

    def test_recency_ranks_stay_distinct(self):
        assoc = 4
        cache = SetAssociativeCache(1, 1, assoc)
        pattern = [1, 2, 1, 3, 4, 4, 5, 2, 6, 1, 1, 7, 3, 2]
        for tag in pattern:
            cache.access(set_addr(cache, 0, tag))
            ranks = [w.recency for w in cache.sets[0] if w.valid]
            self.assertEqual(len(ranks), len(set(ranks)))
            self.assertTrue(all(1 <= r <= assoc for r in ranks))

    def test_installed_line_is_most_recent(self):
        cache = SetAssociativeCache(2, 1, 4)
        for tag in (1, 2, 3):
            cache.access(set_addr(cache, 0, tag))
        way = cache.install(0, 9)
        ranks = [w.recency for w in cache.sets[0]]
        self.assertEqual(ranks[way], max(ranks))
        self.assertEqual(ranks.count(max(ranks)), 1)

    def test_corrupted_set_has_no_victim(self):
        cache = SetAssociativeCache(2, 1, 2)
        cache.access(set_addr(cache, 0, 1))
        cache.access(set_addr(cache, 0, 2))
        for way in cache.sets[0]:
            way.recency = 1
        with self.assertRaises(InvariantViolation):
            cache.access(set_addr(cache, 0, 3))

    def test_linetrace(self):
        cache = SetAssociativeCache(4, 1, 1)
        cache.access(0x40, 'I')
        self.assertEqual(cache.linetrace(), 'IM')
        self.assertEqual(cache.linetrace(), '')
        cache.access(0x40)
        self.assertEqual(cache.linetrace(), 'DH')

    def test_miss_rate_without_accesses(self):
        self.assertEqual(SetAssociativeCache(4, 1, 1).miss_rate, 0.0)


if __name__ == '__main__':
    unittest.main()
