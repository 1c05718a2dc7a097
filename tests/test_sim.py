import contextlib
import io
import os
import tempfile
import unittest

from pyIplcSimLib.sim import main
from pyIplcSimLib.system import BasicSystem

TRACE = """\
400000 add $1, $2, $3
400004 lw $4, 0($29) 10000000
400008 add $5, $4, $6
"""


def write_trace(text):
    fd, path = tempfile.mkstemp(suffix='.trace')
    with os.fdopen(fd, 'w') as f:
        f.write(text)
    return path


class TestBasicSystem(unittest.TestCase):

    def test_linetrace_per_instruction(self):
        dumps = []
        system = BasicSystem(doLinetrace=True, out=dumps.append)
        stats = system.run_lines(TRACE.splitlines())
        self.assertEqual(len(dumps), 3)
        self.assertIn('add@0x400008', dumps[-1])
        self.assertEqual(stats.cycles, 44)

    def test_linetrace_disabled(self):
        dumps = []
        system = BasicSystem(out=dumps.append)
        system.run_lines(TRACE.splitlines())
        self.assertEqual(dumps, [])
        self.assertEqual(system.linetrace(), '')


class TestMain(unittest.TestCase):

    def setUp(self):
        self.path = write_trace(TRACE)

    def tearDown(self):
        os.remove(self.path)

    def run_main(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_report(self):
        code, out, _ = self.run_main(self.path)
        self.assertEqual(code, 0)
        self.assertIn("Cache Configuration", out)
        self.assertIn("Total Cycles is 44", out)
        self.assertIn("Total Instructions is 3", out)

    def test_options(self):
        code, out, _ = self.run_main(self.path, '--index', '4', '--blocksize', '2',
                                     '--assoc', '2', '--predict-taken', '--linetrace')
        self.assertEqual(code, 0)
        self.assertIn("Associativity: 2", out)
        self.assertIn("(cyc:", out)

    def test_cache_too_big(self):
        code, _, err = self.run_main(self.path, '--assoc', '2')
        self.assertEqual(code, 1)
        self.assertIn("Cache too big", err)

    def test_missing_trace(self):
        code, _, err = self.run_main(self.path + '.missing')
        self.assertEqual(code, 1)
        self.assertIn("Cannot read trace", err)

    def test_malformed_trace(self):
        bad = write_trace("400000 frobnicate\n")
        try:
            code, _, err = self.run_main(bad)
        finally:
            os.remove(bad)
        self.assertEqual(code, 1)
        self.assertIn("frobnicate", err)


if __name__ == '__main__':
    unittest.main()
