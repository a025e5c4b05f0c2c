import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from covidtrend import cli

JHU_CSV = """Province/State,Country/Region,Lat,Long,3/1/20,3/2/20,3/3/20,3/4/20
,Italy,41.87,12.56,1,3,6,10
"""


class TestCLI(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".csv")
        with os.fdopen(fd, "w") as f:
            f.write(JHU_CSV)

    def tearDown(self):
        os.remove(self.path)

    def test_prints_rolling_json(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            cli.main([self.path, "Italy", "2", "right"])
        rows = json.loads(buf.getvalue())
        self.assertEqual(len(rows), 4)
        self.assertIsNone(rows[0]["mean"])
        self.assertEqual(rows[1]["date"], "2020-03-02")
        self.assertAlmostEqual(rows[1]["mean"], 1.5)
        self.assertAlmostEqual(rows[3]["mean"], 3.5)

    def test_usage(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli.main([])
        self.assertEqual(ctx.exception.code, 2)

    def test_non_numeric_window_exits_nonzero(self):
        err = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            cli.main([self.path, "Italy", "seven"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("error:", err.getvalue())
        self.assertIn("Usage:", err.getvalue())

    def test_unknown_country_exits_nonzero(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            cli.main([self.path, "Atlantis"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Atlantis", err.getvalue())


if __name__ == "__main__":
    unittest.main()
