"""
Tests for CLI entry points. Only saved HTML files are used, no network.
"""

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from runningorder.cli import main


TESTDATA = Path(__file__).resolve().parent / "testdata"
SAMPLE = str(TESTDATA / "sample.html")
FAIL = str(TESTDATA / "fail.html")


class TestCLI(unittest.TestCase):
    def _run(self, argv: list) -> tuple:
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code, out.getvalue(), err.getvalue()

    def test_parse_prints_jsend(self) -> None:
        code, out, _ = self._run(["parse", SAMPLE, "--year", "2016", "--tz", "Europe/Ljubljana"])
        self.assertEqual(code, 0)
        expected = json.loads((TESTDATA / "sample.json").read_text(encoding="utf-8"))
        self.assertEqual(json.loads(out), expected)

    def test_parse_invalid_document(self) -> None:
        code, out, err = self._run(["parse", FAIL, "--year", "2016"])
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(out)["status"], "error")
        self.assertIn("Unable to parse running order structure", err)

    def test_unknown_timezone(self) -> None:
        code, _, err = self._run(["parse", SAMPLE, "--tz", "Mars/Olympus_Mons"])
        self.assertEqual(code, 2)
        self.assertIn("Unknown timezone", err)

    def test_export(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out_file = Path(d) / "md.ics"
            code, out, _ = self._run(["export", SAMPLE, "--year", "2016", "--out", str(out_file)])
            self.assertEqual(code, 0)
            self.assertIn("Exported 4 events", out)
            self.assertTrue(out_file.exists())

    def test_clashes(self) -> None:
        code, out, _ = self._run(["clashes", SAMPLE, "--year", "2016"])
        self.assertEqual(code, 0)
        self.assertIn("No clashes found.", out)

    def test_missing_file(self) -> None:
        missing = str(TESTDATA / "does-not-exist.html")
        for command in ("parse", "show", "clashes"):
            with self.subTest(command=command):
                code, _, err = self._run([command, missing, "--year", "2016"])
                self.assertEqual(code, 1)
                self.assertIn("Error:", err)

    def test_show_fails_on_invalid_document(self) -> None:
        code, _, err = self._run(["show", FAIL, "--year", "2016"])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)


if __name__ == "__main__":
    unittest.main()
