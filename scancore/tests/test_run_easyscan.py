"""Tests for the run_easyscan command-line driver."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import run_easyscan

FIXTURES_DIR = Path(__file__).resolve().parents[2] / "declextract" / "tests" / "fixtures"

_CLEAN_ENV = {
    "EASYSCAN_ALL_TYPES": "",
    "EASYSCAN_ANY_ORDER": "",
    "EASYSCAN_DEFAULT_CASE": "",
    "EASYSCAN_OUTPUT_FILENAME": "",
    "STRICT_CONFIG_VALIDATION": "",
}


class TestRunEasyscan(unittest.TestCase):
    def setUp(self) -> None:
        for patcher in (
            mock.patch.dict(os.environ, _CLEAN_ENV),
            mock.patch("scancore.structured_logging.configure_structured_logging"),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)
        os.environ.pop("EASYSCAN_CONFIG", None)
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir, ignore_errors=True)

    def test_parse_args_flags(self) -> None:
        args = run_easyscan.parse_args(["--all", "--kebab_case", "--any_order", "a.go"])
        self.assertTrue(args.all_types)
        self.assertTrue(args.any_order)
        self.assertEqual(args.default_case, "kebab")
        self.assertEqual(args.paths, ["a.go"])

    def test_parse_args_unset_flags_are_none(self) -> None:
        args = run_easyscan.parse_args(["a.go"])
        self.assertIsNone(args.all_types)
        self.assertIsNone(args.any_order)
        self.assertIsNone(args.default_case)

    def test_case_flags_mutually_exclusive(self) -> None:
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                run_easyscan.parse_args(["--snake_case", "--camel_case", "a.go"])

    def test_writes_manifest_for_file(self) -> None:
        out_path = os.path.join(self.tmpdir, "scan.json")
        exit_code = run_easyscan.main(
            ["--all", "--snake_case", "--output_filename", out_path, str(FIXTURES_DIR / "models.go")]
        )

        self.assertEqual(exit_code, 0)
        manifest = json.loads(Path(out_path).read_text(encoding="utf-8"))
        self.assertEqual(manifest["package"], "models")
        self.assertEqual([r["name"] for r in manifest["records"]], ["User", "Order"])
        self.assertEqual(manifest["lists"], [{"type_name": "Users", "element_name": "User"}])
        self.assertEqual(manifest["settings"]["default_case"], "snake")
        self.assertTrue(manifest["settings"]["all_types"])
        self.assertFalse(manifest["settings"]["any_order"])

    def test_default_output_name_for_directory(self) -> None:
        pkg_dir = os.path.join(self.tmpdir, "pkg")
        shutil.copytree(FIXTURES_DIR / "pkg", pkg_dir)

        self.assertEqual(run_easyscan.main(["--all", pkg_dir]), 0)

        manifest_path = Path(pkg_dir, "shop_easyscan.json")
        self.assertTrue(manifest_path.is_file())
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        self.assertEqual([r["name"] for r in manifest["records"]], ["Basket", "Item"])

    def test_missing_input_fails(self) -> None:
        self.assertEqual(run_easyscan.main([os.path.join(self.tmpdir, "missing.go")]), 1)

    def test_syntax_error_fails(self) -> None:
        out_path = os.path.join(self.tmpdir, "broken.json")
        exit_code = run_easyscan.main(
            ["--output_filename", out_path, str(FIXTURES_DIR / "broken_pkg")]
        )
        self.assertEqual(exit_code, 1)
        self.assertFalse(os.path.exists(out_path))

    def test_invalid_strict_settings_fail(self) -> None:
        config = Path(self.tmpdir, "settings.yml")
        config.write_text("default_case: shouting\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "1"}):
            exit_code = run_easyscan.main(
                ["--config", str(config), str(FIXTURES_DIR / "models.go")]
            )
        self.assertEqual(exit_code, 1)

    def test_unwritable_output_fails(self) -> None:
        out_dir = os.path.join(self.tmpdir, "out")
        os.mkdir(out_dir)
        source = Path(self.tmpdir, "a.go")
        source.write_text("package a\n\ntype A struct{ X int }\n", encoding="utf-8")

        exit_code = run_easyscan.main(["--all", "--output_filename", out_dir, str(source)])

        self.assertEqual(exit_code, 1)
        self.assertTrue(os.path.isdir(out_dir))


if __name__ == "__main__":
    unittest.main()
