"""
Integration tests for extractor.py

Tests the file, directory and path-dispatch entry points.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path

from declextract.extractor import (
    ExtractionStats,
    discover_go_files,
    extract_directory,
    extract_file,
    is_test_file,
    parse_path,
)
from declextract.models import Field, ListDescription, ParseResult
from declextract.parser import GoSyntaxError


class TestExtractionStats(unittest.TestCase):
    """Test ExtractionStats class."""

    def test_from_result(self):
        result = ParseResult()
        result.lists.append(ListDescription("Users", "User"))
        stats = ExtractionStats.from_result(result, files_processed=2)
        self.assertEqual(
            stats.to_dict(),
            {"files_processed": 2, "records_extracted": 0, "lists_extracted": 1},
        )
        self.assertIn("processed=2", str(stats))


class TestExtractFile(unittest.TestCase):
    """Test extracting from a single file."""

    def setUp(self):
        self.fixtures_dir = Path(__file__).parent / "fixtures"

    def test_explicit_only(self):
        result = extract_file(str(self.fixtures_dir / "models.go"))

        self.assertEqual(result.package_name, "models")
        self.assertEqual(result.package_dir, os.path.abspath(self.fixtures_dir))
        self.assertEqual([r.name for r in result.records], ["User"])
        self.assertEqual(
            result.records[0].fields,
            [
                Field("ID", '`db:"id"`'),
                Field("Name", '`db:"name" json:"name"`'),
                Field("CreatedAt", '`db:"created_at"`'),
            ],
        )
        self.assertEqual(result.lists, [ListDescription("Users", "User")])

    def test_all_types(self):
        result = extract_file(str(self.fixtures_dir / "models.go"), all_types=True)
        self.assertEqual([r.name for r in result.records], ["User", "Order"])
        self.assertTrue(result.all_types)

    def test_appends_to_existing_result(self):
        result = ParseResult()
        extract_file(str(self.fixtures_dir / "models.go"), result=result)
        extract_file(str(self.fixtures_dir / "models.go"), result=result)
        self.assertEqual([r.name for r in result.records], ["User", "User"])

    def test_nonexistent_file(self):
        with self.assertRaises(FileNotFoundError) as ctx:
            extract_file("/nonexistent/models.go")
        self.assertIn("/nonexistent/models.go", str(ctx.exception))

    def test_non_go_file(self):
        with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
            temp_path = f.name
        try:
            with self.assertRaises(ValueError):
                extract_file(temp_path)
        finally:
            os.unlink(temp_path)

    def test_syntax_error_is_fatal(self):
        with self.assertRaises(GoSyntaxError):
            extract_file(str(self.fixtures_dir / "broken_pkg" / "bad.go"), all_types=True)


class TestDiscoverGoFiles(unittest.TestCase):
    """Test Go file discovery."""

    def setUp(self):
        self.pkg_dir = Path(__file__).parent / "fixtures" / "pkg"

    def test_excludes_tests_and_non_go(self):
        files = [os.path.basename(f) for f in discover_go_files(str(self.pkg_dir))]
        self.assertEqual(files, ["bar.go", "foo.go"])

    def test_not_recursive(self):
        fixtures_dir = Path(__file__).parent / "fixtures"
        files = [os.path.basename(f) for f in discover_go_files(str(fixtures_dir))]
        self.assertEqual(files, ["models.go"])

    def test_is_test_file(self):
        self.assertTrue(is_test_file("foo_test.go"))
        self.assertFalse(is_test_file("foo.go"))
        self.assertFalse(is_test_file("test.go"))


class TestExtractDirectory(unittest.TestCase):
    """Test extracting a package directory."""

    def setUp(self):
        self.fixtures_dir = Path(__file__).parent / "fixtures"

    def test_test_files_ignored(self):
        result = extract_directory(str(self.fixtures_dir / "pkg"), all_types=True)

        self.assertEqual(result.package_name, "shop")
        self.assertEqual([r.name for r in result.records], ["Basket", "Item"])
        self.assertEqual(result.lists, [ListDescription("Items", "Item")])
        self.assertNotIn("itemFixture", [r.name for r in result.records])

    def test_foo_and_foo_test(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "foo.go").write_text(
                "package foo\n\ntype Real struct {\n\tA int\n}\n", encoding="utf-8"
            )
            Path(tmpdir, "foo_test.go").write_text(
                "package foo\n\n// easyscan:explicit\ntype Fake struct {\n\tB int\n}\n",
                encoding="utf-8",
            )
            result = extract_directory(tmpdir, all_types=True)
        self.assertEqual([r.name for r in result.records], ["Real"])

    def test_syntax_error_aborts_directory(self):
        result = ParseResult()
        with self.assertRaises(GoSyntaxError) as ctx:
            extract_directory(str(self.fixtures_dir / "broken_pkg"), all_types=True, result=result)
        self.assertTrue(ctx.exception.path.endswith("bad.go"))
        self.assertEqual(result.records, [])
        self.assertEqual(result.package_name, "")

    def test_nonexistent_directory(self):
        with self.assertRaises(FileNotFoundError):
            extract_directory("/nonexistent/pkg")

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = extract_directory(tmpdir, all_types=True)
        self.assertEqual(result.records, [])
        self.assertEqual(result.package_name, "")

    def test_mixed_packages_last_wins(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "a.go").write_text("package alpha\n", encoding="utf-8")
            Path(tmpdir, "b.go").write_text("package beta\n", encoding="utf-8")
            with self.assertLogs("declextract.models", level="WARNING"):
                result = extract_directory(tmpdir)
        self.assertEqual(result.package_name, "beta")


class TestParsePath(unittest.TestCase):
    """Test file/directory dispatch."""

    def setUp(self):
        self.fixtures_dir = Path(__file__).parent / "fixtures"

    def test_file(self):
        result = parse_path(str(self.fixtures_dir / "models.go"))
        self.assertEqual(result.package_name, "models")

    def test_directory(self):
        result = parse_path(str(self.fixtures_dir / "pkg"))
        self.assertEqual(result.package_name, "shop")
        # No explicit directives in the package's non-test files.
        self.assertEqual(result.records, [])

    def test_missing(self):
        with self.assertRaises(FileNotFoundError):
            parse_path("/nonexistent/anything")

    def test_copied_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = os.path.join(tmpdir, "pkg")
            shutil.copytree(self.fixtures_dir / "pkg", target)
            result = parse_path(target, all_types=True)
            self.assertEqual(result.package_dir, os.path.abspath(target))


if __name__ == "__main__":
    unittest.main()
