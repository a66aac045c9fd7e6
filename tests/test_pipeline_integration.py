"""End-to-end tests against real temporary Git repositories."""

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

import code_review_helper.cli as cli
from code_review_helper.commit.message_synthesizer import generate_commit_message
from code_review_helper.diff.diff_collector import DiffCollector
from code_review_helper.history.history_reader import read_history
from code_review_helper.review.artifact_writer import parse_review


def git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)


@unittest.skipUnless(shutil.which("git"), "git executable not available")
class TestPipelineIntegration(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.repo = Path(self._tmp.name).resolve()
        git(self.repo, "init", "-q")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def commit_files(self, message: str, files: dict) -> None:
        for name, content in files.items():
            path = self.repo / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        git(self.repo, "--literal-pathspecs", "add", "--", *files)
        git(self.repo, "commit", "-q", "-m", message)

    def test_collect_classify_and_synthesize(self) -> None:
        self.commit_files("initial", {"src/auth.ts": "const a = 1;\n", "bun.lock": "lock v1\n"})
        (self.repo / "src" / "auth.ts").write_text("const a = 1;\nexport function login() {}\n", encoding="utf-8")
        (self.repo / "bun.lock").write_text("lock v2\n", encoding="utf-8")

        changes = DiffCollector().collect(self.repo / "src")

        self.assertEqual([c.path for c in changes], ["src/auth.ts"])
        self.assertIn("+export function login() {}", changes[0].diff)
        self.assertIn("--- a/src/auth.ts", changes[0].diff)

        result = generate_commit_message(changes)
        self.assertEqual(result.header, "feat(auth): add new functionality")
        self.assertEqual((result.stats.added, result.stats.removed, result.stats.files_changed), (1, 0, 1))

    def test_clean_tree_has_no_changes(self) -> None:
        self.commit_files("initial", {"a.txt": "a\n"})
        self.assertEqual(DiffCollector().collect(self.repo), [])

    def test_untracked_and_staged_files_are_not_pending_changes(self) -> None:
        self.commit_files("initial", {"a.txt": "a\n"})
        (self.repo / "new.txt").write_text("new\n", encoding="utf-8")
        (self.repo / "a.txt").write_text("staged\n", encoding="utf-8")
        git(self.repo, "add", "a.txt")
        self.assertEqual(DiffCollector().collect(self.repo), [])

    def test_fix_takes_priority_over_test_path(self) -> None:
        self.commit_files("initial", {"a.test.ts": "expect(1);\n", "b.ts": "let x = 1;\n"})
        (self.repo / "a.test.ts").write_text("expect(2);\n", encoding="utf-8")
        (self.repo / "b.ts").write_text("let x = 2; // fix rounding\n", encoding="utf-8")

        changes = DiffCollector().collect(self.repo)
        self.assertEqual([c.path for c in changes], ["a.test.ts", "b.ts"])
        self.assertEqual(generate_commit_message(changes).header, "fix(files): resolve issues")

    def test_diff_ignores_color_configuration(self) -> None:
        self.commit_files("initial", {"a.py": "one\n"})
        git(self.repo, "config", "color.ui", "always")
        git(self.repo, "config", "color.diff", "always")
        (self.repo / "a.py").write_text("two\nclass X: pass\n", encoding="utf-8")

        changes = DiffCollector().collect(self.repo)

        self.assertEqual([c.path for c in changes], ["a.py"])
        self.assertNotIn("\x1b[", changes[0].diff)
        result = generate_commit_message(changes)
        self.assertEqual(result.commit_type, "feat")
        self.assertEqual((result.stats.added, result.stats.removed), (2, 1))

    def test_diff_ignores_external_diff_driver(self) -> None:
        self.commit_files("initial", {"a.py": "one\n"})
        git(self.repo, "config", "diff.external", "echo external-driver")
        (self.repo / "a.py").write_text("two\n", encoding="utf-8")

        changes = DiffCollector().collect(self.repo)

        self.assertNotIn("external-driver", changes[0].diff)
        self.assertIn("-one\n+two\n", changes[0].diff)

    def test_glob_characters_in_path_match_only_that_file(self) -> None:
        self.commit_files("initial", {"a1.txt": "one\n", "a[1].txt": "one\n"})
        (self.repo / "a1.txt").write_text("plain\n", encoding="utf-8")
        (self.repo / "a[1].txt").write_text("bracket\n", encoding="utf-8")

        collected = DiffCollector().collect(self.repo)
        changes = {c.path: c.diff for c in collected}

        self.assertEqual(sorted(changes), ["a1.txt", "a[1].txt"])
        self.assertIn("+bracket", changes["a[1].txt"])
        self.assertNotIn("+plain", changes["a[1].txt"])
        result = generate_commit_message(collected)
        self.assertEqual((result.stats.added, result.stats.removed), (2, 2))

    @unittest.skipIf(os.name == "nt", "colons are not allowed in Windows file names")
    def test_leading_colon_in_path_is_not_pathspec_magic(self) -> None:
        self.commit_files("initial", {":x.txt": "one\n", "x.txt": "one\n"})
        (self.repo / ":x.txt").write_text("colon\n", encoding="utf-8")
        (self.repo / "x.txt").write_text("plain\n", encoding="utf-8")

        changes = {c.path: c.diff for c in DiffCollector().collect(self.repo)}

        self.assertEqual(sorted(changes), [":x.txt", "x.txt"])
        self.assertIn("+colon", changes[":x.txt"])
        self.assertNotIn("+plain", changes[":x.txt"])
        self.assertIn("+plain", changes["x.txt"])

    def test_history_newest_first_and_limited(self) -> None:
        self.commit_files("first", {"a.txt": "1\n"})
        self.commit_files("second", {"a.txt": "2\n"})
        self.commit_files("third", {"a.txt": "3\n"})

        result = read_history(self.repo, max_count=2)
        self.assertIsNone(result.error)
        self.assertEqual([c.message for c in result.commits], ["third", "second"])
        self.assertEqual(result.commits[0].author_name, "Test Author")
        self.assertEqual(result.commits[0].author_email, "author@example.com")
        self.assertEqual(len(result.commits[0].hash), 40)

        self.assertEqual(len(read_history(self.repo).commits), 3)

    def test_history_of_empty_repository_is_an_error_result(self) -> None:
        result = read_history(self.repo)
        self.assertEqual(result.commits, [])
        self.assertTrue(result.error)

    def test_cli_full_review(self) -> None:
        self.commit_files("initial", {"README.md": "# Project\n"})
        (self.repo / "README.md").write_text("# Project\n\nUsage notes.\n", encoding="utf-8")
        target = self.repo / "reviews" / "review.md"

        result = CliRunner().invoke(cli.main, ["-t", "full", "-T", "Docs", "-o", str(target), str(self.repo)])

        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS, result.output)
        document = parse_review(target.read_text(encoding="utf-8"))
        self.assertEqual(document.title, "Docs")
        self.assertIn("docs(README): update documentation", document.body)
        self.assertIn("- `", document.body)
        self.assertIn("initial", document.body)


if __name__ == "__main__":
    unittest.main()
