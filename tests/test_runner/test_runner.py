"""Tests for file discovery and concurrent multi-file runs."""

import shutil
import threading
from pathlib import Path

from scssguide import runner
from scssguide.config import RuleConfiguration, RuleSetting
from scssguide.model.finding import Severity
from scssguide.runner import check_file, discover_files, validate_paths

FIXTURES = Path(__file__).parent.parent / "fixtures"

CLEAN = ".menu {\n  color: red;\n}\n"
JS_HOOK = ".js-open-menu {\n  display: none;\n}\n"


def _write(directory, name, text):
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


# ---------------------------------------------------------------------------
# discover_files
# ---------------------------------------------------------------------------


class TestDiscoverFiles:
    def test_directory_expanded_and_sorted(self, tmp_path):
        _write(tmp_path, "b.scss", CLEAN)
        _write(tmp_path, "a.scss", CLEAN)
        _write(tmp_path, "nested/c.scss", CLEAN)
        _write(tmp_path, "notes.txt", "ignored")
        files = discover_files([tmp_path])
        assert [Path(f).relative_to(tmp_path).as_posix() for f in files] == [
            "a.scss", "b.scss", "nested/c.scss",
        ]

    def test_missing_path_kept(self, tmp_path):
        missing = tmp_path / "missing.scss"
        assert discover_files([missing]) == [str(missing)]

    def test_duplicates_removed(self, tmp_path):
        path = _write(tmp_path, "a.scss", CLEAN)
        assert discover_files([path, tmp_path]) == [str(path)]


# ---------------------------------------------------------------------------
# check_file
# ---------------------------------------------------------------------------


class TestCheckFile:
    def test_missing_file(self, tmp_path):
        findings = check_file(str(tmp_path / "gone.scss"))
        assert len(findings) == 1
        assert findings[0].rule_id == "IOError"
        assert findings[0].severity is Severity.FATAL
        assert (findings[0].line, findings[0].column) == (0, 0)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin1.scss"
        path.write_bytes(b".menu {\n  content: \"\xff\";\n}\n")
        findings = check_file(str(path))
        assert [f.rule_id for f in findings] == ["IOError"]

    def test_parse_error(self):
        findings = check_file(str(FIXTURES / "broken.scss"))
        assert [f.rule_id for f in findings] == ["ParseError"]
        assert findings[0].severity is Severity.FATAL


# ---------------------------------------------------------------------------
# validate_paths
# ---------------------------------------------------------------------------


class TestValidatePaths:
    def test_clean_directory(self, tmp_path):
        shutil.copy(FIXTURES / "global_header.scss", tmp_path)
        shutil.copy(FIXTURES / "_base.scss", tmp_path)
        report = validate_paths([tmp_path])
        assert report.findings == ()
        assert len(report.files) == 2
        assert report.exit_code == 0

    def test_unreadable_file_alongside_valid_one(self, tmp_path):
        good = _write(tmp_path, "menu.scss", CLEAN)
        missing = tmp_path / "gone.scss"
        report = validate_paths([good, missing])
        assert [(f.rule_id, f.path) for f in report.findings] == [
            ("IOError", str(missing)),
        ]
        assert report.fatal_count == 1
        assert report.exit_code == 1
        assert set(report.files) == {str(good), str(missing)}

    def test_findings_from_every_file(self, tmp_path):
        _write(tmp_path, "a.scss", JS_HOOK)
        _write(tmp_path, "b.scss", JS_HOOK)
        report = validate_paths([tmp_path], jobs=2)
        assert [Path(f.path).name for f in report.findings] == ["a.scss", "b.scss"]
        assert report.by_rule() == {"StyledJsHookError": 2}

    def test_deterministic_across_worker_counts(self, tmp_path):
        for i in range(8):
            shutil.copy(FIXTURES / "messy_menu.scss", tmp_path / f"menu_{i}.scss")
        serial = validate_paths([tmp_path], jobs=1)
        parallel = validate_paths([tmp_path], jobs=4)
        assert serial == parallel

    def test_config_applied(self, tmp_path):
        _write(tmp_path, "a.scss", JS_HOOK)
        config = RuleConfiguration(
            rules={"StyledJsHookError": RuleSetting(severity=Severity.WARNING)}
        )
        report = validate_paths([tmp_path], config)
        assert report.warning_count == 1
        assert report.exit_code == 0

    def test_no_files(self, tmp_path):
        report = validate_paths([tmp_path])
        assert report.findings == ()
        assert report.files == ()
        assert not report.cancelled

    def test_unexpected_failure_becomes_internal_error(self, tmp_path, monkeypatch):
        good = _write(tmp_path, "a.scss", CLEAN)
        bad = _write(tmp_path, "b.scss", CLEAN)
        original = runner.check_file

        def flaky(path, config=None):
            if path == str(bad):
                raise RuntimeError("boom")
            return original(path, config)

        monkeypatch.setattr(runner, "check_file", flaky)
        report = validate_paths([good, bad])
        assert [(f.rule_id, f.path) for f in report.findings] == [
            ("InternalError", str(bad)),
        ]
        assert "boom" in report.findings[0].message
        assert report.exit_code == 1


class TestCancellation:
    def test_cancelled_before_start(self, tmp_path):
        _write(tmp_path, "a.scss", JS_HOOK)
        _write(tmp_path, "b.scss", JS_HOOK)
        cancel = threading.Event()
        cancel.set()
        report = validate_paths([tmp_path], cancel=cancel)
        assert report.cancelled
        assert report.findings == ()
        assert report.files == ()

    def test_cancel_during_run(self, tmp_path, monkeypatch):
        for name in ("a.scss", "b.scss", "c.scss"):
            _write(tmp_path, name, JS_HOOK)
        cancel = threading.Event()
        original = runner.check_file

        def check_then_cancel(path, config=None):
            findings = original(path, config)
            cancel.set()
            return findings

        monkeypatch.setattr(runner, "check_file", check_then_cancel)
        report = validate_paths([tmp_path], jobs=1, cancel=cancel)
        assert report.cancelled
        assert len(report.files) == 1
        assert len(report.findings) == 1
        assert report.findings[0].path == report.files[0]

    def test_event_never_set(self, tmp_path):
        _write(tmp_path, "a.scss", JS_HOOK)
        report = validate_paths([tmp_path], cancel=threading.Event())
        assert not report.cancelled
        assert len(report.findings) == 1
