"""Run the checks over many files concurrently and merge the results."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable

from scssguide.classify import build_component_file
from scssguide.config import RuleConfiguration
from scssguide.model.finding import Finding
from scssguide.parser import ParseError, parse_scss
from scssguide.report import Report, aggregate
from scssguide.validation import evaluate
from scssguide.validation.catalog import make_finding

logger = logging.getLogger(__name__)

SCSS_SUFFIX = ".scss"


def discover_files(paths: Iterable[str | Path]) -> list[str]:
    """Expand directories into their ``*.scss`` files, sorted.

    Explicit file paths are kept as given, even when they do not exist, so
    that a missing file is reported rather than silently dropped.
    """
    files: list[str] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(str(p) for p in sorted(path.rglob(f"*{SCSS_SUFFIX}")) if p.is_file())
        else:
            files.append(str(path))
    return list(dict.fromkeys(files))


def check_source(
    source: str, path: str = "<string>", config: RuleConfiguration | None = None
) -> list[Finding]:
    """Parse, classify and evaluate one stylesheet given as text."""
    config = config or RuleConfiguration()
    try:
        stylesheet = parse_scss(source)
    except ParseError as exc:
        logger.debug("%s: parse error: %s", path, exc)
        finding = make_finding(
            path, "ParseError", exc.line or 0, exc.column or 0,
            f"Could not parse file: {exc}",
        )
        return config.apply([finding])
    cf = build_component_file(path, source, stylesheet, config)
    return evaluate(cf, config)


def check_file(path: str, config: RuleConfiguration | None = None) -> list[Finding]:
    """Check one file; an unreadable file yields a single IOError finding."""
    config = config or RuleConfiguration()
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        finding = make_finding(path, "IOError", 0, 0, f"Could not read file: {exc}")
        return config.apply([finding])
    return check_source(source, path, config)


def validate_paths(
    paths: Iterable[str | Path],
    config: RuleConfiguration | None = None,
    jobs: int | None = None,
    cancel: threading.Event | None = None,
) -> Report:
    """Check every SCSS file under *paths* and return the aggregated report.

    Files are checked concurrently; each file is independent and only the
    read-only configuration is shared. Setting *cancel* stops the run before
    the next file starts; files that never started are left out of the report.
    """
    config = config or RuleConfiguration()
    files = discover_files(paths)
    if not files:
        return aggregate([])

    def _run(path: str) -> list[Finding] | None:
        if cancel is not None and cancel.is_set():
            return None
        logger.debug("Checking %s", path)
        return check_file(path, config)

    findings: list[Finding] = []
    checked: list[str] = []
    workers = jobs or min(32, len(files))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(_run, path): path for path in files}
        for future in as_completed(futures):
            path = futures[future]
            try:
                result = future.result()
            except Exception as exc:
                logger.exception("Unexpected failure while checking %s", path)
                result = config.apply([
                    make_finding(path, "InternalError", 0, 0, f"Internal error: {exc}")
                ])
            if result is None:
                continue
            checked.append(path)
            findings.extend(result)

    cancelled = cancel is not None and cancel.is_set() and len(checked) < len(files)
    report = aggregate(findings, files=checked, cancelled=cancelled)
    logger.info(
        "Checked %d file(s): %d fatal, %d error(s), %d warning(s)",
        len(report.files), report.fatal_count, report.error_count, report.warning_count,
    )
    return report
