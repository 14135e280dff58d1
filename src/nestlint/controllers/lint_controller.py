import logging
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from nestlint.dom.builder import DOMBuilder
from nestlint.dom.engine import NestEngine
from nestlint.model import Diagnostic, Severity

logger = logging.getLogger(__name__)


def parse_severity_overrides(overrides: Optional[Mapping[str, str]]) -> Dict[str, Severity]:
    """Turns {'CODE': 'error'} into {'CODE': Severity.ERROR}; unknown severities are logged and dropped."""
    parsed: Dict[str, Severity] = {}
    for code, value in (overrides or {}).items():
        try:
            parsed[code] = Severity(str(value).upper())
        except ValueError:
            logger.warning(f"Ignoring severity override {code}={value!r}: expected WARN or ERROR")
    return parsed


def apply_config(
        diagnostics: Iterable[Diagnostic],
        disabled_codes: Iterable[str],
        severity_overrides: Mapping[str, Severity]
) -> List[Diagnostic]:
    """Drops disabled codes and applies severity overrides, keeping the order."""
    disabled = set(disabled_codes)
    results = []
    for diagnostic in diagnostics:
        if diagnostic.code in disabled:
            continue
        override = severity_overrides.get(diagnostic.code)
        if override is not None and override != diagnostic.severity:
            diagnostic = diagnostic.with_severity(override)
        results.append(diagnostic)
    return results


def _worker_lint_file(
        path: str,
        disabled_codes: List[str],
        severity_overrides: Dict[str, Severity]
) -> Dict[str, Any]:
    """
    Worker function to lint a single file in a separate process.
    Returns plain data so results pickle cheaply back to the parent.
    """
    builder = DOMBuilder()
    engine = NestEngine()

    results = {
        "source": path,
        "diagnostics": [],
        "stats": Counter(),
    }

    try:
        html = Path(path).read_text(encoding="utf-8")
        doc = builder.parse_doc(html, source=path)
        findings = apply_config(engine.validate(doc), disabled_codes, severity_overrides)

        for d in findings:
            results["stats"][d.code] += 1
            results["diagnostics"].append(d.model_dump())

        return results

    except Exception as e:
        logger.error(f"Worker failed on {path}: {e!r}")
        return {"error": str(e) or type(e).__name__, "source": path}


class LintController:
    """
    Orchestrates linting: parallel execution over files, aggregation of
    diagnostics and per-code statistics, and flat export.
    """

    def __init__(
            self,
            disabled_codes: Optional[Iterable[str]] = None,
            severity_overrides: Optional[Mapping[str, str]] = None
    ):
        self.disabled_codes = sorted(set(disabled_codes or ()))
        self.severity_overrides = parse_severity_overrides(severity_overrides)

        # Results Buffers
        self.results: Dict[str, List[Diagnostic]] = {}
        self.failures: Dict[str, str] = {}
        self.export_rows: List[Dict[str, Any]] = []
        self.stats: Counter = Counter()

    def _reset(self):
        self.results = {}
        self.failures = {}
        self.export_rows = []
        self.stats = Counter()

    def lint_source(self, html: str, source: str = "<string>") -> List[Diagnostic]:
        """Lints one markup string in-process and records the findings under `source`."""
        doc = DOMBuilder().parse_doc(html, source=source)
        findings = apply_config(NestEngine().validate(doc), self.disabled_codes, self.severity_overrides)
        self._collect(source, findings)
        return findings

    def lint_files(
            self,
            paths: List[Path],
            workers: int = 4,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> Dict[str, Any]:
        """
        Lints files; with more than one worker each file runs in its own process.
        A file that cannot be read or linted is logged and recorded as a failure,
        the rest of the run continues.
        """
        self._reset()
        tasks = [str(p) for p in paths]
        total = len(tasks)

        func = partial(
            _worker_lint_file,
            disabled_codes=self.disabled_codes,
            severity_overrides=self.severity_overrides
        )

        if workers <= 1 or total <= 1:
            self._consume(map(func, tasks), total, progress_callback)
        else:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                self._consume(executor.map(func, tasks), total, progress_callback)

        summary = self.summary()
        logger.info(
            f"Linted {summary['files_linted']} file(s): {summary['total_diagnostics']} diagnostic(s), "
            f"{summary['files_failed']} failure(s)"
        )
        return summary

    def _consume(self, results_iter, total: int, progress_callback) -> None:
        for i, result in enumerate(results_iter):
            if progress_callback:
                progress_callback(i + 1, total)

            if "error" in result:
                self.failures[result["source"]] = result["error"]
                continue

            findings = [Diagnostic(**d) for d in result["diagnostics"]]
            self._collect(result["source"], findings)

    def _collect(self, source: str, findings: List[Diagnostic]) -> None:
        self.results[source] = findings
        for d in findings:
            self.stats[d.code] += 1
            self.export_rows.append(d.to_row(source))

    def summary(self) -> Dict[str, Any]:
        return {
            "files_linted": len(self.results),
            "files_with_diagnostics": sum(1 for f in self.results.values() if f),
            "files_failed": len(self.failures),
            "total_diagnostics": sum(self.stats.values()),
            "errors": self.error_count(),
            "stats": dict(self.stats),
        }

    def error_count(self) -> int:
        return sum(1 for findings in self.results.values() for d in findings if d.severity is Severity.ERROR)

    # --- Result Getters ---
    def get_results_for_export(self) -> List[Dict[str, Any]]:
        return self.export_rows

    def export_csv(self, target: Path) -> Path:
        """Writes all diagnostics as one CSV row each."""
        columns = ["Source", "Line", "Column", "Severity", "Code", "Tag", "Message", "Rule"]
        df = pd.DataFrame(self.get_results_for_export(), columns=columns)
        target = Path(target)
        df.to_csv(target, index=False)
        logger.info(f"Exported {len(df)} diagnostic(s) to {target}")
        return target
