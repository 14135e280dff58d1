# src/nestlint/cli.py
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from tqdm.auto import tqdm

from nestlint.controllers.lint_controller import LintController
from nestlint.core.managers.config_manager import config_manager
from nestlint.core.utils.configure_logging import configure_logger
from nestlint.core.utils.path_utils import PathUtils
from nestlint.dom.registry import DOMRegistry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestlint",
        description="Checks HTML documents against the element nesting (content model) rules."
    )
    parser.add_argument("paths", nargs="*", help="HTML files or directories to lint.")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: lint.workers).")
    parser.add_argument("--config", type=str, default=None, help="Path to a .nestlintrc JSON file.")
    parser.add_argument("--disable", action="append", default=[], metavar="CODE",
                        help="Disable a diagnostic code (repeatable).")
    parser.add_argument("--export", type=str, default=None, help="Write all diagnostics to a CSV file.")
    parser.add_argument("--list-codes", action="store_true", help="Print every diagnostic code and exit.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: debug.level).")
    return parser


def _load_config(parsed_args: argparse.Namespace) -> bool:
    config_manager.reset()
    if parsed_args.config:
        return config_manager.load_rc(Path(parsed_args.config))

    start = Path(parsed_args.paths[0]) if parsed_args.paths else Path.cwd()
    rc_file = PathUtils.find_rc_file(start)
    if rc_file is not None:
        return config_manager.load_rc(rc_file)
    return True


def _print_summary(summary, duration: float) -> None:
    stats = summary.get("stats", {})
    out = sys.stderr

    print("\n" + "=" * 60, file=out)
    print("NEST LINT SUMMARY", file=out)
    print("=" * 60, file=out)
    print(f"Files Linted:        {summary.get('files_linted', 0)}", file=out)
    print(f"Files Failed:        {summary.get('files_failed', 0)}", file=out)
    print(f"Total Diagnostics:   {summary.get('total_diagnostics', 0)}", file=out)
    print(f"Duration:            {duration:.2f} seconds", file=out)
    if stats:
        print("-" * 60, file=out)
        print(f"{'CODE':<40} | {'COUNT':>5}", file=out)
        print("-" * 60, file=out)
        for code, count in sorted(stats.items(), key=lambda kv: (-kv[1], kv[0])):
            print(f"{code:<40} | {count:>5}", file=out)
    print("=" * 60 + "\n", file=out)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the 'nestlint' command.
    Returns 0 when no ERROR diagnostics remain, 1 otherwise (or on usage errors).
    """
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    config_ok = _load_config(parsed_args)
    configure_logger(
        parsed_args.log_level or config_manager.get_nested("debug.level", "WARNING"),
        module_levels=config_manager.get_nested("debug.modules", {})
    )
    if not config_ok:
        return 1

    if parsed_args.list_codes:
        for code in DOMRegistry.get_all_possible_codes():
            print(code)
        return 0

    if not parsed_args.paths:
        parser.print_usage(sys.stderr)
        return 1

    files = PathUtils.expand_html_files(parsed_args.paths)
    if not files:
        logger.warning("No HTML files found.")
        return 0

    disabled = list(config_manager.get_nested("lint.disabled_codes", [])) + parsed_args.disable
    unknown = sorted(set(disabled) - set(DOMRegistry.get_all_possible_codes()))
    if unknown:
        logger.warning(f"Unknown diagnostic code(s) disabled: {', '.join(unknown)}")

    controller = LintController(
        disabled_codes=disabled,
        severity_overrides=config_manager.get_nested("lint.severity_overrides", {})
    )
    workers = parsed_args.workers or config_manager.get_nested("lint.workers", 1)

    show_progress = len(files) > 1 and config_manager.get_nested("lint.progress", True)
    pbar = tqdm(total=len(files), desc="Linting", unit="file", disable=not show_progress)

    def progress_update(current, total):
        pbar.n = current
        pbar.refresh()

    start = time.perf_counter()
    summary = controller.lint_files(files, workers=workers, progress_callback=progress_update)
    duration = time.perf_counter() - start
    pbar.close()

    for source, findings in controller.results.items():
        for d in findings:
            print(f"{source}:{d.line}:{d.column} {d.severity.value} {d.code} {d.message}")
    for source, error in controller.failures.items():
        print(f"{source}: could not be linted: {error}", file=sys.stderr)

    if show_progress:
        _print_summary(summary, duration)

    if parsed_args.export:
        controller.export_csv(Path(parsed_args.export))

    return 1 if summary["errors"] or controller.failures else 0


if __name__ == "__main__":
    sys.exit(main())
