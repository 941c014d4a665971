from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor

from style_lint.analyzer import analyze
from style_lint.errors import LoadError, ParseError
from style_lint.loader import discover_files, load_source
from style_lint.models import LintRun, Report, ScanSettings, SourceUnit
from style_lint.rules.registry import RuleRegistry


logger = logging.getLogger(__name__)


def run_lint(
    targets: list[str],
    registry: RuleRegistry,
    settings: ScanSettings,
    *,
    jobs: int,
) -> LintRun:
    paths = discover_files(targets, settings)
    logger.debug("Discovered %d files from %d targets", len(paths), len(targets))

    units: list[SourceUnit] = []
    load_errors: list[LoadError] = []
    for path in paths:
        try:
            units.append(load_source(path, settings))
        except LoadError as exc:
            logger.warning("Skipping %s", exc)
            load_errors.append(exc)

    run = analyze_batch(units, registry, jobs=jobs)
    return LintRun(
        reports=run.reports,
        parse_errors=run.parse_errors,
        load_errors=tuple(load_errors),
    )


def analyze_batch(units: list[SourceUnit], registry: RuleRegistry, *, jobs: int) -> LintRun:
    if jobs > 1 and len(units) > 1:
        with ProcessPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(_analyze_one, units, [registry] * len(units)))
    else:
        outcomes = [_analyze_one(unit, registry) for unit in units]

    reports: list[Report] = []
    parse_errors: list[ParseError] = []
    for outcome in outcomes:
        if isinstance(outcome, ParseError):
            logger.info("Could not parse %s", outcome)
            parse_errors.append(outcome)
        else:
            reports.append(outcome)

    return LintRun(reports=tuple(reports), parse_errors=tuple(parse_errors))


def _analyze_one(unit: SourceUnit, registry: RuleRegistry) -> Report | ParseError:
    logger.debug("Analyzing %s", unit.path)
    try:
        return analyze(unit, registry)
    except ParseError as exc:
        return exc
