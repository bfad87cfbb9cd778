from typing import Iterable, List, Mapping, Optional
import logging
import time

from .analyzers import AnalyzerBase, default_analyzers, run_isolated
from .constants import EngineConfig
from .logging_config import get_logger, null_logger
from .models import (
    CHART_TYPES, CONFIDENCE_LEVELS, AnalysisReport, AnalysisResult, AnalysisSummary, Table, ValidationResult,
)
from .validator import DataValidator
from . import values

REQUIRED_FIELDS = ('id', 'title', 'description', 'insight')


def _contract_problem(result) -> Optional[str]:
    if not isinstance(result, AnalysisResult):
        return f'not an AnalysisResult: {type(result).__name__}'
    for f in REQUIRED_FIELDS:
        v = getattr(result, f, None)
        if not isinstance(v, str) or not v.strip():
            return f'missing {f}'
    if result.confidence not in CONFIDENCE_LEVELS:
        return f'invalid confidence {result.confidence!r}'
    if result.chart_type is not None and result.chart_type not in CHART_TYPES:
        return f'invalid chart type {result.chart_type!r}'
    return None


def sanitize(results: Iterable, logger: Optional[logging.Logger] = None) -> List[AnalysisResult]:
    """Drop results that break the output contract or repeat an earlier id."""
    clean: List[AnalysisResult] = []
    seen = set()
    for r in results:
        problem = _contract_problem(r)
        if problem is None and r.id in seen:
            problem = f'duplicate id {r.id!r}'
        if problem:
            if logger is not None:
                logger.debug(f"Dropping malformed result: {problem}")
            continue
        seen.add(r.id)
        clean.append(r)
    return clean


def summarize(results: List[AnalysisResult]) -> AnalysisSummary:
    total = len(results)
    high = sum(1 for r in results if r.confidence == 'high')
    types: List[str] = []
    for r in results:
        prefix = r.id.split('-')[0]
        if prefix not in types:
            types.append(prefix)

    quality = 'low'
    if high > total * 0.7:
        quality = 'high'
    elif high > total * 0.4:
        quality = 'medium'
    return AnalysisSummary(total_results=total, high_confidence_results=high, analysis_types=types, data_quality=quality)


def _quick_quality(rows, names) -> str:
    sample = [r for r in rows[:100] if isinstance(r, Mapping)]
    cells = len(sample) * len(names)
    if not cells:
        return 'low'
    filled = sum(1 for r in sample for c in names if not values.is_empty(r.get(c)))
    completeness = filled / cells * 100
    if completeness > 90:
        return 'high'
    if completeness > 70:
        return 'medium'
    return 'low'


def basic_summary(table: Table) -> AnalysisResult:
    """Minimal overview built from counts only; used when nothing else is available."""
    rows = list(getattr(table, 'rows', None) or [])
    names = [getattr(c, 'name', c) for c in (getattr(table, 'columns', None) or [])]
    quality = _quick_quality(rows, names)
    fit = {'high': 'excellent', 'medium': 'suitable'}.get(quality, 'usable')
    return AnalysisResult(
        id='dataset-overview',
        title='Dataset Overview',
        description='Basic summary of the dataset',
        value={'rows': len(rows), 'columns': len(names), 'quality': quality},
        insight=f'Dataset has {len(rows):,} rows and {len(names)} columns. Data quality is {quality}, {fit} for analysis.',
        confidence='high' if len(rows) > 100 else 'medium',
    )


def no_data_result(table: Table, validation: Optional[ValidationResult]) -> AnalysisResult:
    reasons = list(validation.errors) if validation is not None else []
    return AnalysisResult(
        id='no-data',
        title='No Usable Data',
        description='The dataset has no rows or columns that can be analyzed',
        value={'rows': table.row_count, 'columns': len(table.columns), 'errors': reasons},
        insight='No usable data: ' + ('; '.join(reasons) if reasons else 'the table is empty'),
        confidence='low',
    )


def validation_result(validation: ValidationResult) -> AnalysisResult:
    n_err, n_warn = len(validation.errors), len(validation.warnings)
    if not n_err and not n_warn:
        insight = 'All data quality checks passed'
    else:
        first = (validation.errors or validation.warnings)[0]
        insight = f'{n_err} errors and {n_warn} warnings. {first}'
    return AnalysisResult(
        id='data-validation',
        title='Data Validation',
        description='Structural and data quality checks run before analysis',
        value={
            'isValid': validation.is_valid,
            'errors': list(validation.errors),
            'warnings': list(validation.warnings),
            'completeness': validation.completeness,
        },
        insight=insight,
        confidence=validation.confidence,
    )


def _has_usable_data(table: Table) -> bool:
    if not table.rows or not table.columns:
        return False
    return any(not values.is_empty(v) for row in table.rows for v in row.values())


class AnalysisOrchestrator:
    """Validate a table, run every analyzer in isolation and clean up the output."""

    def __init__(self, analyzers: Optional[List[AnalyzerBase]] = None, config: Optional[EngineConfig] = None,
                 logger: Optional[logging.Logger] = None, validator: Optional[DataValidator] = None):
        self.cfg = config or EngineConfig()
        self.analyzers = list(analyzers) if analyzers is not None else default_analyzers(self.cfg)
        self.validator = validator or DataValidator(self.cfg)
        if logger is None:
            logger = get_logger('orchestrator') if self.cfg.enable_logging else null_logger()
        self.log = logger

    def run_complete_analysis(self, table: Table) -> List[AnalysisResult]:
        return self.analyze(table).results

    def get_analysis_summary(self, table: Table) -> AnalysisSummary:
        return self.analyze(table).summary

    def analyze(self, table: Table) -> AnalysisReport:
        start = time.time()
        try:
            validation = self.validator.validate(table)
            if not _has_usable_data(table):
                self.log.warning(f"No usable data, returning fallback summary: {validation.errors}")
                results = [no_data_result(table, validation)]
                return AnalysisReport(results=results, validation=validation, summary=summarize(results))

            results = [validation_result(validation)]
            produced = 0
            for analyzer in self.analyzers:
                out = run_isolated(analyzer, table, self.log)
                produced += len(out)
                results.extend(out)
            if not produced:
                results.append(basic_summary(table))

            results = sanitize(results, self.log)
            summary = summarize(results)
            self.log.info(
                f"Analysis completed in {time.time() - start:.2f}s with {len(results)} results "
                f"(data quality {summary.data_quality})"
            )
            return AnalysisReport(results=results, validation=validation, summary=summary)
        except Exception:
            self.log.exception("Critical analysis failure, returning basic summary")
            results = [basic_summary(table)]
            return AnalysisReport(results=results, validation=None, summary=summarize(results))


def run_complete_analysis(table: Table, config: Optional[EngineConfig] = None) -> List[AnalysisResult]:
    return AnalysisOrchestrator(config=config).run_complete_analysis(table)
