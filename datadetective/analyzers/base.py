from typing import List, Optional
import logging

from ..constants import EngineConfig
from ..models import AnalysisResult, Table


class AnalyzerBase:
    """Strategy interface: one analyzer turns a table into a list of findings.

    Subclasses implement ``compute``. It may raise; ``analyze`` never does.
    """
    name: str = 'base'
    label: str = 'Base'

    def __init__(self, config: Optional[EngineConfig] = None):
        self.cfg = config or EngineConfig()

    def compute(self, table: Table) -> List[AnalysisResult]:
        raise NotImplementedError()

    def analyze(self, table: Table) -> List[AnalysisResult]:
        return run_isolated(self, table)

    def no_data_result(self, insight: str) -> AnalysisResult:
        return AnalysisResult(
            id=f'{self.name}-no-data',
            title=f'No {self.label} Data',
            description=f'No {self.label.lower()} data available for analysis',
            value=0,
            insight=insight,
            confidence='low',
        )


def error_result(analyzer: AnalyzerBase, error: BaseException) -> AnalysisResult:
    name = getattr(analyzer, 'name', None) or type(analyzer).__name__
    label = getattr(analyzer, 'label', None) or name
    return AnalysisResult(
        id=f'{name}-analysis-error',
        title=f'{label} Analysis Error',
        description=f'Error occurred during {label.lower()} analysis',
        value=0,
        insight=f'{label} analysis failed: {error}',
        confidence='low',
    )


def run_isolated(analyzer: AnalyzerBase, table: Table, logger: Optional[logging.Logger] = None) -> List[AnalysisResult]:
    """Run one analyzer so that its failure becomes a low-confidence result."""
    try:
        results = analyzer.compute(table)
        return list(results or [])
    except Exception as e:
        if logger is not None:
            logger.exception(f"Analyzer '{getattr(analyzer, 'name', analyzer)}' failed")
        return [error_result(analyzer, e)]
