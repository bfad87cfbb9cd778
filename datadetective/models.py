from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

COLUMN_TYPES = ('string', 'number', 'date', 'boolean')
CONFIDENCE_LEVELS = ('high', 'medium', 'low')
CHART_TYPES = ('bar', 'line', 'pie', 'table')


@dataclass
class Column:
    name: str
    type: str = 'string'
    sample_values: List[Any] = field(default_factory=list)

    def __post_init__(self):
        if self.type not in COLUMN_TYPES:
            raise ValueError(f"Unknown column type: {self.type!r}")


@dataclass
class TableSummary:
    total_rows: int = 0
    total_columns: int = 0
    possible_user_id_columns: List[str] = field(default_factory=list)
    possible_event_columns: List[str] = field(default_factory=list)
    possible_timestamp_columns: List[str] = field(default_factory=list)


@dataclass
class Table:
    """In-memory dataset handed to the engine. The engine never mutates it."""
    columns: List[Column] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)
    summary: TableSummary = field(default_factory=TableSummary)
    file_size: Optional[int] = None

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]


@dataclass
class AnalysisResult:
    id: str
    title: str
    description: str
    value: Any
    insight: str
    confidence: str = 'high'
    chart_type: Optional[str] = None
    chart_data: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'value': self.value,
            'insight': self.insight,
            'confidence': self.confidence,
        }
        if self.chart_type is not None:
            out['chartType'] = self.chart_type
        if self.chart_data is not None:
            out['chartData'] = [dict(d) for d in self.chart_data]
        return out


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    confidence: str = 'high'
    completeness: Optional[float] = None

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


@dataclass
class AnalysisSummary:
    total_results: int = 0
    high_confidence_results: int = 0
    analysis_types: List[str] = field(default_factory=list)
    data_quality: str = 'low'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalResults': self.total_results,
            'highConfidenceResults': self.high_confidence_results,
            'analysisTypes': list(self.analysis_types),
            'dataQuality': self.data_quality,
        }


@dataclass
class AnalysisReport:
    results: List[AnalysisResult] = field(default_factory=list)
    validation: Optional[ValidationResult] = None
    summary: Optional[AnalysisSummary] = None
