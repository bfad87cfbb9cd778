"""Tabular data analysis engine: type inference, validation, analyzers, orchestration."""
from .constants import EngineConfig
from .errors import DataDetectiveError, LoadError, ValidationError
from .models import (
    AnalysisReport, AnalysisResult, AnalysisSummary, Column, Table, TableSummary, ValidationResult,
)
from .schema import build_table, infer_column_type, infer_column_roles
from .validator import DataValidator
from .orchestrator import AnalysisOrchestrator, run_complete_analysis, sanitize, summarize
from .loader import load_table
from .cache import AnalysisCache, fingerprint

__version__ = "0.1.0"
