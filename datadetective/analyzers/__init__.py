from .base import AnalyzerBase, run_isolated
from .registry import register, get_analyzer, default_analyzers
from .row_count import RowCountAnalyzer
from .action import ActionAnalyzer
from .trends import TimeAnalyzer
from .product import ProductAnalyzer

__all__ = [
    'AnalyzerBase', 'run_isolated', 'register', 'get_analyzer', 'default_analyzers',
    'RowCountAnalyzer', 'ActionAnalyzer', 'TimeAnalyzer', 'ProductAnalyzer',
]
