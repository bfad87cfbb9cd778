from typing import Dict, List, Optional, Type

from .base import AnalyzerBase
from ..constants import EngineConfig

_REGISTRY: Dict[str, Type[AnalyzerBase]] = {}

# run order used by the orchestrator
DEFAULT_ORDER = ['row-count', 'action', 'time', 'product']


def register(name: str, analyzer_cls):
    _REGISTRY[name] = analyzer_cls
    return analyzer_cls


def get_analyzer(name: str, config: Optional[EngineConfig] = None) -> AnalyzerBase:
    cls = _REGISTRY.get((name or '').lower())
    if cls is None:
        raise KeyError(f"No analyzer registered as {name!r}. Available: {', '.join(sorted(_REGISTRY))}")
    return cls(config)


def available() -> List[str]:
    return sorted(_REGISTRY)


def default_analyzers(config: Optional[EngineConfig] = None) -> List[AnalyzerBase]:
    return [get_analyzer(name, config) for name in DEFAULT_ORDER]


from .row_count import RowCountAnalyzer  # noqa: E402
from .action import ActionAnalyzer  # noqa: E402
from .trends import TimeAnalyzer  # noqa: E402
from .product import ProductAnalyzer  # noqa: E402

register('row-count', RowCountAnalyzer)
register('action', ActionAnalyzer)
register('time', TimeAnalyzer)
register('product', ProductAnalyzer)
