from dataclasses import dataclass

DEFAULT_CONFIG = {
    "type_sample_size": 10,
    "type_match_threshold": 0.8,
    "quality_sample_rows": 1000,
    "min_rows_warning": 10,
    "very_few_rows_warning": 3,
    "completeness_error_pct": 50.0,
    "completeness_warning_pct": 80.0,
    "max_warnings_for_medium": 4,
    "top_n": 5,
    "cache_max_entries": 32,
    "enable_logging": True,
}

EMPTY_TOKENS = ('null', 'undefined', 'N/A', 'n/a')


@dataclass
class EngineConfig:
    type_sample_size: int = DEFAULT_CONFIG['type_sample_size']
    type_match_threshold: float = DEFAULT_CONFIG['type_match_threshold']
    quality_sample_rows: int = DEFAULT_CONFIG['quality_sample_rows']
    min_rows_warning: int = DEFAULT_CONFIG['min_rows_warning']
    very_few_rows_warning: int = DEFAULT_CONFIG['very_few_rows_warning']
    completeness_error_pct: float = DEFAULT_CONFIG['completeness_error_pct']
    completeness_warning_pct: float = DEFAULT_CONFIG['completeness_warning_pct']
    max_warnings_for_medium: int = DEFAULT_CONFIG['max_warnings_for_medium']
    top_n: int = DEFAULT_CONFIG['top_n']
    cache_max_entries: int = DEFAULT_CONFIG['cache_max_entries']
    enable_logging: bool = DEFAULT_CONFIG['enable_logging']
