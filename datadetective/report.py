from pathlib import Path
from typing import Any, Dict, Optional
import json
import time

import numpy as np
import pandas as pd

from .models import AnalysisReport


def _to_jsonable(x: Any) -> Any:
    if isinstance(x, np.integer):
        return int(x)
    if isinstance(x, np.floating):
        return float(x)
    if isinstance(x, np.bool_):
        return bool(x)
    if isinstance(x, pd.Timestamp):
        return x.isoformat()
    return str(x)


def build_report(analysis: AnalysisReport, input_name: Optional[str] = None) -> Dict[str, Any]:
    validation = analysis.validation
    return {
        'input': input_name,
        'created_at': time.strftime('%Y-%m-%dT%H:%M:%S'),
        'summary': analysis.summary.to_dict() if analysis.summary else None,
        'validation': {
            'isValid': validation.is_valid,
            'errors': validation.errors,
            'warnings': validation.warnings,
            'confidence': validation.confidence,
            'completeness': validation.completeness,
        } if validation else None,
        'results': [r.to_dict() for r in analysis.results],
    }


def render_markdown(report: Dict[str, Any]) -> str:
    md_lines = ["# Analysis Report\n"]
    if report.get('input'):
        md_lines.append(f"**Input:** {report['input']}\n")
    summary = report.get('summary') or {}
    if summary:
        md_lines.append("## Summary\n")
        md_lines.append(f"- **Results**: {summary.get('totalResults')}")
        md_lines.append(f"- **High confidence**: {summary.get('highConfidenceResults')}")
        md_lines.append(f"- **Data quality**: {summary.get('dataQuality')}")
        md_lines.append(f"- **Analysis types**: {', '.join(summary.get('analysisTypes') or [])}")

    validation = report.get('validation') or {}
    issues = (validation.get('errors') or []) + (validation.get('warnings') or [])
    if issues:
        md_lines.append("\n## Data Quality Issues\n")
        for msg in validation.get('errors') or []:
            md_lines.append(f"- **error**: {msg}")
        for msg in validation.get('warnings') or []:
            md_lines.append(f"- warning: {msg}")

    md_lines.append("\n## Findings\n")
    for r in report.get('results') or []:
        md_lines.append(f"### {r['title']} ({r['confidence']})\n")
        md_lines.append(r['insight'])
        chart = r.get('chartData')
        if chart:
            md_lines.append('')
            md_lines.append('| name | value |')
            md_lines.append('|---|---|')
            for item in chart:
                md_lines.append(f"| {item.get('name')} | {item.get('value')} |")
        md_lines.append('')
    return '\n'.join(md_lines)


def write_report(report: Dict[str, Any], output_dir: str) -> Dict[str, str]:
    p = Path(output_dir)
    p.mkdir(parents=True, exist_ok=True)
    json_path = p / 'report.json'
    md_path = p / 'report.md'
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2, default=_to_jsonable)
    md_path.write_text(render_markdown(report), encoding='utf-8')
    return {'json': str(json_path), 'markdown': str(md_path)}
