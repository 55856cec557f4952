"""Report builder: text and JSON output for palette-swap results."""

import json
import os
from typing import Any

from palette_swap.core.colour import RGBA
from palette_swap.core.types import SwapReport


def format_text(report: SwapReport) -> str:
    """Format report as human-readable text."""
    lines = []
    dim = f'{report.image_width}\u00d7{report.image_height}'
    header = f'palette-swap: {report.image_path} ({dim})'
    if report.palette_path:
        header += f' \u2014 {os.path.basename(report.palette_path)} ({len(report.variants)} palettes)'
    lines.append(header)
    lines.append('')

    for variant, data in report.variants.items():
        target = f' \u2192 {data["output"]}' if data.get('output') else ''
        lines.append(f'\u2500\u2500 {variant}{target}')
        for entry in data['entries']:
            lines.append(f'  {entry["base"]} \u2192 {entry["replacement"]}  {entry["pixels"]} px')
        lines.append(f'  remapped {data["remapped"]}  passthrough {data["passthrough"]}')
        lines.append('')

    return '\n'.join(lines)


def format_json(report: SwapReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
    }
    if report.palette_path:
        obj['palette_file'] = report.palette_path
    if report.palette_name:
        obj['palette_set'] = report.palette_name

    obj['variants'] = [{'name': name, **data} for name, data in report.variants.items()]
    return json.dumps(obj, indent=2)


def format_census_text(census: list[tuple[RGBA, int]], total: int) -> str:
    """One line per colour: hex, pixel count, share of the image."""
    lines = []
    for colour, count in census:
        pct = count / total * 100 if total else 0.0
        lines.append(f'  {colour}  {count:>8}  {pct:5.1f}%')
    return '\n'.join(lines)


def format_census_json(census: list[tuple[RGBA, int]], total: int) -> str:
    obj = {
        'total': total,
        'colours': [
            {'hex': str(c), 'rgba': list(c), 'pixels': n, 'pct': round(n / total * 100, 1) if total else 0.0}
            for c, n in census
        ],
    }
    return json.dumps(obj, indent=2)
