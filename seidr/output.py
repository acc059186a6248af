"""
Output module for seidr.

Data goes to stdout, progress goes to stderr:
- JSONL (``--json``): one object per step, link, and a final summary
- Errors: a JSON object on stderr

Usage:
    from seidr.output import emit, emit_error

    emit(results)
    emit_error("config not found", type="config_error")
"""

import json
import sys
from typing import Iterable, Any, Dict, Optional


def _as_dict(item: Any) -> Dict[str, Any]:
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {'value': str(item)}


def emit(items: Iterable[Any], stream=None) -> None:
    """
    Emit items as JSONL.

    Args:
        items: Items with a to_dict() method, or dicts
        stream: Output stream (default: stdout)
    """
    stream = stream or sys.stdout
    for item in items:
        print(json.dumps(_as_dict(item), ensure_ascii=False), file=stream, flush=True)


def emit_one(item: Any, stream=None) -> None:
    """Emit a single item as one JSON line."""
    emit([item], stream=stream)


def emit_error(
    error: str,
    type: str = "error",
    context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Emit error to stderr as JSON.

    Args:
        error: Error message
        type: Error type (e.g., "config_error", "lookup_failed")
        context: Additional context dict
    """
    obj = {
        'error': error,
        'type': type
    }
    if context:
        obj['context'] = context

    print(json.dumps(obj, ensure_ascii=False), file=sys.stderr, flush=True)
