"""Text rendering of SPARQL JSON results."""

import json
from typing import Any, Dict, List, Optional

from .errors import ParseError

MAX_DISPLAY_ROWS = 100
NO_RESULTS = 'No results found.'


def _bindings(data: Optional[Dict[str, Any]]) -> List[Any]:
    if not data:
        return []
    results = data.get('results')
    if not isinstance(results, dict):
        return []
    bindings = results.get('bindings') or []
    if not isinstance(bindings, list):
        raise ParseError('Results payload bindings must be a list')
    return bindings


def _variables(data: Dict[str, Any]) -> List[str]:
    head = data.get('head')
    variables = head.get('vars') if isinstance(head, dict) else None
    if not isinstance(variables, list):
        raise ParseError('Results payload has bindings but no head.vars list')
    return [str(v) for v in variables]


def _cell(binding: Any, variable: str) -> str:
    if not isinstance(binding, dict):
        raise ParseError(f'Expected a binding object, got {type(binding).__name__}')
    term = binding.get(variable)
    if not term:
        return ''
    if isinstance(term, dict):
        return str(term.get('value', ''))
    return str(term)


def format_results(data: Optional[Dict[str, Any]]) -> str:
    """Format SPARQL results into a readable table.

    Args:
        data: SPARQL JSON results payload, or None

    Returns:
        A pipe-separated table with at most MAX_DISPLAY_ROWS rows, or
        NO_RESULTS when there are no bindings

    Raises:
        ParseError: If bindings are present but the payload is malformed
    """
    bindings = _bindings(data)
    if not bindings:
        return NO_RESULTS

    variables = _variables(data)

    table = ' | '.join(variables) + '\n'
    table += ' | '.join('---' for _ in variables) + '\n'

    for binding in bindings[:MAX_DISPLAY_ROWS]:
        table += ' | '.join(_cell(binding, v) for v in variables) + '\n'

    if len(bindings) > MAX_DISPLAY_ROWS:
        table += f'\n(Showing first {MAX_DISPLAY_ROWS} of {len(bindings)} results)'

    return table


def format_raw_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_query_response(heading: str, data: Optional[Dict[str, Any]]) -> str:
    """Combine the table and the untouched payload into one response text."""
    return (
        f'# {heading}\n\n'
        f'{format_results(data)}\n\n'
        f'## Raw JSON:\n```json\n{format_raw_json(data)}\n```'
    )
