# src/assistant_relay/relay/__init__.py
from .parser import parse_response, ResponseParser
from .diff_lines import changed_line_numbers, DiffLineAnalyzer
from .index import FileHighlightIndex
from .session import RelaySession, SessionBusyError

__all__ = [
    "parse_response",
    "ResponseParser",
    "changed_line_numbers",
    "DiffLineAnalyzer",
    "FileHighlightIndex",
    "RelaySession",
    "SessionBusyError",
]
