"""Helper functions for Symptomly.

Submodules:
    - flow_helpers: voluptuous schemas and input validation wrappers
    - timeline_helpers: Combined timeline, search, day grouping, suggestions
    - report_helpers: Markdown timeline exports

Usage:
    from . import flow_helpers as fh
    from .timeline_helpers import build_timeline
"""

from . import flow_helpers, report_helpers, timeline_helpers

__all__ = [
    "flow_helpers",
    "report_helpers",
    "timeline_helpers",
]
