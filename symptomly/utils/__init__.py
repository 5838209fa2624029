"""Pure Python utilities for Symptomly.

Modules here must not import from the rest of the package.

Submodules:
    - dt_utils: Date/time parsing, formatting, calendar arithmetic
"""

from . import dt_utils

__all__ = ["dt_utils"]
