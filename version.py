"""
Version information for the trial license provider.
The VERSION file next to this module is the single source of truth.
"""

import os

DEFAULT_VERSION = "0.0.0-dev"


def get_version() -> str:
    """
    Read the application version from the VERSION file.
    Falls back to DEFAULT_VERSION when the file is missing or empty.
    """
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'VERSION')
    try:
        with open(path, 'r') as f:
            return f.read().strip() or DEFAULT_VERSION
    except OSError:
        return DEFAULT_VERSION


__version__ = get_version()
