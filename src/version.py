# src/version.py
"""Package version, resolved once at import time.

The value is stamped into every serialized trove so that older collections
can be migrated when the file format changes.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hoard")
except PackageNotFoundError:
    # Running from a source checkout without an installed distribution
    __version__ = "0.0.0"
