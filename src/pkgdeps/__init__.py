"""pkgdeps: Resolve and check package dependencies of multi-package projects."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
