"""Loading of ``sfdx-project.json`` into resolution inputs.

Public API::

    from pkgdeps.project import ProjectConfig, find_project_root, load_project
"""

from __future__ import annotations

from pkgdeps.project.loader import (
    PROJECT_FILE_NAME,
    ProjectConfig,
    find_project_root,
    load_project,
    parse_project,
)

__all__ = [
    "PROJECT_FILE_NAME",
    "ProjectConfig",
    "find_project_root",
    "load_project",
    "parse_project",
]
