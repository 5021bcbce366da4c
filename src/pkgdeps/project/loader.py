"""Project file loader.

Reads the ``packageAliases`` and ``packageDirectories`` keys of an
``sfdx-project.json`` file. Other keys are ignored. A dependency entry names
its target with ``packageId`` or, failing that, ``package``; entries naming
neither are kept so the walker can reject them when it reaches them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pkgdeps.core.identifiers import AliasResolver
from pkgdeps.core.models import DependencyDeclaration, PackageDirectoryRecord
from pkgdeps.exceptions import ProjectConfigError

logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "sfdx-project.json"


@dataclass
class ProjectConfig:
    """Resolution inputs read from a project file.

    Attributes:
        root: Directory containing the project file.
        aliases: Package alias map (alias -> package id).
        directories: Package directory records in file order.
    """

    root: Path
    aliases: dict[str, str] = field(default_factory=dict)
    directories: list[PackageDirectoryRecord] = field(default_factory=list)

    def alias_resolver(self) -> AliasResolver:
        return AliasResolver(self.aliases)

    @property
    def package_names(self) -> list[str]:
        """Declared package names, in file order, skipping unnamed directories."""
        return [d.declared_package_name for d in self.directories if d.declared_package_name]


def find_project_root(start: Path) -> Path | None:
    """Walk up from *start* to the nearest directory with a project file.

    Args:
        start: Directory to start from.

    Returns:
        The project root, or None if no ancestor holds a project file.
    """
    current = start.resolve()
    while True:
        if (current / PROJECT_FILE_NAME).is_file():
            return current
        if current.parent == current:
            return None
        current = current.parent


def _optional_str(value: Any, what: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ProjectConfigError(f"{what} must be a string, got {type(value).__name__}")
    return value


def _parse_dependency(entry: Any, path: str) -> DependencyDeclaration:
    if not isinstance(entry, dict):
        raise ProjectConfigError(
            f"Dependency of package directory {path!r} must be an object"
        )
    target = entry.get("packageId")
    if target is None:
        target = entry.get("package")
    return DependencyDeclaration(
        dependent_package=_optional_str(target, f"Dependency package in {path!r}"),
        version_number=_optional_str(
            entry.get("versionNumber"), f"Dependency versionNumber in {path!r}"
        ),
    )


def _parse_directory(entry: Any, index: int) -> PackageDirectoryRecord:
    if not isinstance(entry, dict):
        raise ProjectConfigError(f"packageDirectories[{index}] must be an object")
    path = _optional_str(entry.get("path"), f"packageDirectories[{index}].path") or ""
    name = _optional_str(entry.get("package"), f"packageDirectories[{index}].package")
    raw_deps = entry.get("dependencies")
    if raw_deps is None:
        raw_deps = []
    if not isinstance(raw_deps, list):
        raise ProjectConfigError(
            f"packageDirectories[{index}].dependencies must be an array"
        )
    return PackageDirectoryRecord(
        path=path,
        declared_package_name=name or "",
        dependencies=tuple(_parse_dependency(d, path) for d in raw_deps),
    )


def parse_project(data: Any, root: Path) -> ProjectConfig:
    """Build a ``ProjectConfig`` from the decoded project file.

    Args:
        data: Decoded JSON document.
        root: Directory the document was read from.

    Raises:
        ProjectConfigError: If the document or one of its keys has the
            wrong shape.
    """
    if not isinstance(data, dict):
        raise ProjectConfigError("Project file must contain a JSON object")

    raw_aliases = data.get("packageAliases")
    if raw_aliases is None:
        raw_aliases = {}
    if not isinstance(raw_aliases, dict):
        raise ProjectConfigError("packageAliases must be an object")
    aliases = {
        str(alias): str(target)
        for alias, target in raw_aliases.items()
        if target is not None
    }

    raw_dirs = data.get("packageDirectories")
    if raw_dirs is None:
        raw_dirs = []
    if not isinstance(raw_dirs, list):
        raise ProjectConfigError("packageDirectories must be an array")
    directories = [_parse_directory(entry, i) for i, entry in enumerate(raw_dirs)]

    logger.debug(
        "Loaded project at %s: %d package directories, %d aliases",
        root, len(directories), len(aliases),
    )
    return ProjectConfig(root=root, aliases=aliases, directories=directories)


def load_project(project_dir: Path | str | None = None) -> ProjectConfig:
    """Locate and load the project file.

    Args:
        project_dir: Directory inside the project. Defaults to the current
            working directory. Ancestors are searched as well.

    Returns:
        The loaded project configuration.

    Raises:
        ProjectConfigError: If no project file is found, it cannot be read,
            or it is malformed.
    """
    start = Path(project_dir) if project_dir is not None else Path.cwd()
    root = find_project_root(start)
    if root is None:
        raise ProjectConfigError(
            f"No {PROJECT_FILE_NAME} found in {start} or any parent directory"
        )

    project_file = root / PROJECT_FILE_NAME
    try:
        data = json.loads(project_file.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read {project_file}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ProjectConfigError(f"Invalid JSON in {project_file}: {exc}") from exc

    return parse_project(data, root)
