"""System, project and environment information for the current machine."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

WIDTH = 18


def _line(label: str, value: object) -> str:
    return f"{label:>{WIDTH}}: {value}\n"


@dataclass(kw_only=True)
class ProjectInfo:
    """Details about the project found in the working directory."""

    manifest_path: Path
    last_updated: str | None = None
    pixi_folder_size: str | None = None
    version: str | None = None

    def as_dict(self) -> dict:
        return {
            "manifest_path": str(self.manifest_path),
            "last_updated": self.last_updated,
            "pixi_folder_size": self.pixi_folder_size,
            "version": self.version,
        }


@dataclass(kw_only=True)
class EnvironmentInfo:
    """Details about one environment of a project."""

    name: str
    features: list[str] = field(default_factory=list)
    solve_group: str | None = None
    environment_size: str | None = None
    dependencies: list[str] = field(default_factory=list)
    pypi_dependencies: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    tasks: list[str] = field(default_factory=list)
    channels: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "features": list(self.features),
            "solve_group": self.solve_group,
            "environment_size": self.environment_size,
            "dependencies": list(self.dependencies),
            "pypi_dependencies": list(self.pypi_dependencies),
            "platforms": list(self.platforms),
            "tasks": list(self.tasks),
            "channels": list(self.channels),
        }

    def render(self) -> str:
        """Return the human readable description of this environment."""
        out = [f"{self.name}\n", _line("Features", ", ".join(self.features))]
        if self.solve_group is not None:
            out.append(_line("Solve group", self.solve_group))
        if self.environment_size is not None:
            out.append(_line("Environment size", self.environment_size))
        if self.channels:
            out.append(_line("Channels", ", ".join(self.channels)))
        out.append(_line("Dependency count", len(self.dependencies)))
        if self.dependencies:
            out.append(_line("Dependencies", ", ".join(self.dependencies)))
        if self.pypi_dependencies:
            out.append(_line("PyPI Dependencies", ", ".join(self.pypi_dependencies)))
        if self.platforms:
            out.append(_line("Target platforms", ", ".join(self.platforms)))
        if self.tasks:
            out.append(_line("Tasks", ", ".join(self.tasks)))
        return "".join(out)

    def __str__(self) -> str:
        return self.render()


@dataclass(kw_only=True)
class Info:
    """Everything reported about the machine, project and environments."""

    platform: str
    virtual_packages: list[str] = field(default_factory=list)
    version: str
    cache_dir: Path | None = None
    cache_size: str | None = None
    auth_dir: Path
    project_info: ProjectInfo | None = None
    environments_info: list[EnvironmentInfo] = field(default_factory=list)

    def render(self) -> str:
        """Return the human readable report."""
        cache_dir = str(self.cache_dir) if self.cache_dir is not None else "None"
        out = [
            _line("Pixi version", self.version),
            _line("Platform", self.platform),
        ]
        for position, package in enumerate(self.virtual_packages):
            out.append(_line("Virtual packages" if position == 0 else "", package))
        out.append(_line("Cache dir", cache_dir))
        if self.cache_size is not None:
            out.append(_line("Cache size", self.cache_size))
        out.append(_line("Auth storage", self.auth_dir))

        project = self.project_info
        if project is not None:
            out.append("\nProject\n------------\n")
            if project.version is not None:
                out.append(_line("Version", project.version))
            out.append(_line("Manifest file", project.manifest_path))
            if project.last_updated is not None:
                out.append(_line("Last updated", project.last_updated))

        if self.environments_info:
            out.append("\nEnvironments\n------------\n")
            out.extend(env.render() + "\n" for env in self.environments_info)
        return "".join(out)

    def __str__(self) -> str:
        return self.render()

    def to_json(self) -> str:
        """Return the report as pretty printed JSON."""
        data = {
            "platform": self.platform,
            "virtual_packages": list(self.virtual_packages),
            "version": self.version,
            "cache_dir": str(self.cache_dir) if self.cache_dir is not None else None,
            "cache_size": self.cache_size,
            "auth_dir": str(self.auth_dir),
            "project_info": (
                self.project_info.as_dict() if self.project_info is not None else None
            ),
            "environments_info": [env.as_dict() for env in self.environments_info],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)


def _tree_size(path: str | os.PathLike) -> int:
    total = 0
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                total += _tree_size(entry.path)
            else:
                total += entry.stat(follow_symlinks=False).st_size
    return total


def dir_size(path: str | os.PathLike) -> str:
    """Return the total size of a directory tree in whole MiB."""
    return f"{_tree_size(path) // 1024 // 1024} MiB"


def last_updated(path: str | os.PathLike) -> str:
    """Return the local modification time of a file as ``DD-MM-YYYY H:M:S``."""
    modified = os.stat(path).st_mtime
    return datetime.fromtimestamp(modified).strftime("%d-%m-%Y %H:%M:%S")