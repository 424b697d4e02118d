"""Locations and launcher scripts for globally installed packages."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

_WINDOWS_BINARY_FOLDERS = (
    "",
    "Library/mingw-w64/bin/",
    "Library/usr/bin/",
    "Library/bin/",
    "Scripts/",
    "bin/",
)

_UNIX_BINARY_FOLDERS = ("bin",)

_WINDOWS_DEFAULT_EXTENSIONS = (
    ".COM",
    ".EXE",
    ".BAT",
    ".CMD",
    ".VBS",
    ".VBE",
    ".JS",
    ".JSE",
    ".WSF",
    ".WSH",
    ".MSC",
    ".CPL",
)

_UNIX_SCRIPT_EXTENSIONS = (
    ".sh",
    ".bash",
    ".zsh",
    ".csh",
    ".tcsh",
    ".ksh",
    ".fish",
    ".py",
    ".pl",
    ".rb",
    ".lua",
    ".php",
    ".tcl",
    ".awk",
    ".sed",
)


def _is_windows() -> bool:
    return os.name == "nt"


@dataclass(frozen=True)
class BinScriptMapping:
    """An executable inside a package environment and its global launcher path."""

    original_executable: Path
    global_binary_path: Path


def home_path() -> Path:
    """Return the pixi home directory: ``PIXI_HOME`` or ``~/.pixi``."""
    value = os.environ.get("PIXI_HOME")
    if value is not None:
        return Path(value)
    try:
        return Path.home() / ".pixi"
    except RuntimeError as exc:
        raise RuntimeError("could not find home directory") from exc


def bin_dir() -> Path:
    """Return the directory holding the global launcher scripts."""
    return home_path() / "bin"


def bin_env_dir() -> Path:
    """Return the directory holding one environment per global package."""
    return home_path() / "envs"


def package_bin_env_dir(name: str) -> Path:
    """Return the environment directory of the global package ``name``."""
    return bin_env_dir() / name.lower()


def is_executable(prefix: str | os.PathLike, relative_path: str | os.PathLike) -> bool:
    """Tell whether a file of a prefix is an executable in a binary folder."""
    relative = Path(relative_path)
    if not relative.parts:
        return False
    folders = _WINDOWS_BINARY_FOLDERS if _is_windows() else _UNIX_BINARY_FOLDERS
    parent = relative.parent
    if not any(Path(folder) == parent for folder in folders):
        return False
    absolute = Path(prefix) / relative
    return absolute.is_file() and os.access(absolute, os.X_OK)


def find_executables(
    prefix: str | os.PathLike, files: Iterable[str | os.PathLike]
) -> list[Path]:
    """Return the files of a package, relative to the prefix, that are executables."""
    return [Path(path) for path in files if is_executable(prefix, path)]


def _script_extensions() -> list[str]:
    if _is_windows():
        pathext = os.environ.get("PATHEXT")
        if pathext is not None:
            return [ext.lower() for ext in pathext.split(";")]
        return [ext.lower() for ext in _WINDOWS_DEFAULT_EXTENSIONS]
    return list(_UNIX_SCRIPT_EXTENSIONS)


def map_executables_to_global_bin_scripts(
    executables: Iterable[str | os.PathLike], bin_dir: str | os.PathLike
) -> list[BinScriptMapping]:
    """Map each executable to the launcher script that will start it.

    The launcher is named after the lower-cased file name with a known
    script extension removed; on Windows it gets a ``.bat`` extension.
    """
    extensions = _script_extensions()
    directory = Path(bin_dir)
    mappings = []
    for executable in executables:
        executable = Path(executable)
        file_name = executable.name.lower()
        if not file_name:
            continue
        for ext in extensions:
            if ext and file_name.endswith(ext):
                file_name = file_name[: -len(ext)]
                break
        script_path = directory / file_name
        if _is_windows() and script_path.name:
            script_path = script_path.with_suffix(".bat")
        mappings.append(BinScriptMapping(executable, script_path))
    return mappings


def catch_all_arg(shell: str) -> str:
    """Return the shell syntax that forwards all arguments of a script."""
    name = shell.lower()
    if name in ("cmd", "cmd.exe", "cmdexe"):
        return "%*"
    if name in ("powershell", "pwsh"):
        return "@args"
    return '"$@"'


def is_bin_folder_on_path() -> bool:
    """Tell whether the global binary directory is on ``PATH``."""
    try:
        target = bin_dir()
    except RuntimeError:
        return False
    entries = os.environ.get("PATH")
    if entries is None:
        return False
    return any(Path(entry) == target for entry in entries.split(os.pathsep))