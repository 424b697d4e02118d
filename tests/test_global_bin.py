import os
from pathlib import Path

import pytest

from pixikit.global_bin import (
    BinScriptMapping,
    bin_dir,
    bin_env_dir,
    catch_all_arg,
    find_executables,
    home_path,
    is_bin_folder_on_path,
    is_executable,
    map_executables_to_global_bin_scripts,
    package_bin_env_dir,
)


@pytest.fixture
def pixi_home(tmp_path, monkeypatch):
    home = tmp_path / "pixi-home"
    monkeypatch.setenv("PIXI_HOME", str(home))
    return home


def _make_file(root: Path, relative: str, mode: int) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(mode)


def test_home_path_from_environment(pixi_home):
    assert home_path() == pixi_home


def test_home_path_defaults_to_dot_pixi(tmp_path, monkeypatch):
    monkeypatch.delenv("PIXI_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert home_path() == tmp_path / ".pixi"


def test_bin_and_env_dirs(pixi_home):
    assert bin_dir() == pixi_home / "bin"
    assert bin_env_dir() == pixi_home / "envs"


def test_package_bin_env_dir_is_normalized(pixi_home):
    assert package_bin_env_dir("NumPy") == pixi_home / "envs" / "numpy"
    assert package_bin_env_dir("NumPy").parent == bin_env_dir()


def test_is_executable_in_bin(tmp_path):
    _make_file(tmp_path, "bin/tool", 0o755)
    assert is_executable(tmp_path, "bin/tool") is True


def test_is_executable_requires_exec_bit(tmp_path):
    _make_file(tmp_path, "bin/readme", 0o644)
    assert is_executable(tmp_path, "bin/readme") is False


def test_is_executable_outside_binary_folder(tmp_path):
    _make_file(tmp_path, "lib/tool", 0o755)
    assert is_executable(tmp_path, "lib/tool") is False


def test_is_executable_missing_file(tmp_path):
    assert is_executable(tmp_path, "bin/missing") is False


def test_is_executable_empty_path(tmp_path):
    assert is_executable(tmp_path, "") is False


def test_find_executables_keeps_order(tmp_path):
    _make_file(tmp_path, "bin/zeta", 0o755)
    _make_file(tmp_path, "bin/alpha", 0o755)
    _make_file(tmp_path, "bin/notes", 0o644)
    _make_file(tmp_path, "share/tool", 0o755)
    files = ["bin/zeta", "bin/notes", "share/tool", "bin/alpha"]
    assert find_executables(tmp_path, files) == [Path("bin/zeta"), Path("bin/alpha")]


def test_map_strips_known_extensions(tmp_path):
    executables = [Path("bin/run.sh"), Path("bin/script.py"), Path("bin/Tool")]
    mappings = map_executables_to_global_bin_scripts(executables, tmp_path)
    assert [m.global_binary_path for m in mappings] == [
        tmp_path / "run",
        tmp_path / "script",
        tmp_path / "tool",
    ]
    assert [m.original_executable for m in mappings] == executables


def test_map_keeps_unknown_extension(tmp_path):
    mappings = map_executables_to_global_bin_scripts(["bin/data.txt"], tmp_path)
    assert mappings == [BinScriptMapping(Path("bin/data.txt"), tmp_path / "data.txt")]


def test_map_strips_only_one_extension(tmp_path):
    mappings = map_executables_to_global_bin_scripts(["bin/a.py.sh"], tmp_path)
    assert mappings[0].global_binary_path == tmp_path / "a.py"


def test_map_empty_input(tmp_path):
    assert map_executables_to_global_bin_scripts([], tmp_path) == []


@pytest.mark.parametrize(
    "shell, expected",
    [("cmd", "%*"), ("powershell", "@args"), ("bash", '"$@"'), ("zsh", '"$@"')],
)
def test_catch_all_arg(shell, expected):
    assert catch_all_arg(shell) == expected


def test_bin_folder_on_path(pixi_home, monkeypatch):
    monkeypatch.setenv("PATH", os.pathsep.join(["/usr/bin", str(pixi_home / "bin")]))
    assert is_bin_folder_on_path() is True


def test_bin_folder_not_on_path(pixi_home, monkeypatch):
    monkeypatch.setenv("PATH", os.pathsep.join(["/usr/bin", str(pixi_home)]))
    assert is_bin_folder_on_path() is False


def test_bin_folder_without_path_variable(pixi_home, monkeypatch):
    monkeypatch.delenv("PATH", raising=False)
    assert is_bin_folder_on_path() is False