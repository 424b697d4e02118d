import json
import os
from datetime import datetime
from pathlib import Path

import pytest

from pixikit.info import (
    EnvironmentInfo,
    Info,
    ProjectInfo,
    dir_size,
    last_updated,
)


def _info(**overrides):
    values = dict(
        platform="linux-64",
        virtual_packages=["__unix=0=0", "__linux=6.1=0"],
        version="1.2.3",
        cache_dir=Path("/tmp/cache"),
        auth_dir=Path("/tmp/auth"),
    )
    values.update(overrides)
    return Info(**values)


def test_info_render_aligns_labels():
    lines = _info().render().splitlines()
    assert lines[0] == f"{'Pixi version':>18}: 1.2.3"
    assert lines[1] == f"{'Platform':>18}: linux-64"
    assert lines[2] == f"{'Virtual packages':>18}: __unix=0=0"
    assert lines[3] == f"{'':>18}: __linux=6.1=0"
    assert lines[4] == f"{'Cache dir':>18}: {Path('/tmp/cache')}"
    assert lines[5] == f"{'Auth storage':>18}: {Path('/tmp/auth')}"


def test_info_render_without_cache_dir_says_none():
    text = _info(cache_dir=None).render()
    assert f"{'Cache dir':>18}: None\n" in text


def test_info_render_omits_absent_sections():
    text = _info().render()
    assert "Project" not in text
    assert "Environments" not in text
    assert "Cache size" not in text


def test_info_render_project_section():
    project = ProjectInfo(
        manifest_path=Path("/work/pixi.toml"),
        last_updated="01-02-2024 10:11:12",
        version="0.1.0",
    )
    text = _info(project_info=project, cache_size="3 MiB").render()
    assert "\nProject\n------------\n" in text
    assert f"{'Version':>18}: 0.1.0\n" in text
    assert f"{'Manifest file':>18}: {Path('/work/pixi.toml')}\n" in text
    assert f"{'Last updated':>18}: 01-02-2024 10:11:12\n" in text
    assert f"{'Cache size':>18}: 3 MiB\n" in text


def test_environment_render_full():
    env = EnvironmentInfo(
        name="default",
        features=["default", "test"],
        solve_group="group",
        dependencies=["python", "numpy"],
        pypi_dependencies=["requests"],
        platforms=["linux-64", "osx-arm64"],
        tasks=["build", "test"],
        channels=["conda-forge"],
    )
    lines = env.render().splitlines()
    assert lines[0] == "default"
    assert lines[1] == f"{'Features':>18}: default, test"
    assert lines[2] == f"{'Solve group':>18}: group"
    assert lines[3] == f"{'Channels':>18}: conda-forge"
    assert lines[4] == f"{'Dependency count':>18}: 2"
    assert lines[5] == f"{'Dependencies':>18}: python, numpy"
    assert lines[6] == f"{'PyPI Dependencies':>18}: requests"
    assert lines[7] == f"{'Target platforms':>18}: linux-64, osx-arm64"
    assert lines[8] == f"{'Tasks':>18}: build, test"


def test_environment_render_minimal():
    env = EnvironmentInfo(name="empty")
    assert env.render() == f"empty\n{'Features':>18}: \n{'Dependency count':>18}: 0\n"


def test_info_render_lists_environments():
    envs = [EnvironmentInfo(name="default"), EnvironmentInfo(name="cuda")]
    text = _info(environments_info=envs).render()
    assert "\nEnvironments\n------------\n" in text
    assert text.endswith(envs[0].render() + "\n" + envs[1].render() + "\n")


def test_info_to_json_round_trip():
    project = ProjectInfo(manifest_path=Path("/work/pixi.toml"))
    env = EnvironmentInfo(name="default", dependencies=["python"])
    data = json.loads(_info(project_info=project, environments_info=[env]).to_json())
    assert list(data) == [
        "platform",
        "virtual_packages",
        "version",
        "cache_dir",
        "cache_size",
        "auth_dir",
        "project_info",
        "environments_info",
    ]
    assert data["platform"] == "linux-64"
    assert data["cache_size"] is None
    assert data["project_info"]["manifest_path"] == str(Path("/work/pixi.toml"))
    assert data["environments_info"][0]["name"] == "default"
    assert data["environments_info"][0]["dependencies"] == ["python"]


def test_info_to_json_without_project():
    data = json.loads(_info(cache_dir=None).to_json())
    assert data["project_info"] is None
    assert data["cache_dir"] is None
    assert data["environments_info"] == []


def test_dir_size_counts_nested_files(tmp_path):
    (tmp_path / "a.bin").write_bytes(b"\0" * (1024 * 1024))
    nested = tmp_path / "sub" / "deeper"
    nested.mkdir(parents=True)
    (nested / "b.bin").write_bytes(b"\0" * (1024 * 1024 + 10))
    assert dir_size(tmp_path) == "2 MiB"


def test_dir_size_of_empty_directory(tmp_path):
    assert dir_size(tmp_path) == "0 MiB"


def test_dir_size_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        dir_size(tmp_path / "missing")


def test_last_updated_round_trip(tmp_path):
    target = tmp_path / "pixi.lock"
    target.write_text("lock")
    stamp = datetime(2023, 5, 17, 8, 9, 10).timestamp()
    os.utime(target, (stamp, stamp))
    parsed = datetime.strptime(last_updated(target), "%d-%m-%Y %H:%M:%S")
    assert parsed == datetime.fromtimestamp(stamp).replace(microsecond=0)


def test_last_updated_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        last_updated(tmp_path / "nope")