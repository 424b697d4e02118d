"""Names of files and directories that make up a project."""

PROJECT_MANIFEST = "pixi.toml"
PROJECT_LOCK_FILE = "pixi.lock"
PIXI_DIR = ".pixi"
PREFIX_FILE_NAME = "prefix"
ENVIRONMENTS_DIR = "envs"
PYPI_DEPENDENCIES = "pypi-dependencies"

DEFAULT_ENVIRONMENT_NAME = "default"

DEFAULT_FEATURE_NAME = DEFAULT_ENVIRONMENT_NAME