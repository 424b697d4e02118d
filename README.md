# pixikit

A pure-Python library of building blocks for conda-style package projects
described by a `pixi.toml` manifest. It has no third-party dependencies.

## Installation

```
pip install pixikit
```

## Modules

### `pixikit.versions`

`Version` parses conda versions such as `1.2.0`, `1!2.0` or `1.0a1+local`.
Versions compare, hash and print the conda way. `Version.pop_segments(count)`
drops trailing segments. `Version.bump_last()` increments the number in the
last segment.

`determine_version_constraint(versions)` returns a `>=low,<high` constraint
that covers every given version. It returns `None` when there are no versions.

```python
from pixikit.versions import Version, determine_version_constraint

determine_version_constraint([Version("1.2.0")])                  # '>=1.2.0,<1.3'
determine_version_constraint([Version("1.2.0"), Version("1.3.0")])  # '>=1.2.0,<1.4'
```

### `pixikit.auth`

Credentials for channel hosts come in three kinds: `BearerToken`,
`BasicHTTP` and `CondaToken`. They are kept by `FileAuthStorage`, a JSON file
keyed by host. Its default location is `~/.rattler/credentials.json`. It has
the methods `store`, `get` and `delete`.

- `get_url(url)` reduces a URL to its host. A host with exactly one dot becomes
  the wildcard `*.host`.
- `build_authentication(token, username, password, conda_token)` picks the
  method. A conda token comes first, then username and password, then a
  bearer token.
- `login(...)` stores credentials for a host and prints what it does. Hosts
  containing `prefix.dev` require a bearer token, and hosts containing
  `anaconda.org` require a conda token.
- `logout(...)` removes the credentials for a host.

Every failure raises `AuthError`.

```python
from pixikit.auth import FileAuthStorage, login, logout

storage = FileAuthStorage("credentials.json")
login("repo.example.com", storage, token="token")
storage.get("repo.example.com")   # BearerToken(token='token')
logout("repo.example.com", storage)
```

### `pixikit.listing`

`PackageToOutput` describes one locked package. The module provides these
functions:

- `filter_packages(packages, pattern)` keeps packages whose name matches a
  regular expression. An invalid pattern raises `ValueError`.
- `sort_packages(packages, sort_by)` orders packages by `SortBy.SIZE`,
  `SortBy.NAME` or `SortBy.TYPE`.
- `packages_to_json(packages, pretty)` returns the packages as compact or
  indented JSON.
- `format_table(packages)` returns an aligned text table.
- `human_bytes(size)` formats a byte count with binary units, such as
  `1.5 KiB`.

### `pixikit.info`

`Info`, `ProjectInfo` and `EnvironmentInfo` hold a report about the machine,
the project and its environments. `render()` returns the text form, and
`Info.to_json()` returns pretty-printed JSON. `dir_size(path)` gives the size
of a directory tree in whole MiB. `last_updated(path)` gives a file's local
modification time as `DD-MM-YYYY HH:MM:SS`.

### `pixikit.global_bin`

This module holds the locations and launcher names for globally installed
packages. The home directory is `PIXI_HOME`, or `~/.pixi` when that is not
set. Launchers go in `bin/` under it, and environments go in `envs/`.

- `home_path()`, `bin_dir()`, `bin_env_dir()` and `package_bin_env_dir(name)`
  return these directories.
- `is_executable(prefix, relative_path)` and `find_executables(prefix, files)`
  pick the executables that sit in a binary folder of a prefix.
- `map_executables_to_global_bin_scripts(executables, bin_dir)` returns one
  `BinScriptMapping` per executable. The launcher name is the lower-cased file
  name with any known script extension removed. On Windows, `.bat` is added.
- `catch_all_arg(shell)` returns the syntax that forwards all arguments:
  `%*`, `@args` or `"$@"`.
- `is_bin_folder_on_path()` tells whether the launcher directory is on `PATH`.

### `pixikit.consts`

This module holds the names of the project files and directories:
`pixi.toml`, `pixi.lock`, `.pixi`, `envs` and so on.

## What it does not do

pixikit is a library only. It does not provide:

- a command-line program;
- creating a new project;
- shell completion scripts;
- cache-directory lookup;
- self-updating.

It does not solve, download or install packages. It does not write launcher
scripts to disk: it only computes their paths. It does not read `pixi.toml`
or `pixi.lock`. The caller supplies the data that `listing` and `info` work on.