"""Storing credentials for channel hosts."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union
from urllib.parse import urlparse


class AuthError(Exception):
    """Raised when credentials cannot be built, stored or removed."""


@dataclass(frozen=True)
class BearerToken:
    """A token sent as ``Authorization: Bearer``."""

    token: str


@dataclass(frozen=True)
class BasicHTTP:
    """A username and password for basic HTTP authentication."""

    username: str
    password: str


@dataclass(frozen=True)
class CondaToken:
    """A token placed in the URL path, as anaconda.org and quetz expect."""

    token: str


Authentication = Union[BearerToken, BasicHTTP, CondaToken]


def _encode(auth: Authentication) -> dict:
    if isinstance(auth, BearerToken):
        return {"BearerToken": auth.token}
    if isinstance(auth, CondaToken):
        return {"CondaToken": auth.token}
    if isinstance(auth, BasicHTTP):
        return {"BasicHTTP": {"username": auth.username, "password": auth.password}}
    raise AuthError(f"unknown authentication type: {type(auth).__name__}")


def _decode(data: dict) -> Authentication:
    if "BearerToken" in data:
        return BearerToken(data["BearerToken"])
    if "CondaToken" in data:
        return CondaToken(data["CondaToken"])
    if "BasicHTTP" in data:
        basic = data["BasicHTTP"]
        return BasicHTTP(basic["username"], basic["password"])
    raise AuthError("unknown authentication entry in storage")


class FileAuthStorage:
    """Credentials kept in a JSON file, keyed by host."""

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = (
            Path(path)
            if path is not None
            else Path.home() / ".rattler" / "credentials.json"
        )

    def _read(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise AuthError(str(exc)) from exc
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            raise AuthError(f"invalid credentials file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise AuthError(f"invalid credentials file {self.path}")
        return data

    def _write(self, data: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            raise AuthError(str(exc)) from exc

    def store(self, host: str, auth: Authentication) -> None:
        """Save the credentials for ``host``, replacing any earlier ones."""
        data = self._read()
        data[host] = _encode(auth)
        self._write(data)

    def get(self, host: str) -> Authentication | None:
        """Return the credentials for ``host`` or None."""
        entry = self._read().get(host)
        return _decode(entry) if entry is not None else None

    def delete(self, host: str) -> None:
        """Remove the credentials for ``host`` if there are any."""
        data = self._read()
        if data.pop(host, None) is not None:
            self._write(data)


def get_url(url: str) -> str:
    """Return the host to store credentials under.

    A URL is reduced to its host; a host with a single dot becomes a
    wildcard over its subdomains.
    """
    if "://" in url:
        try:
            host = urlparse(url).hostname
        except ValueError as exc:
            raise AuthError(f"invalid url '{url}': {exc}") from exc
        if not host:
            raise AuthError(f"no host in url '{url}'")
    else:
        host = url
    if host.count(".") == 1:
        host = f"*.{host}"
    return host


def build_authentication(
    token: str | None = None,
    username: str | None = None,
    password: str | None = None,
    conda_token: str | None = None,
) -> Authentication:
    """Pick the authentication method from the given options."""
    if conda_token is not None:
        return CondaToken(conda_token)
    if username is not None:
        if password is None:
            raise AuthError("Password must be provided when using basic authentication")
        return BasicHTTP(username, password)
    if token is not None:
        return BearerToken(token)
    raise AuthError("No authentication method provided")


def login(
    host: str,
    storage: FileAuthStorage,
    token: str | None = None,
    username: str | None = None,
    password: str | None = None,
    conda_token: str | None = None,
) -> str:
    """Store credentials for a host and return the host they were stored under."""
    host = get_url(host)
    print(f"Authenticating with {host}")

    auth = build_authentication(token, username, password, conda_token)

    if "prefix.dev" in host and not isinstance(auth, BearerToken):
        raise AuthError(
            "Authentication with prefix.dev requires a token. Use `--token` to provide one."
        )
    if "anaconda.org" in host and not isinstance(auth, CondaToken):
        raise AuthError(
            "Authentication with anaconda.org requires a conda token. "
            "Use `--conda-token` to provide one."
        )

    storage.store(host, auth)
    return host


def logout(host: str, storage: FileAuthStorage) -> str:
    """Remove the credentials for a host and return the host they were under."""
    host = get_url(host)
    print(f"Removing authentication for {host}")
    storage.delete(host)
    return host