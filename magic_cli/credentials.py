"""
credentials.py

Responsibility: turn a template's remote location into a clone URL.

Credentials are injected (environment variables, optionally named in the
config file) and never appear in source. Anything that might reach a log or
an error message goes through `redact`.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import quote, urlsplit, urlunsplit

DEFAULT_USER_ENV = "MAGIC_CLI_GIT_USER"
DEFAULT_TOKEN_ENV = "MAGIC_CLI_GIT_TOKEN"

REDACTED = "***"

_URL_PASSWORD = re.compile(r"([a-z][a-z0-9+.-]*://[^\s:/@]+):[^\s/@]+@", re.IGNORECASE)


@dataclass(frozen=True)
class GitCredentials:
    username: str
    token: str = field(repr=False)


def credentials_from_env(
    env: Mapping[str, str] | None = None,
    *,
    user_env: str = DEFAULT_USER_ENV,
    token_env: str = DEFAULT_TOKEN_ENV,
) -> GitCredentials | None:
    """
    Read credentials from the environment.

    A token without a user name is accepted; git hosts generally accept any
    user name alongside a personal access token.
    """
    source = os.environ if env is None else env
    token = (source.get(token_env) or "").strip()
    if not token:
        return None
    username = (source.get(user_env) or "").strip() or "oauth2"
    return GitCredentials(username=username, token=token)


def authenticated_url(location: str, credentials: GitCredentials | None = None) -> str:
    """
    Build an HTTPS clone URL from a registry location.

    `location` is either `host/path.git` or a full `https://` URL.
    """
    if "://" not in location:
        location = f"https://{location}"
    if credentials is None:
        return location

    parts = urlsplit(location)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    userinfo = f"{quote(credentials.username, safe='')}:{quote(credentials.token, safe='')}"
    return urlunsplit((parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment))


def redact(text: str, credentials: GitCredentials | None = None) -> str:
    """Strip URL passwords (and the known token, wherever it appears) from `text`."""
    if credentials is not None and credentials.token:
        text = text.replace(quote(credentials.token, safe=""), REDACTED)
        text = text.replace(credentials.token, REDACTED)
    return _URL_PASSWORD.sub(rf"\1:{REDACTED}@", text)
