"""
Connection settings for the command line client
"""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional
from urllib.parse import unquote, urlparse

from dotenv import dotenv_values

from ..exceptions import ConfigurationError


URL_ALIASES = ["VLCM_URL", "GOVC_URL", "VCENTER_URL"]
USER_ALIASES = ["VLCM_USERNAME", "GOVC_USERNAME", "VCENTER_USER"]
PASSWORD_ALIASES = ["VLCM_PASSWORD", "GOVC_PASSWORD", "VCENTER_PASSWORD"]
INSECURE_ALIASES = ["VLCM_INSECURE", "GOVC_INSECURE"]
SESSION_ALIASES = ["VLCM_SESSION_ID"]


@dataclass
class Config:
    url: str
    username: Optional[str]
    password: Optional[str]
    session_id: Optional[str]
    insecure: bool
    env_file_used: Optional[str]


def _env_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def add_client_flags(parser: argparse.ArgumentParser) -> None:
    """Register the connection flags shared by every command"""
    group = parser.add_argument_group("connection")
    group.add_argument("-u", "--url", help="vCenter URL [VLCM_URL, GOVC_URL]")
    group.add_argument("-username", "--username", help="User name [VLCM_USERNAME, GOVC_USERNAME]")
    group.add_argument("-password", "--password", help="Password [VLCM_PASSWORD, GOVC_PASSWORD]")
    group.add_argument("-session-id", "--session-id", dest="session_id",
                       help="Existing vAPI session id [VLCM_SESSION_ID]")
    group.add_argument("-k", "--insecure", action="store_true", default=None,
                       help="Skip TLS certificate verification [VLCM_INSECURE, GOVC_INSECURE]")
    group.add_argument("-env-file", "--env-file", dest="env_file",
                       help="Read connection settings from a .env file")
    group.add_argument("-debug", "--debug", action="store_true", help="Debug logging")


def _read_env_file(env_file: Optional[str]) -> Dict[str, str]:
    if not env_file:
        return {}
    path = Path(env_file)
    if not path.is_file():
        raise ConfigurationError(f".env file not found: {path}")
    values = dotenv_values(path)
    return {key: str(value).strip() for key, value in values.items() if value is not None}


def _resolve_alias_value(aliases: List[str], environ: Mapping[str, str],
                         env_values: Dict[str, str]) -> Optional[str]:
    # Process environment wins over the .env file
    for source in (environ, env_values):
        for key in aliases:
            value = source.get(key)
            if value and value.strip():
                return value.strip()
    return None


def _split_url(url: str):
    """Normalize the URL and pull out embedded credentials"""
    if "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    if not parsed.hostname:
        raise ConfigurationError(f"Invalid vCenter URL: {url}")

    username = unquote(parsed.username) if parsed.username else None
    password = unquote(parsed.password) if parsed.password else None

    netloc = parsed.hostname
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return f"{parsed.scheme}://{netloc}", username, password


def load_config(args: argparse.Namespace,
                environ: Optional[Mapping[str, str]] = None) -> Config:
    """Resolve connection settings: flags, then environment, then .env file"""
    environ = os.environ if environ is None else environ
    env_values = _read_env_file(getattr(args, "env_file", None))

    raw_url = (args.url or "").strip() or _resolve_alias_value(URL_ALIASES, environ, env_values)
    if not raw_url:
        raise ConfigurationError("Missing vCenter URL: use --url or set VLCM_URL/GOVC_URL")

    url, url_user, url_password = _split_url(raw_url)

    username = ((args.username or "").strip() or url_user
                or _resolve_alias_value(USER_ALIASES, environ, env_values))
    password = (args.password or url_password
                or _resolve_alias_value(PASSWORD_ALIASES, environ, env_values))
    session_id = ((args.session_id or "").strip()
                  or _resolve_alias_value(SESSION_ALIASES, environ, env_values))

    if args.insecure:
        insecure = True
    else:
        insecure = _env_bool(_resolve_alias_value(INSECURE_ALIASES, environ, env_values))

    if not session_id and not (username and password):
        raise ConfigurationError(
            "Missing credentials: provide --session-id, or --username and --password")

    return Config(
        url=url,
        username=username or None,
        password=password or None,
        session_id=session_id or None,
        insecure=insecure,
        env_file_used=getattr(args, "env_file", None) or None,
    )
