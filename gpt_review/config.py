#!/usr/bin/env python3

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from gpt_review.path_filter import parse_exclude_patterns

DEFAULT_MODEL = "gpt-4"
DEFAULT_API_VERSION = "2024-10-21"
DEFAULT_GITHUB_API_URL = "https://api.github.com"


class ConfigError(ValueError):
    """Raised when a required input is missing from the environment."""


@dataclass(frozen=True)
class Config:
    """Run configuration, read once at startup."""
    github_token: str
    openai_api_key: str
    openai_endpoint: str
    event_path: str
    openai_model: str = DEFAULT_MODEL
    openai_api_version: str = DEFAULT_API_VERSION
    exclude_patterns: Tuple[str, ...] = ()
    github_api_url: str = DEFAULT_GITHUB_API_URL
    event_name: str = ""

    def __repr__(self) -> str:
        return (
            f"Config(openai_endpoint={self.openai_endpoint!r}, "
            f"openai_model={self.openai_model!r}, "
            f"openai_api_version={self.openai_api_version!r}, "
            f"exclude_patterns={self.exclude_patterns!r}, "
            f"github_api_url={self.github_api_url!r}, "
            f"event_path={self.event_path!r}, "
            f"event_name={self.event_name!r}, "
            "github_token='***', openai_api_key='***')"
        )


def _first(environ: Mapping[str, str], *names: str) -> str:
    """Returns the first non-blank value among the given variables."""
    for name in names:
        value = environ.get(name, "")
        if value and value.strip():
            return value.strip()
    return ""


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Loads configuration from action inputs and environment variables.

    Action inputs (INPUT_*) take precedence over the plain variable names
    so the bot can run both as a GitHub Action and from a shell.

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Config populated from the environment

    Raises:
        ConfigError: If any required value is missing
    """
    if environ is None:
        environ = os.environ

    required = {
        "github_token": ("INPUT_OCTOKIT_TOKEN", "GITHUB_TOKEN"),
        "openai_api_key": ("INPUT_OPENAI_API_KEY", "AZURE_OPENAI_KEY"),
        "openai_endpoint": ("INPUT_OPEN_API_ENDPOINT", "AZURE_OPENAI_ENDPOINT"),
        "event_path": ("GITHUB_EVENT_PATH",),
    }
    values = {key: _first(environ, *names) for key, names in required.items()}

    missing = [" or ".join(required[key]) for key, value in values.items() if not value]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return Config(
        github_token=values["github_token"],
        openai_api_key=values["openai_api_key"],
        openai_endpoint=values["openai_endpoint"].rstrip("/"),
        event_path=values["event_path"],
        openai_model=_first(environ, "INPUT_OPENAI_API_MODEL", "AZURE_OPENAI_DEPLOYMENT") or DEFAULT_MODEL,
        openai_api_version=_first(environ, "AZURE_OPENAI_API_VERSION") or DEFAULT_API_VERSION,
        exclude_patterns=tuple(parse_exclude_patterns(environ.get("INPUT_EXCLUDE", ""))),
        github_api_url=(_first(environ, "GITHUB_API_URL") or DEFAULT_GITHUB_API_URL).rstrip("/"),
        event_name=environ.get("GITHUB_EVENT_NAME", ""),
    )
