#!/usr/bin/env python3
"""Configuration loading for teamigrate."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from logging_utils import Logger

# Environment variable names
ENV_GITEA_INSTANCE = "GITEA_INSTANCE"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_GITEA_TOKEN = "GITEA_TOKEN"
ENV_GITEA_OWNER = "GITEA_OWNER"

DEFAULT_ENV_FILE = ".env"

REQUIRED_VARIABLES = (
    ENV_GITEA_INSTANCE,
    ENV_GITHUB_TOKEN,
    ENV_GITEA_TOKEN,
    ENV_GITEA_OWNER,
)


@dataclass(frozen=True)
class Config:
    """Read-only settings shared by the GitHub source and the Gitea target."""
    gitea_instance: str
    github_token: str
    gitea_token: str
    gitea_owner: str


def load_env_file(path: str = DEFAULT_ENV_FILE) -> bool:
    """Pre-populate the environment from a .env file in the working directory.

    Parent directories are not searched. Variables already present in the environment win. A missing file is not
    an error; the return value only tells whether anything was loaded.
    """
    return load_dotenv(dotenv_path=path, override=False)


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config snapshot from the environment.

    Unset variables become empty strings. Nothing is validated here: a bad
    host or token surfaces later as a failed request.
    """
    if environ is None:
        environ = os.environ

    for name in REQUIRED_VARIABLES:
        if not environ.get(name):
            Logger.warn(f"environment variable not set: {name}")

    return Config(
        gitea_instance=environ.get(ENV_GITEA_INSTANCE, ""),
        github_token=environ.get(ENV_GITHUB_TOKEN, ""),
        gitea_token=environ.get(ENV_GITEA_TOKEN, ""),
        gitea_owner=environ.get(ENV_GITEA_OWNER, ""),
    )
