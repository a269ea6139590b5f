#!/usr/bin/env python3
"""
teamigrate - Mirror GitHub repositories into a Gitea instance, one at a time.

Paste a GitHub repository URL at the prompt; the repository metadata is read
from the GitHub API and Gitea is asked to create a mirror of it (wiki
included). Settings come from GITEA_INSTANCE, GITHUB_TOKEN, GITEA_TOKEN and
GITEA_OWNER, optionally loaded from a local .env file.
"""

from __future__ import annotations

import sys
from typing import NoReturn

from config import load_config, load_env_file
from migration_loop import MigrationLoop


def main() -> NoReturn:
    load_env_file()
    cfg = load_config()
    loop = MigrationLoop(cfg)
    loop.print_banner()
    sys.exit(loop.run())


if __name__ == "__main__":
    main()
