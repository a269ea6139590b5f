#!/usr/bin/env python3
"""Interactive prompt loop that mirrors one GitHub repository per line."""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

import requests

from config import Config
from gitea_target import GiteaTarget
from github_source import GitHubSource
from logging_utils import Logger
from models import MigrationOutcome
from utils import parse_github_url

# Exit codes
EXIT_SUCCESS = 0
EXIT_INTERRUPTED = 130

PROMPT = "\nEnter the GitHub URL: "
BANNER = "- Welcome to teamigrate -"


class MigrationLoop:
    def __init__(
        self,
        cfg: Config,
        session: Optional[requests.Session] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.cfg = cfg
        self.session = session or requests.Session()
        self.gh = GitHubSource(cfg.github_token, session=self.session)
        self.gitea = GiteaTarget(cfg, session=self.session)
        self.stdin = stdin
        self.stdout = stdout
        self._stop = threading.Event()

    @property
    def _in(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    @property
    def _out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def print_banner(self) -> None:
        self._out.write(f"{BANNER}\n")
        self._out.write(f"GITEA_INSTANCE: {self.cfg.gitea_instance}\n")
        self._out.write(f"GITEA_OWNER: {self.cfg.gitea_owner}\n")
        self._out.flush()

    def stop(self) -> None:
        """Ask the loop to return before showing the next prompt."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run(self) -> int:
        """Prompt and migrate until end-of-input, stop() or Ctrl-C."""
        try:
            while not self._stop.is_set():
                line = self._read_line()
                if line is None:
                    Logger.info("end of input, exiting")
                    break
                self._process_line(line)
            return EXIT_SUCCESS
        except KeyboardInterrupt:
            self._out.write("\n")
            Logger.warn("interrupted")
            return EXIT_INTERRUPTED
        finally:
            self.session.close()

    def _read_line(self) -> Optional[str]:
        """Show the prompt and read one line; None once the input is exhausted."""
        self._out.write(PROMPT)
        self._out.flush()
        line = self._in.readline()
        if line == "":
            return None
        return line

    def _process_line(self, line: str) -> None:
        try:
            outcome = self.migrate_line(line)
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return
        if outcome is not None:
            self.report(outcome)

    def migrate_line(self, line: str) -> Optional[MigrationOutcome]:
        """Run one fetch-and-migrate attempt for a line of user input.

        Returns the classified Gitea outcome, or None when the attempt was
        abandoned earlier (bad URL, GitHub failure, Gitea transport or
        decode failure). Those cases are logged where they happen.
        """
        parsed = parse_github_url(line)
        if parsed is None:
            Logger.error("Invalid GitHub URL")
            return None
        owner, name = parsed

        repo = self.gh.fetch_repo(owner, name)
        if repo is None:
            return None

        return self.gitea.migrate_repo(repo)

    @staticmethod
    def report(outcome: MigrationOutcome) -> None:
        if outcome.succeeded:
            Logger.info(outcome.message)
        else:
            Logger.error(outcome.message)
