#!/usr/bin/env python3
"""GitHub REST wrapper for reading source repository metadata."""

from __future__ import annotations

from typing import Optional

import requests

from logging_utils import Logger
from models import GitHubRepo
from utils import close_response

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
REQUEST_TIMEOUT_S = 30


class GitHubSource:
    """Fetches a single repository descriptor from the GitHub API."""

    def __init__(
        self,
        token: str,
        session: Optional[requests.Session] = None,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()

    def _get_api_headers(self) -> dict:
        """Get standard API headers for GitHub requests."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def repo_url(self, owner: str, name: str) -> str:
        return f"{self.api_url}/repos/{owner}/{name}"

    def fetch_repo(self, owner: str, name: str) -> Optional[GitHubRepo]:
        """Return the repository descriptor, or None after logging why not.

        Transport errors, undecodable bodies and non-2xx statuses all end
        the attempt; nothing is retried.
        """
        Logger.info("Getting GitHub repo info...")
        try:
            response = self.session.get(
                self.repo_url(owner, name),
                headers=self._get_api_headers(),
                timeout=REQUEST_TIMEOUT_S,
            )
        except requests.RequestException as e:
            Logger.error(f"failed to contact github api: {e}")
            return None

        try:
            try:
                payload = response.json()
            except ValueError as e:
                Logger.error(f"failed to decode github response: {e}")
                return None

            if not 200 <= response.status_code < 300:
                detail = payload.get("message") if isinstance(payload, dict) else None
                Logger.error(
                    f"github returned status {response.status_code} for "
                    f"{owner}/{name}" + (f": {detail}" if detail else "")
                )
                return None

            try:
                repo = GitHubRepo.from_json(payload)
            except ValueError as e:
                Logger.error(f"failed to decode github response: {e}")
                return None
        finally:
            close_response(response)

        Logger.info(f"Got repo: {repo.name}")
        return repo
