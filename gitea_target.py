#!/usr/bin/env python3
"""Gitea API wrapper for requesting mirror migrations."""

from __future__ import annotations

from typing import Any, Optional

import requests

from config import Config
from github_source import REQUEST_TIMEOUT_S
from logging_utils import Logger
from models import (GiteaRepo, GitHubRepo, MigrateRepoOptions,
                    MigrationOutcome, MigrationStatus)
from security import SecurityValidator
from utils import close_response

MIGRATE_SERVICE = "github"

# Status-specific diagnostics, checked before the returned id
STATUS_OUTCOMES = {
    403: (MigrationStatus.FORBIDDEN, "Forbidden"),
    409: (MigrationStatus.CONFLICT, "Repository with this name already exists"),
    422: (MigrationStatus.INVALID_INPUT, "Wrong input?"),
}


def classify_response(status_code: int, result: GiteaRepo) -> MigrationOutcome:
    """Map a decoded migrate response to an outcome.

    Known rejection statuses win over the body; otherwise an id of 0 means
    the repository was not created, whatever the status says.
    """
    if status_code in STATUS_OUTCOMES:
        status, message = STATUS_OUTCOMES[status_code]
        return MigrationOutcome(status=status, message=message)

    if result.id == 0:
        return MigrationOutcome(
            status=MigrationStatus.FAILED, message="Repository creation failed"
        )

    return MigrationOutcome(
        status=MigrationStatus.CREATED,
        message=f"Repository created: {result.html_url}",
        html_url=result.html_url,
    )


class GiteaTarget:
    """Wrapper around the Gitea migrate endpoint."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _get_api_headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.gitea_token}",
        }

    def migrate_url(self) -> str:
        return f"https://{self.config.gitea_instance}/api/v1/repos/migrate"

    def build_migration_request(self, repo: GitHubRepo) -> MigrateRepoOptions:
        """Build the mirror request for a GitHub repository.

        The GitHub token is only handed to Gitea when the source is private.
        """
        auth_token = self.config.github_token if repo.private else ""
        options = MigrateRepoOptions(
            auth_token=auth_token,
            clone_addr=repo.clone_url,
            description=repo.description,
            mirror=True,
            private=repo.private,
            repo_name=repo.name,
            repo_owner=self.config.gitea_owner,
            service=MIGRATE_SERVICE,
            wiki=True,
        )
        Logger.debug(
            f"migrate request: {options.clone_addr} -> "
            f"{options.repo_owner}/{options.repo_name} "
            f"(private={options.private}, "
            f"auth={SecurityValidator.mask_secret(options.auth_token)})"
        )
        return options

    def migrate_repo(self, repo: GitHubRepo) -> Optional[MigrationOutcome]:
        """Ask Gitea to mirror repo.

        Returns None when the request could not be sent or the response body
        could not be decoded; the reason has already been logged.
        """
        options = self.build_migration_request(repo)

        Logger.info("Creating Gitea repository...")
        try:
            response = self.session.post(
                self.migrate_url(),
                json=options.to_json(),
                headers=self._get_api_headers(),
                timeout=REQUEST_TIMEOUT_S,
            )
        except requests.RequestException as e:
            Logger.error(f"failed to contact gitea api: {e}")
            return None

        try:
            try:
                payload = response.json()
                result = GiteaRepo.from_json(payload)
            except ValueError as e:
                Logger.error(f"failed to decode gitea response: {e}")
                return None

            outcome = classify_response(response.status_code, result)
            if not outcome.succeeded:
                self._log_gitea_message(response.status_code, payload)
            return outcome
        finally:
            close_response(response)

    @staticmethod
    def _log_gitea_message(status_code: int, payload: Any) -> None:
        message = payload.get("message") if isinstance(payload, dict) else None
        if message:
            Logger.debug(f"gitea status {status_code}: {message}")
