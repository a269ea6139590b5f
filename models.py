#!/usr/bin/env python3
"""Data carried between the GitHub source and the Gitea target."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    # a JSON null body decodes to an empty object
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{what} response is not a JSON object")
    return data


@dataclass(frozen=True)
class GitHubRepo:
    """Subset of the GitHub repository resource needed for a migration."""
    clone_url: str = ""
    description: str = ""
    name: str = ""
    private: bool = False

    @classmethod
    def from_json(cls, data: Any) -> GitHubRepo:
        """Decode a GitHub repository payload; absent or null fields stay empty."""
        data = _require_object(data, "github")
        return cls(
            clone_url=data.get("clone_url") or "",
            description=data.get("description") or "",
            name=data.get("name") or "",
            private=bool(data.get("private") or False),
        )


@dataclass(frozen=True)
class MigrateRepoOptions:
    """Body of POST /api/v1/repos/migrate."""
    auth_token: str
    clone_addr: str
    description: str
    mirror: bool
    private: bool
    repo_name: str
    repo_owner: str
    service: str
    wiki: bool

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GiteaRepo:
    """Repository returned by Gitea after a migration request."""
    id: int = 0
    html_url: str = ""

    @classmethod
    def from_json(cls, data: Any) -> GiteaRepo:
        data = _require_object(data, "gitea")
        try:
            return cls(
                id=int(data.get("id") or 0),
                html_url=str(data.get("html_url") or ""),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"gitea response has an invalid field: {e}") from e


class MigrationStatus(Enum):
    """Classification of a Gitea migrate response."""
    CREATED = "created"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INVALID_INPUT = "invalid_input"
    FAILED = "failed"


@dataclass(frozen=True)
class MigrationOutcome:
    status: MigrationStatus
    message: str
    html_url: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == MigrationStatus.CREATED
