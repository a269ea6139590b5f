"""Tests for GiteaTarget request building and outcome classification."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from config import Config
from gitea_target import GiteaTarget, classify_response
from models import GiteaRepo, GitHubRepo, MigrationStatus


def _make_config() -> Config:
    return Config(
        gitea_instance='gitea.local',
        github_token='gh-token',
        gitea_token='gitea-token',
        gitea_owner='mirrors',
    )


def _response(status_code: int, payload: Any = None, json_error: Exception = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def _make_target(response: MagicMock = None) -> GiteaTarget:
    session = MagicMock()
    session.post.return_value = response
    return GiteaTarget(_make_config(), session=session)


PUBLIC_REPO = GitHubRepo(
    clone_url='https://github.com/acme/widgets.git',
    description='A widget',
    name='widgets',
    private=False,
)


def test_build_migration_request_public_repo_has_no_token() -> None:
    options = _make_target().build_migration_request(PUBLIC_REPO)

    assert options.to_json() == {
        'auth_token': '',
        'clone_addr': 'https://github.com/acme/widgets.git',
        'description': 'A widget',
        'mirror': True,
        'private': False,
        'repo_name': 'widgets',
        'repo_owner': 'mirrors',
        'service': 'github',
        'wiki': True,
    }


def test_build_migration_request_private_repo_forwards_github_token() -> None:
    private_repo = GitHubRepo(
        clone_url='https://github.com/acme/secret.git', name='secret', private=True
    )

    options = _make_target().build_migration_request(private_repo)

    assert options.auth_token == 'gh-token'
    assert options.private is True


def test_migrate_repo_posts_to_migrate_endpoint() -> None:
    target = _make_target(_response(201, {'id': 42, 'html_url': 'https://gitea.local/mirrors/widgets'}))

    target.migrate_repo(PUBLIC_REPO)

    args, kwargs = target.session.post.call_args
    assert args[0] == 'https://gitea.local/api/v1/repos/migrate'
    assert kwargs['headers'] == {
        'Content-Type': 'application/json',
        'Authorization': 'Bearer gitea-token',
    }
    assert kwargs['json']['repo_owner'] == 'mirrors'
    assert kwargs['json']['auth_token'] == ''


@pytest.mark.parametrize(
    'status_code, payload, expected_status, expected_message',
    [
        (403, {'message': 'token does not have scope'}, MigrationStatus.FORBIDDEN, 'Forbidden'),
        (409, {'message': 'exists'}, MigrationStatus.CONFLICT,
         'Repository with this name already exists'),
        (422, {}, MigrationStatus.INVALID_INPUT, 'Wrong input?'),
        (200, {'id': 0}, MigrationStatus.FAILED, 'Repository creation failed'),
        (500, {'message': 'boom'}, MigrationStatus.FAILED, 'Repository creation failed'),
    ],
)
def test_migrate_repo_classifies_failures(
    status_code: int, payload: dict, expected_status: MigrationStatus, expected_message: str
) -> None:
    response = _response(status_code, payload)
    target = _make_target(response)

    outcome = target.migrate_repo(PUBLIC_REPO)

    assert outcome.status == expected_status
    assert outcome.message == expected_message
    assert outcome.html_url is None
    response.close.assert_called_once()


def test_migrate_repo_status_wins_over_identifier() -> None:
    """A rejection status is reported even when the body carries an id."""
    target = _make_target(_response(409, {'id': 7, 'html_url': 'https://gitea.local/x'}))

    assert target.migrate_repo(PUBLIC_REPO).message == 'Repository with this name already exists'


def test_migrate_repo_success_reports_url() -> None:
    target = _make_target(_response(201, {'id': 42, 'html_url': 'https://gitea.example/owner/repo'}))

    outcome = target.migrate_repo(PUBLIC_REPO)

    assert outcome.succeeded
    assert outcome.html_url == 'https://gitea.example/owner/repo'
    assert 'https://gitea.example/owner/repo' in outcome.message


def test_migrate_repo_undecodable_error_body_is_a_decode_failure(capsys) -> None:
    """A non-JSON 403 body is reported as a decode error, not as Forbidden."""
    response = _response(403, json_error=ValueError('Expecting value'))
    target = _make_target(response)

    assert target.migrate_repo(PUBLIC_REPO) is None
    err = capsys.readouterr().err
    assert 'failed to decode gitea response' in err
    assert 'Forbidden' not in err
    response.close.assert_called_once()


def test_migrate_repo_transport_error_returns_none(capsys) -> None:
    target = _make_target()
    target.session.post.side_effect = requests.Timeout('read timed out')

    assert target.migrate_repo(PUBLIC_REPO) is None
    assert 'failed to contact gitea api: read timed out' in capsys.readouterr().err


def test_classify_response_success() -> None:
    outcome = classify_response(201, GiteaRepo(id=1, html_url='https://gitea.local/a/b'))
    assert outcome.status == MigrationStatus.CREATED
    assert outcome.message == 'Repository created: https://gitea.local/a/b'


def test_migrate_repo_null_body_is_classified_by_status() -> None:
    """A JSON null body decodes to an empty result, so the status still decides."""
    response = _response(403, None)
    target = _make_target(response)

    outcome = target.migrate_repo(PUBLIC_REPO)

    assert outcome.status == MigrationStatus.FORBIDDEN
    assert outcome.message == 'Forbidden'
    response.close.assert_called_once()


@pytest.mark.parametrize('bad_id', [{'nested': 1}, [1, 2], 'not-a-number'])
def test_migrate_repo_malformed_id_is_a_decode_failure(bad_id: Any, capsys) -> None:
    response = _response(201, {'id': bad_id, 'html_url': 'https://gitea.local/x'})
    target = _make_target(response)

    assert target.migrate_repo(PUBLIC_REPO) is None
    err = capsys.readouterr().err
    assert 'failed to decode gitea response' in err
    response.close.assert_called_once()


@pytest.mark.parametrize('payload', [['id', 1], 'created', 42])
def test_gitea_repo_rejects_non_object_payload(payload: Any) -> None:
    with pytest.raises(ValueError):
        GiteaRepo.from_json(payload)
