"""Tests for src.promotion.divergence: classification, bucket totals, and error isolation.

Run with coverage:
    pytest tests/test_divergence.py --maxfail=1 -v --cov=src.promotion.divergence --cov-report=term-missing
"""

import datetime as dt
from unittest.mock import MagicMock, patch

import pytest

from src.promotion import divergence
from src.retrieval.http_client import GitHubAPIError, GitHubClient
from src.retrieval.models import ComparisonResult, Repository


def _repo(name, default_branch="master", html_url=None):
    return Repository(
        owner="acme",
        name=name,
        default_branch=default_branch,
        updated_at=dt.datetime(2024, 6, 1, tzinfo=dt.timezone.utc),
        html_url=html_url or f"https://github.com/acme/{name}",
    )


def test_pull_request_url_format():
    assert (
        divergence.pull_request_url("https://git.example/org/repo", "master", "staging")
        == "https://git.example/org/repo/compare/master...staging"
    )


def test_comparison_target_binds_current_repository():
    target = divergence.ComparisonTarget.for_repository(_repo("api", default_branch="staging"))
    assert (target.owner, target.repo, target.base, target.head) == ("acme", "api", "main", "staging")
    assert target.pull_request_url == "https://github.com/acme/api/compare/main...staging"


@patch("src.promotion.divergence.compare_branches", return_value=ComparisonResult(ahead_by=3))
def test_classify_ahead_needs_change(mock_compare):
    client = MagicMock()
    outcome = divergence.classify(client, _repo("api"))
    assert outcome.bucket == divergence.NEED_CHANGE
    assert "acme/api" in outcome.message
    assert "Changes in staging that are not in master" in outcome.message
    assert "Create Pull Request: https://github.com/acme/api/compare/master...staging" in outcome.message
    mock_compare.assert_called_once_with(client, "acme", "api", "master", "staging")


@patch("src.promotion.divergence.compare_branches", return_value=ComparisonResult(ahead_by=0))
def test_classify_even_has_no_change(mock_compare):
    outcome = divergence.classify(MagicMock(), _repo("web", default_branch="main"))
    assert outcome.bucket == divergence.NO_CHANGE
    assert outcome.message == "\nacme/web:\n  No changes in staging that are not in main"


@patch("src.promotion.divergence.compare_branches", side_effect=GitHubAPIError(404, "url", "Not Found"))
def test_classify_failure_names_the_failing_repository(mock_compare, capsys):
    outcome = divergence.classify(MagicMock(), _repo("ghost", default_branch="main"))
    assert outcome.bucket == divergence.ERRORS
    assert outcome.message.startswith("\nacme/ghost:")
    assert "Error comparing staging and main." in outcome.message
    assert "Maybe the main or staging branch doesn't exist" in outcome.message
    assert "acme/ghost" in capsys.readouterr().err


@patch("src.promotion.divergence.compare_branches")
def test_check_repositories_classifies_every_repository(mock_compare):
    results = {
        "a": ComparisonResult(ahead_by=1),
        "b": ComparisonResult(ahead_by=0),
        "c": GitHubAPIError(404, "url", "Not Found"),
        "d": ComparisonResult(ahead_by=7),
        "e": RuntimeError("connection reset"),
        "f": ComparisonResult(ahead_by=0),
    }

    def fake_compare(client, owner, repo, base, head):
        value = results[repo]
        if isinstance(value, Exception):
            raise value
        return value

    mock_compare.side_effect = fake_compare
    repos = [_repo(name) for name in results]

    buckets = divergence.check_repositories(MagicMock(), repos)

    assert len(buckets) == len(repos)
    assert len(buckets.need_change) == 2
    assert len(buckets.no_change) == 2
    assert len(buckets.errors) == 2
    assert [msg.split(":")[0].strip() for msg in buckets.need_change] == ["acme/a", "acme/d"]
    assert [msg.split(":")[0].strip() for msg in buckets.errors] == ["acme/c", "acme/e"]


@patch("src.promotion.divergence.compare_branches")
def test_first_failure_does_not_stop_later_repositories(mock_compare):
    mock_compare.side_effect = [RuntimeError("boom"), ComparisonResult(ahead_by=2), ComparisonResult(ahead_by=0)]
    buckets = divergence.check_repositories(MagicMock(), [_repo("x"), _repo("y"), _repo("z")])
    assert mock_compare.call_count == 3
    assert "acme/x" in buckets.errors[0]
    assert "acme/y" in buckets.need_change[0]
    assert "acme/z" in buckets.no_change[0]


@patch("src.promotion.divergence.compare_branches", return_value=ComparisonResult(ahead_by=1))
def test_check_repositories_uses_configured_head(mock_compare):
    buckets = divergence.check_repositories(MagicMock(), [_repo("api")], head="release")
    assert mock_compare.call_args.args[-1] == "release"
    assert "compare/master...release" in buckets.need_change[0]


def test_buckets_reject_unknown_outcome():
    target = divergence.ComparisonTarget.for_repository(_repo("api"))
    with pytest.raises(ValueError):
        divergence.PromotionBuckets().add(divergence.Outcome("other", "msg", target))


def _compare_reply(status, payload):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    resp.links = {}
    return resp


def test_classify_reply_without_ahead_by_is_an_error():
    client = MagicMock()
    client.get.return_value = _compare_reply(200, {"message": "unexpected"})
    outcome = divergence.classify(client, _repo("odd"))
    assert outcome.bucket == divergence.ERRORS
    assert outcome.message.startswith("\nacme/odd:")

    client.get.return_value = _compare_reply(200, {"ahead_by": None})
    assert divergence.classify(client, _repo("odd")).bucket == divergence.ERRORS


@patch("src.retrieval.http_client.requests.Session")
def test_failed_compare_logs_a_single_warning(mock_session, capsys):
    session = MagicMock()
    session.headers = {}
    mock_session.return_value = session
    session.request.return_value = _compare_reply(404, {"message": "Not Found"})

    outcome = divergence.classify(GitHubClient("https://api.github.com"), _repo("ghost"))

    assert outcome.bucket == divergence.ERRORS
    err_lines = [line for line in capsys.readouterr().err.splitlines() if not line.startswith("[info]")]
    assert len(err_lines) == 1
    assert err_lines[0].startswith("[warn] acme/ghost: HTTP 404")


def test_errors_message_text():
    target = divergence.ComparisonTarget.for_repository(_repo("api", default_branch="main"))
    assert divergence.errors_message(target) == (
        "\nacme/api:\n  Error comparing staging and main.\n  Maybe the main or staging branch doesn't exist"
    )
