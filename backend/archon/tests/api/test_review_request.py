import pytest
from pydantic import ValidationError

from archon.models import ARCHITECTURE_TEXT_MAX_CHARS, ReviewRequest


def test_minimal_request():
    request = ReviewRequest.model_validate({"architectureText": "Some architecture description"})

    assert request.architecture_text == "Some architecture description"
    assert request.repo_url is None
    assert request.model is None


def test_empty_architecture_text_is_rejected():
    with pytest.raises(ValidationError):
        ReviewRequest.model_validate({"architectureText": ""})


def test_missing_architecture_text_is_rejected():
    with pytest.raises(ValidationError):
        ReviewRequest.model_validate({})


def test_architecture_text_length_limits():
    at_limit = ReviewRequest.model_validate({"architectureText": "a" * ARCHITECTURE_TEXT_MAX_CHARS})
    assert len(at_limit.architecture_text) == 100_000

    with pytest.raises(ValidationError):
        ReviewRequest.model_validate({"architectureText": "a" * (ARCHITECTURE_TEXT_MAX_CHARS + 1)})


def test_empty_optional_fields_normalize_to_absent():
    request = ReviewRequest.model_validate({"architectureText": "x", "repoUrl": "", "model": ""})

    assert request.repo_url is None
    assert request.model is None


def test_valid_repo_url_and_model_are_kept():
    request = ReviewRequest.model_validate({
        "architectureText": "x",
        "repoUrl": "https://github.com/user/repo",
        "model": "llama-3.1-8b-instant",
    })

    assert str(request.repo_url).startswith("https://github.com/user/repo")
    assert request.model == "llama-3.1-8b-instant"


def test_invalid_repo_url_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        ReviewRequest.model_validate({"architectureText": "x", "repoUrl": "not-a-url"})

    assert exc_info.value.errors()[0]["loc"] == ("repoUrl",)


@pytest.mark.parametrize(
    "repo_url",
    ["git://github.com/user/repo.git", "ssh://git@github.com/user/repo.git"],
)
def test_non_http_repo_urls_are_accepted(repo_url):
    request = ReviewRequest.model_validate({"architectureText": "x", "repoUrl": repo_url})

    assert str(request.repo_url) == repo_url
