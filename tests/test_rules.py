"""
Tests for upload validation, career list editing and data URLs.
"""

from __future__ import annotations

import random

import pytest

from career_reimagined.application.exceptions import UploadRejectedError
from career_reimagined.application.utils.career_rules import add_career, remove_career, surprise_careers
from career_reimagined.application.utils.data_url import parse_data_url, to_data_url
from career_reimagined.application.utils.upload_rules import validate_upload
from career_reimagined.domain.entities.career_catalog import SUGGESTED_CAREERS, is_human_subject
from career_reimagined.domain.entities.photo import UploadedPhoto


@pytest.mark.parametrize("mime", ["image/jpeg", "image/png", "image/webp", "IMAGE/PNG"])
def test_accepted_encodings(mime):
    validate_upload(UploadedPhoto(data=b"x" * 10, mime_type=mime))


@pytest.mark.parametrize("mime", ["image/gif", "application/pdf", ""])
def test_rejected_encodings(mime):
    with pytest.raises(UploadRejectedError, match="valid image"):
        validate_upload(UploadedPhoto(data=b"x", mime_type=mime))


def test_size_limit_is_inclusive():
    validate_upload(UploadedPhoto(data=b"x" * 100, mime_type="image/png"), max_bytes=100)
    with pytest.raises(UploadRejectedError, match="under 5MB"):
        validate_upload(UploadedPhoto(data=b"x" * 101, mime_type="image/png"), max_bytes=100)


def test_add_career_trims_and_ignores_blank():
    assert add_career([], "  Chef ") == ["Chef"]
    assert add_career(["Chef"], "   ") == ["Chef"]


def test_add_career_is_case_sensitive():
    assert add_career(["ceo"], "CEO") == ["ceo", "CEO"]


def test_add_career_does_not_mutate_input():
    careers = ["Chef"]
    add_career(careers, "Pilot")
    assert careers == ["Chef"]


def test_remove_unknown_career_is_noop():
    assert remove_career(["Chef"], "Pilot") == ["Chef"]


def test_surprise_replaces_with_three_from_pool():
    picks = surprise_careers(random.Random(1))
    assert len(picks) == 3
    assert len(set(picks)) == 3
    assert all(p in SUGGESTED_CAREERS for p in picks)


def test_human_discriminator():
    assert is_human_subject("Human")
    assert is_human_subject(None)
    assert not is_human_subject("Pug")


def test_data_url_round_trip_and_rejection():
    mime, data = parse_data_url(to_data_url(b"\x89PNG", "image/png"))
    assert (mime, data) == ("image/png", b"\x89PNG")
    with pytest.raises(ValueError):
        parse_data_url("https://example.com/cat.png")
    with pytest.raises(ValueError):
        parse_data_url("data:image/png;base64,***")
