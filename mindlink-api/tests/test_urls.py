"""Tests for URL helpers and Instagram URL classification."""

import pytest

from app.services import instagram
from app.utils.urls import (
    clean_url,
    display_domain,
    get_domain,
)


@pytest.mark.unit
class TestCleanUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://instagram.com/p/ABC", "https://instagram.com/p/ABC"),
            ("https://instagram.com/p/ABC/", "https://instagram.com/p/ABC"),
            ("https://instagram.com/p/ABC/?igsh=1", "https://instagram.com/p/ABC"),
            ("https://instagram.com/p/ABC?a=1?b=2", "https://instagram.com/p/ABC"),
            ("https://instagram.com/p/ABC//", "https://instagram.com/p/ABC/"),
        ],
    )
    def test_clean(self, url, expected):
        assert clean_url(url) == expected


@pytest.mark.unit
class TestUrlHelpers:
    def test_get_domain(self):
        assert get_domain("https://www.python.org/about/") == "www.python.org"
        assert get_domain("not a url") == ""

    def test_display_domain(self):
        assert display_domain("https://www.python.org/about/") == "python.org"
        assert display_domain("https://docs.python.org/") == "docs.python.org"
        assert display_domain("no-host") == "no-host"


@pytest.mark.unit
class TestInstagramHelpers:
    def test_is_instagram_url(self):
        assert instagram.is_instagram_url("https://www.instagram.com/natgeo/")
        assert not instagram.is_instagram_url("https://example.com/instagram.com")

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.instagram.com/reel/C1a2B3/", True),
            ("http://instagram.com/p/C1a2B3", True),
            ("https://www.instagram.com/natgeo/", False),
            ("https://www.instagram.com/reel/", False),
            ("https://example.com/reel/C1a2B3", False),
        ],
    )
    def test_is_instagram_reel_or_post(self, url, expected):
        assert instagram.is_instagram_reel_or_post(url) is expected

    def test_content_type_from_path(self):
        assert instagram.get_content_type("https://instagram.com/reel/XYZ/") == "reel"
        assert instagram.get_content_type("https://instagram.com/p/XYZ/") == "post"
        assert instagram.get_content_type("https://example.com/a/reel/b") == "reel"

    def test_content_type_ignores_query(self):
        assert instagram.get_content_type("https://instagram.com/p/XYZ?from=/reel/") == "post"

    def test_sanitize_username(self):
        assert instagram.sanitize_username("John.Doe_123!") == "john.doe_123"
        assert instagram.sanitize_username("@@@") == ""

    def test_username_from_path(self):
        assert instagram.username_from_path("https://www.instagram.com/reel/XYZ") == "reel"
        assert instagram.username_from_path("https://www.instagram.com") == "instagram"
        assert instagram.username_from_path("https://www.instagram.com/") == "instagram"

    def test_display_title(self):
        assert instagram.display_title("natgeo", "reel") == "Reel by @natgeo"
        assert instagram.display_title("natgeo", "post") == "Post by @natgeo"
