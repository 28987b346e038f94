"""Tests for the CocoaPods Specs shard prefix."""

import hashlib
import re

import pytest

from registry.cocoapods.prefix import get_prefix


class TestGetPrefix:
    """Test get_prefix function."""

    def test_known_digest_alamofire(self):
        """Alamofire hashes to da208d9cbd49253cc75271c6c269ebce."""
        assert hashlib.md5(b"Alamofire").hexdigest() == "da208d9cbd49253cc75271c6c269ebce"
        assert get_prefix("Alamofire") == "d/a/2"

    def test_known_digest_afnetworking(self):
        """AFNetworking hashes to a75d452377f3996bdc4b623a5df25820."""
        assert get_prefix("AFNetworking") == "a/7/5"

    @pytest.mark.parametrize("name", ["Alamofire", "SDWebImage", "a", "Pod-With.Dots_and_underscores"])
    def test_shape(self, name):
        """Prefix is three lowercase hex characters separated by two slashes."""
        prefix = get_prefix(name)

        assert prefix.count("/") == 2
        assert re.fullmatch(r"[0-9a-f]/[0-9a-f]/[0-9a-f]", prefix)

    def test_deterministic(self):
        """Repeated calls agree."""
        assert get_prefix("SDWebImage") == get_prefix("SDWebImage") == "1/1/7"

    def test_utf8_encoding(self):
        """Non-ASCII names are hashed as UTF-8 bytes."""
        expected = hashlib.md5("Ünicode".encode("utf-8")).hexdigest()

        assert get_prefix("Ünicode") == "/".join(expected[:3])
