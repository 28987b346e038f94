"""Tests for version ordering."""

from versioning.sort import parse_version, sort_versions


class TestParseVersion:
    """Test parse_version function."""

    def test_partial_versions_are_coerced(self):
        assert str(parse_version("5.2")) == "5.2.0"

    def test_leading_v(self):
        assert str(parse_version("v1.0.0")) == "1.0.0"

    def test_prerelease(self):
        assert parse_version("1.0.0-beta.1").prerelease == ("beta", "1")

    def test_unreadable(self):
        assert parse_version("latest") is None
        assert parse_version("") is None


class TestSortVersions:
    """Test sort_versions function."""

    def test_numeric_order(self):
        assert sort_versions(["10.0.0", "2.0.0", "1.0.0"]) == ["1.0.0", "2.0.0", "10.0.0"]

    def test_prerelease_before_release(self):
        assert sort_versions(["1.0.0", "1.0.0-rc.1", "0.9"]) == ["0.9", "1.0.0-rc.1", "1.0.0"]

    def test_reverse(self):
        assert sort_versions(["1.0.0", "2.0.0"], reverse=True) == ["2.0.0", "1.0.0"]

    def test_unreadable_labels_first(self):
        assert sort_versions(["1.0.0", "beta", "alpha"]) == ["alpha", "beta", "1.0.0"]

    def test_accepts_any_iterable(self):
        assert sort_versions({"2.0.0", "1.0.0"}) == ["1.0.0", "2.0.0"]

    def test_four_part_versions(self):
        """A fourth release component takes part in the ordering."""
        labels = ["1.0.0.10", "1.0.0.2", "1.0.0.1", "1.0.1", "1.0.0"]

        assert sort_versions(labels) == ["1.0.0", "1.0.0.1", "1.0.0.2", "1.0.0.10", "1.0.1"]

    def test_numeric_prerelease_identifiers(self):
        assert sort_versions(["1.0.0-beta.10", "1.0.0-beta.2", "1.0.0-alpha"]) == [
            "1.0.0-alpha", "1.0.0-beta.2", "1.0.0-beta.10",
        ]
