"""Tests for software identifier construction."""

import pytest
from packageurl import PackageURL

from spm_shield.core.identifiers import (
    GenericIdentifier,
    IdentifierConstructionError,
    PurlIdentifier,
    build_identifier,
    build_package_url,
)
from spm_shield.core.parsers.base import Confidence


class TestBuildIdentifier:
    """Test canonical identifiers with generic fallback."""

    def test_package_url_without_version(self):
        identifier = build_identifier("swift", "Gloss")

        assert isinstance(identifier, PurlIdentifier)
        assert identifier.value == PackageURL(type="swift", name="Gloss").to_string()
        assert identifier.confidence == Confidence.HIGHEST
        assert not identifier.is_fallback

    def test_package_url_with_version(self):
        identifier = build_identifier("swift", "Alamofire", "5.0.0")

        assert isinstance(identifier, PurlIdentifier)
        assert identifier.value == PackageURL(
            type="swift", name="Alamofire", version="5.0.0"
        ).to_string()
        assert identifier.value.endswith("@5.0.0")

    def test_name_with_whitespace_falls_back(self):
        identifier = build_identifier("swift", "My Package")

        assert identifier == GenericIdentifier("swift:My Package", Confidence.HIGHEST)
        assert identifier.is_fallback

    def test_fallback_includes_version(self):
        identifier = build_identifier("swift", "My Package", "1.0")
        assert identifier.value == "swift:My Package@1.0"

    def test_invalid_type_falls_back(self):
        assert build_identifier("swift pm", "Gloss").value == "swift pm:Gloss"
        assert build_identifier("1swift", "Gloss", "2.0").value == "1swift:Gloss@2.0"

    def test_invalid_version_falls_back(self):
        identifier = build_identifier("swift", "Gloss", "1.0 beta")
        assert identifier == GenericIdentifier("swift:Gloss@1.0 beta")

    def test_name_with_slash_falls_back(self):
        identifier = build_identifier("swift", "a/b", "1.0")

        assert identifier == GenericIdentifier("swift:a/b@1.0", Confidence.HIGHEST)
        assert identifier.is_fallback

    def test_custom_confidence_is_kept(self):
        assert build_identifier("swift", "Gloss", confidence=Confidence.LOW).confidence == Confidence.LOW
        assert build_identifier("swift", "", confidence=Confidence.LOW).confidence == Confidence.LOW

    @pytest.mark.parametrize(
        "ecosystem,name,version",
        [
            ("swift", "", None),
            ("swift", "\t", "1.0"),
            ("swift", "a/b", None),
            ("swift", "naïve", "1.0.0"),
            ("", "Gloss", None),
            ("swift", "Gloss", ""),
            ("swift", "line\nbreak", None),
        ],
    )
    def test_always_returns_identifier(self, ecosystem, name, version):
        identifier = build_identifier(ecosystem, name, version)

        assert isinstance(identifier, (PurlIdentifier, GenericIdentifier))
        assert identifier.value
        assert identifier.confidence == Confidence.HIGHEST

    def test_is_deterministic(self):
        assert build_identifier("swift", "Gloss", "1.0") == build_identifier("swift", "Gloss", "1.0")
        assert build_identifier("swift", "A B") == build_identifier("swift", "A B")

    def test_to_dict(self):
        assert build_identifier("swift", "A B").to_dict() == {
            "type": "generic",
            "value": "swift:A B",
            "confidence": "HIGHEST",
        }
        assert build_identifier("swift", "Gloss").to_dict()["type"] == "purl"


class TestBuildPackageUrl:
    """Test strict package URL construction."""

    def test_valid_coordinates(self):
        purl = build_package_url("swift", "Gloss", "3.1.0")

        assert purl.type == "swift"
        assert purl.name == "Gloss"
        assert purl.version == "3.1.0"

    @pytest.mark.parametrize(
        "ecosystem,name,version",
        [
            ("swift", "", None),
            ("swift", "My Package", None),
            ("swift", "Gloss", ""),
            ("sw ift", "Gloss", None),
            ("swift", "a/b", None),
            ("", "Gloss", None),
        ],
    )
    def test_invalid_coordinates_raise(self, ecosystem, name, version):
        with pytest.raises(IdentifierConstructionError):
            build_package_url(ecosystem, name, version)
