"""Software identifiers attached to dependency records."""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

from packageurl import PackageURL

from ..utils.logging import get_logger
from .parsers.base import Confidence

logger = get_logger("spm_shield.identifiers")

# Package URL type grammar: letters, digits, '.', '+', '-', not starting with a digit
_PURL_TYPE_PATTERN = re.compile(r"^[A-Za-z.+-][A-Za-z0-9.+-]*$")
_DISALLOWED_CHARACTERS = re.compile(r"[\s\x00-\x1f\x7f]")


class IdentifierConstructionError(ValueError):
    """Raised when a package URL cannot be built from the given coordinates."""


@dataclass(frozen=True)
class PurlIdentifier:
    """Canonical package URL identifier."""

    purl: PackageURL
    confidence: Confidence = Confidence.HIGHEST

    is_fallback = False

    @property
    def value(self) -> str:
        return self.purl.to_string()

    def to_dict(self) -> Dict[str, str]:
        return {"type": "purl", "value": self.value, "confidence": self.confidence.name}

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GenericIdentifier:
    """Tagged ``ecosystem:name[@version]`` identifier used when no purl can be built."""

    value: str
    confidence: Confidence = Confidence.HIGHEST

    is_fallback = True

    def to_dict(self) -> Dict[str, str]:
        return {"type": "generic", "value": self.value, "confidence": self.confidence.name}

    def __str__(self) -> str:
        return self.value


Identifier = Union[PurlIdentifier, GenericIdentifier]


def build_package_url(ecosystem: str, name: str, version: Optional[str] = None) -> PackageURL:
    """Build a package URL, rejecting input the purl grammar cannot carry.

    Args:
        ecosystem: Package URL type
        name: Package name
        version: Optional package version

    Returns:
        Package URL

    Raises:
        IdentifierConstructionError: If any component is invalid
    """
    if not ecosystem or not _PURL_TYPE_PATTERN.match(ecosystem):
        raise IdentifierConstructionError(f"Invalid package URL type: {ecosystem!r}")
    if not name or _DISALLOWED_CHARACTERS.search(name):
        raise IdentifierConstructionError(f"Invalid package URL name: {name!r}")
    if version is not None and (not version or _DISALLOWED_CHARACTERS.search(version)):
        raise IdentifierConstructionError(f"Invalid package URL version: {version!r}")

    try:
        purl = PackageURL(type=ecosystem, name=name, version=version)
        parsed = PackageURL.from_string(purl.to_string())
    except ValueError as e:
        raise IdentifierConstructionError(str(e)) from e

    # A name such as "a/b" serializes as namespace "a" and name "b"
    if parsed.to_dict() != purl.to_dict():
        raise IdentifierConstructionError(
            f"Package URL {purl.to_string()} does not round-trip to {ecosystem}/{name}"
        )
    return purl


def build_identifier(
    ecosystem: str,
    name: str,
    version: Optional[str] = None,
    confidence: Confidence = Confidence.HIGHEST,
) -> Identifier:
    """Build a software identifier for a package.

    A package URL is preferred. When one cannot be built the identifier
    falls back to ``ecosystem:name`` or ``ecosystem:name@version``. Both
    forms carry the same confidence and this function never raises.

    Args:
        ecosystem: Ecosystem label, used as the package URL type
        name: Package name
        version: Optional package version
        confidence: Confidence for the identifier

    Returns:
        A PurlIdentifier, or a GenericIdentifier on fallback
    """
    try:
        return PurlIdentifier(build_package_url(ecosystem, name, version), confidence)
    except IdentifierConstructionError as e:
        logger.debug(f"Unable to build package url for {ecosystem}: {e}")
        value = f"{ecosystem}:{name}"
        if version is not None:
            value = f"{value}@{version}"
        return GenericIdentifier(value, confidence)
