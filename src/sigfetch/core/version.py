"""Version handling"""

from packaging.version import InvalidVersion, Version


def parse_version(version: str) -> Version:
    """Parse a release version string"""
    return Version(version)


def is_valid_version(version: str) -> bool:
    """Check whether a string is a valid release version"""
    if not version:
        return False
    try:
        parse_version(version)
    except InvalidVersion:
        return False
    return True
