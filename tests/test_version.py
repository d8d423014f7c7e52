"""Tests for winlog._version — PEP 440 compliance and version parsing."""

import re

import winlog
from winlog._version import (
    MAJOR, MINOR, PATCH, PHASE,
    PIP_VERSION,
    VERSION,
    get_pip_version,
    get_version,
)


def test_version_format():
    """Version should be MAJOR.MINOR.PATCH[-PHASE]."""
    assert re.match(r"^\d+\.\d+\.\d+(-\w+)?$", get_version()), \
        f"Unexpected version format: {get_version()}"


def test_version_matches_components():
    """Version should match the MAJOR.MINOR.PATCH constants."""
    expected_prefix = f"{MAJOR}.{MINOR}.{PATCH}"
    assert get_version().startswith(expected_prefix)


def test_pip_version_pep440():
    """PIP version must be PEP 440 compliant (no hyphens, proper pre-release)."""
    pip_ver = get_pip_version()
    assert "-" not in pip_ver, \
        f"PEP 440 forbids hyphens in version: {pip_ver}"
    assert re.match(r"^\d+\.\d+\.\d+", pip_ver), \
        f"PIP version doesn't start with N.N.N: {pip_ver}"


def test_pip_version_alpha_mapping():
    """Alpha phase should map to 'a0' in PEP 440."""
    if PHASE == "alpha":
        assert get_pip_version().endswith("a0")


def test_package_exports_version():
    """The package re-exports the version string."""
    assert winlog.__version__ == VERSION
    assert PIP_VERSION
