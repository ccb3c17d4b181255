"""
pytest configuration and fixtures for boarding pass tests.

Provides reusable fixtures for:
- Sample BCBP strings (mandatory only, full multi-leg with security)
- A fixed pass date so Julian dates resolve deterministically
- Hypothesis property-based testing configuration
"""

import json
import os
from datetime import datetime
from zipfile import ZipFile

import pytest
from hypothesis import settings, Verbosity

# Default profile: balanced speed and coverage
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
)

# CI profile: more thorough testing
settings.register_profile(
    "ci",
    max_examples=500,
    deadline=None,
)

# Dev profile: fast iteration
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
)

# Debug profile: verbose output
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


MANDATORY_SINGLE = (
    "M1DESMARAIS/LUC       EABC123 YULFRAAC 0834 326J001A0025 100"
)

# Two legs with unique and repeated conditional items, airline data on
# the first leg, and a 10 character security section.
FULL_MULTI = (
    "M2DESMARAIS/LUC       EABC123 YULFRAAC 0834 326J001A0025 14D"
    ">6180WW6225BAC 00141234560022A014123456789011AC AC 1234567890123   "
    "220KYLX58Z"
    "DEF456 FRAGVALH 3664 327C012C0002 12C"
    "2A014098765432102LH LH 992003674500000 02PCN"
    "^10AABCDEFGHIJ"
)


@pytest.fixture
def mandatory_single():
    """The mandatory items of a single leg boarding pass."""
    return MANDATORY_SINGLE


@pytest.fixture
def full_multi():
    """A two leg boarding pass with conditional and security data."""
    return FULL_MULTI


@pytest.fixture
def pass_dt():
    """A pass date in 2021, used to resolve Julian dates."""
    return datetime(2021, 6, 1)


@pytest.fixture
def make_pkpass():
    """
    Provide a function that writes a minimal .pkpass archive.

    Usage:
        def test_pass(tmp_path, make_pkpass):
            path = make_pkpass(tmp_path / "a.pkpass", {'barcode': {...}})
    """
    def _make_pkpass(path, pass_json=None):
        with ZipFile(path, 'w') as zf:
            if pass_json is not None:
                zf.writestr("pass.json", json.dumps(pass_json))
            zf.writestr("manifest.json", "{}")
        return path
    return _make_pkpass
