"""Shared fixtures for hulud-checker tests."""

import json

import pytest

from hulud_checker.core.index import AffectedRecord, VulnerabilityIndex


DATASET_TEXT = (
    '"Package";"Version"\n'
    '"left-pad";"1.3.0"\n'
    '"@ctrl/tinycolor";"4.1.1"\n'
    '"@ctrl/tinycolor";"4.1.2"\n'
    '"ngx-bootstrap";"18.1.4"\n'
)


@pytest.fixture
def index():
    """Index with a plain, a scoped and a multi-version package."""
    return VulnerabilityIndex.build([
        AffectedRecord("left-pad", "1.3.0"),
        AffectedRecord("@ctrl/tinycolor", "4.1.1"),
        AffectedRecord("@ctrl/tinycolor", "4.1.2"),
        AffectedRecord("ngx-bootstrap", "18.1.4"),
    ])


@pytest.fixture
def dataset_file(tmp_path):
    """Create a dataset file matching the ``index`` fixture."""
    dataset = tmp_path / "affected_packages.csv"
    dataset.write_text(DATASET_TEXT)
    return dataset


@pytest.fixture
def infected_package_lock():
    """A v3 package-lock.json with one affected scoped package."""
    return json.dumps({
        "name": "demo",
        "version": "1.0.0",
        "lockfileVersion": 3,
        "packages": {
            "": {"name": "demo", "version": "1.0.0"},
            "node_modules/@ctrl/tinycolor": {"version": "4.1.1"},
            "node_modules/lodash": {"version": "4.17.21"},
        },
    }, indent=2)
