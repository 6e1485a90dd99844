"""Pytest configuration and fixtures."""

import pytest

from ae_triage.models import AdverseEventReport


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that call the live openFDA API",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "network: mark test as requiring network access")


def pytest_collection_modifyitems(config, items):
    """Skip network tests unless --run-network is provided."""
    if config.getoption("--run-network"):
        return

    skip_network = pytest.mark.skip(reason="Need --run-network option to run network tests")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


@pytest.fixture
def drug_x_report():
    """Single serious report for drugX with a sepsis reaction."""
    return AdverseEventReport(
        report_id="10003301",
        drug="drugx",
        serious=True,
        reactions=("sepsis",),
    )


@pytest.fixture
def openfda_payload():
    """Trimmed openFDA /drug/event.json response."""
    return {
        "meta": {"results": {"skip": 0, "limit": 2, "total": 2}},
        "results": [
            {
                "safetyreportid": "10003300",
                "serious": "1",
                "patient": {
                    "reaction": [
                        {"reactionmeddrapt": "Sepsis"},
                        {"reactionmeddrapt": "Chest pain"},
                        {"reactionmeddrapt": "sepsis"},
                    ],
                    "drug": [
                        {"medicinalproduct": "DURAGESIC-100"},
                        {"medicinalproduct": "ASPIRIN"},
                    ],
                },
            },
            {
                "safetyreportid": "10003302",
                "serious": "2",
                "patient": {
                    "reaction": [{"reactionmeddrapt": "Headache"}],
                    "drug": [],
                },
            },
        ],
    }
