"""Pytest configuration and shared fixtures for the mailtree test suite."""

import json
import logging
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import atom, block, doc, link, para, repeat, text, var

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=30)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Undo handlers installed by CLI runs so caplog keeps working."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def welcome_template() -> dict:
    """A realistic newsletter template touching most node types."""
    return doc(
        atom("logo", src="https://cdn.example.com/logo.png", alt="Acme", size="sm"),
        block("heading", text("Welcome, "), var("name", fallback="friend"), level=1),
        para(text("Thanks for joining "), text("Acme", "bold"), text(".")),
        block(
            "section",
            para(text("Your order:")),
            block("bulletList", repeat("items", block("listItem", para(var("label"))))),
            showIfKey="has_order",
        ),
        atom("button", text="Open dashboard", url="dashboard_url", isUrlVariable=True),
        atom("horizontalRule"),
        block("footer", text("Acme Inc. "), text("Unsubscribe", link("https://example.com/unsub"))),
    )


@pytest.fixture
def welcome_payload() -> dict:
    return {
        "name": "Alice",
        "has_order": True,
        "items": [{"label": "Widget"}, {"label": "Gadget"}],
        "dashboard_url": "https://example.com/dashboard",
    }


@pytest.fixture
def template_file(tmp_path: Path, welcome_template: dict) -> Path:
    path = tmp_path / "welcome.json"
    path.write_text(json.dumps(welcome_template), encoding="utf-8")
    return path


@pytest.fixture
def payload_file(tmp_path: Path, welcome_payload: dict) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(welcome_payload), encoding="utf-8")
    return path
