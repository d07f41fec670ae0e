import logging

import pytest


@pytest.fixture(autouse=True)
def propagate_app_logs(monkeypatch):
    """Let caplog see application records even after configure_logging() ran."""
    monkeypatch.setattr(logging.getLogger("pdfbinder"), "propagate", True)
