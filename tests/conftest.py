"""
Pytest configuration for founder-flow tests.

Adds src/ to sys.path so tests can import the founder_flow package without
installing it, and gives every test a fresh process-wide URL validator so
blocked patterns added by one test never leak into another.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from founder_flow.utils.url_validator import reset_default_validator  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_default_validator(monkeypatch):
    """Isolate the shared denylist and ignore any local .env overrides"""
    monkeypatch.delenv("FOUNDER_FLOW_EXTRA_BLOCKED_PATTERNS", raising=False)
    monkeypatch.setattr("founder_flow.config.load_dotenv", lambda *args, **kwargs: False)
    reset_default_validator()
    yield
    reset_default_validator()


@pytest.fixture
def full_entry() -> dict:
    """Scraped record with every link family populated"""
    return {
        "company": "Acme Inc",
        "name": "Jane Doe",
        "role": "CEO, Founder",
        "linkedinurl": "linkedin.com/company/acme",
        "url": "acme.com/careers",
        "apply_url": "https://jobs.lever.co/acme/123",
        "email": "jane@acme.com",
    }
