import pytest

from sanitizer.processor.models import PageText
from sanitizer.redaction.categories import get_default_privacy_config
from sanitizer.redaction.engine import RedactionEngine
from sanitizer.redaction.models import PrivacyModeConfig, RedactionCategory

SAMPLE_TEXT = (
    "Contact John Smith at john@acme.com or +1 415 555 0100. Card 4532015112830366."
)


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture()
def engine() -> RedactionEngine:
    return RedactionEngine()


@pytest.fixture()
def default_config() -> PrivacyModeConfig:
    return get_default_privacy_config()


@pytest.fixture()
def sample_config() -> PrivacyModeConfig:
    """Email, phone and card enabled plus one custom term."""
    return PrivacyModeConfig(
        enabled_categories=frozenset(
            {RedactionCategory.EMAIL, RedactionCategory.PHONE, RedactionCategory.CREDIT_CARD}
        ),
        custom_strings=("John Smith",),
    )


@pytest.fixture()
def sample_pages() -> list[PageText]:
    """Three pages: sensitive data on pages 1 and 3 only."""
    return [
        PageText(page_number=1, text=SAMPLE_TEXT),
        PageText(page_number=2, text="Nothing sensitive on this page."),
        PageText(page_number=3, text="Reach me at jane.doe@example.org."),
    ]
