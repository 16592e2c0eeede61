import pytest
from fastapi.testclient import TestClient

from truereview.api.server import app
from truereview.api.security import rate_limiter
from truereview.utils.logging_config import metrics


@pytest.fixture
def client():
    """FastAPI test client fixture."""
    rate_limiter.reset()
    return TestClient(app)


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Start every test with empty counters."""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def sample_gushing_review():
    """Short, praise-heavy review with excessive punctuation."""
    return "Amazing perfect love it!!"


@pytest.fixture
def sample_critical_review():
    """Ordinary review that mentions problems."""
    return "This was broken and I am disappointed, returned it."


@pytest.fixture
def sample_hindi_review():
    """Hindi review in Devanagari script."""
    return "यह उत्पाद बहुत अच्छा है"


@pytest.fixture
def sample_two_reviews(sample_gushing_review, sample_critical_review):
    """Two reviews separated by a blank line."""
    return f"{sample_gushing_review}\n\n{sample_critical_review}"
