import pytest

from src.adapters.dev_identity import DevIdentityProvider, create_dev_identity_provider
from src.rules.loader import parse_rules
from src.rules.models import Rules

ACCOUNT_EMAIL = "a@b.com"
ACCOUNT_PASSWORD = "correct-horse"

RULES_YAML = """
project:
  slug: signin-gate
  rules_version: "1"
identity_provider:
  adapter: dev
  persistence: session
  dev_accounts:
    a@b.com: correct-horse
bootstrap:
  token_env: TEST_BOOTSTRAP_TOKEN
routes:
  home: /
  login: /login
"""


class RecordingRouter:
    """Navigation port that remembers every path it was sent to."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    def navigate(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture
def provider() -> DevIdentityProvider:
    return create_dev_identity_provider(accounts={ACCOUNT_EMAIL: ACCOUNT_PASSWORD})


@pytest.fixture
def router() -> RecordingRouter:
    return RecordingRouter()


@pytest.fixture
def rules() -> Rules:
    return parse_rules(RULES_YAML)
