import os
import sys
from collections.abc import Mapping

from src.rules.models import Rules


def missing_env(rules: Rules, environ: Mapping[str, str] | None = None) -> list[str]:
    env = os.environ if environ is None else environ
    required = list(rules.ops.required_env)
    if rules.identity_provider.adapter == "firebase":
        required.append(rules.identity_provider.api_key_env)
    return [name for name in required if not env.get(name)]


def validate_ops_rules(rules: Rules, environ: Mapping[str, str] | None = None) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when a required environment variable is missing.
    """
    missing = missing_env(rules, environ)
    if missing:
        print(
            f"CRITICAL: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)

    print("Configuration Validated.")
