from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from src.adapters.dev_identity import create_dev_identity_provider
from src.adapters.firebase_identity import FirebaseIdentityClient
from src.core.ports.identity import IdentityProviderPort, PersistenceMode, ProviderSession
from src.core.ports.navigation import NavigationPort
from src.rules.models import Rules
from src.services.login import LoginController

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    rules: Rules
    provider: IdentityProviderPort | None
    bootstrap_token: str | None = None

    @classmethod
    def create(cls, rules: Rules, environ: Mapping[str, str] | None = None) -> ServiceContext:
        env = os.environ if environ is None else environ
        idp = rules.identity_provider

        provider: IdentityProviderPort | None
        if idp.adapter == "dev":
            provider = create_dev_identity_provider(accounts=idp.dev_accounts)
        else:
            api_key = env.get(idp.api_key_env)
            if api_key:
                provider = FirebaseIdentityClient(
                    api_key=api_key,
                    base_url=idp.base_url,
                    timeout=idp.timeout_seconds,
                )
            else:
                # The page still renders and reports the service as unavailable
                logger.error(f"{idp.api_key_env} is not set; identity provider disabled")
                provider = None

        # Read once; never logged
        token = env.get(rules.bootstrap.token_env) or None

        return cls(rules=rules, provider=provider, bootstrap_token=token)

    def new_login_controller(
        self,
        router: NavigationPort,
        on_session: Callable[[ProviderSession], None] | None = None,
    ) -> LoginController:
        return LoginController(
            self.provider,
            router,
            bootstrap_token=self.bootstrap_token,
            persistence=PersistenceMode(self.rules.identity_provider.persistence),
            home_path=self.rules.routes.home,
            on_session=on_session,
        )
