from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class IdentityProviderRules(BaseModel):
    adapter: Literal["firebase", "dev"] = "firebase"
    api_key_env: str = "SIGNIN_FIREBASE_API_KEY"
    base_url: str = "https://identitytoolkit.googleapis.com/v1"
    timeout_seconds: float = Field(default=10.0, gt=0)
    persistence: Literal["session", "none"] = "session"
    # Only read by the dev adapter: email -> password
    dev_accounts: dict[str, str] = Field(default_factory=dict)


class BootstrapRules(BaseModel):
    token_env: str = "SIGNIN_BOOTSTRAP_TOKEN"


class RoutesRules(BaseModel):
    home: str = "/"
    login: str = "/login"


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    identity_provider: IdentityProviderRules
    bootstrap: BootstrapRules = Field(default_factory=BootstrapRules)
    routes: RoutesRules = Field(default_factory=RoutesRules)
    ops: OpsRules = Field(default_factory=OpsRules)
