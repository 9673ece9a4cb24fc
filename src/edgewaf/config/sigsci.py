"""Signal Sciences (Fastly Next-Gen WAF) API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars
from .http_client import HttpClientConfig, RateLimit

SIGSCI_API_ROOT = "https://dashboard.signalsciences.net/api/v0"
SIGSCI_TIMEOUT_SECONDS = 30.0


def _default_http_config() -> HttpClientConfig:
    return HttpClientConfig(
        name="sigsci",
        timeout_seconds=SIGSCI_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


@dataclass(frozen=True)
class WafApiConfig:
    """Holds the WAF vendor endpoint and client settings."""

    corp_name: str
    api_root: str = SIGSCI_API_ROOT
    http: HttpClientConfig = field(default_factory=_default_http_config)

    @property
    def corp_url(self) -> str:
        return f"{self.api_root.rstrip('/')}/corps/{self.corp_name}"

    @classmethod
    def from_environment(cls, *, http: HttpClientConfig | None = None) -> WafApiConfig:
        values = require_env_vars(("SIGSCI_CORP",))
        return cls(
            corp_name=values["SIGSCI_CORP"],
            api_root=optional_env_var("SIGSCI_API_ROOT", SIGSCI_API_ROOT),
            http=http or _default_http_config(),
        )


def get_waf_api_config(*, http: HttpClientConfig | None = None) -> WafApiConfig:
    return WafApiConfig.from_environment(http=http)
