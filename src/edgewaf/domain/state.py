"""Desired and observed state of a WAF edge binding.

Both records travel through the orchestrator as camelCase property bags. The
observed record always carries the full input set plus the derived ``apiUrl``
and ``headers``; the derived fields are recomputed wholesale on every successful
mutation and are never set on their own.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic.alias_generators import to_camel

REDACTED = "**********"


def _none_to_blank(value: object) -> object:
    return "" if value is None else value


def _none_to_empty_list(value: object) -> object:
    return [] if value is None else value


def _none_to_empty_dict(value: object) -> object:
    return {} if value is None else value


class BindingModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        frozen=True,
    )


class EdgeBindingInputs(BindingModel):
    """Desired state supplied by the caller."""

    origins: list[str] = Field(default_factory=list)
    site_name: str = ""
    service_id: str = ""
    email: str = ""
    auth_token: SecretStr = SecretStr("")
    fastly_api_key: SecretStr = SecretStr("")

    _normalize_strings = field_validator(
        "site_name", "service_id", "email", "auth_token", "fastly_api_key", mode="before"
    )(_none_to_blank)
    _normalize_origins = field_validator("origins", mode="before")(_none_to_empty_list)

    def to_properties(self) -> dict[str, object]:
        """Serialise to the orchestrator's property bag, secrets included."""

        return {
            "origins": list(self.origins),
            "siteName": self.site_name,
            "serviceId": self.service_id,
            "email": self.email,
            "authToken": self.auth_token.get_secret_value(),
            "fastlyApiKey": self.fastly_api_key.get_secret_value(),
        }


class EdgeBindingState(EdgeBindingInputs):
    """Observed state produced by the last successful reconciliation."""

    api_url: str = ""
    headers: dict[str, str] = Field(default_factory=dict, repr=False)

    _normalize_api_url = field_validator("api_url", mode="before")(_none_to_blank)
    _normalize_headers = field_validator("headers", mode="before")(_none_to_empty_dict)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def from_inputs(cls, inputs: EdgeBindingInputs, corp_url: str) -> Self:
        return cls(
            origins=list(inputs.origins),
            site_name=inputs.site_name,
            service_id=inputs.service_id,
            email=inputs.email,
            auth_token=inputs.auth_token,
            fastly_api_key=inputs.fastly_api_key,
            api_url=edge_deployment_url(corp_url, inputs),
            headers=vendor_headers(inputs),
        )

    def to_properties(self) -> dict[str, object]:
        properties = super().to_properties()
        properties["apiUrl"] = self.api_url
        properties["headers"] = dict(self.headers)
        return properties

    def redacted(self) -> dict[str, object]:
        """Property bag with secrets masked, safe to log."""

        properties = self.to_properties()
        properties["authToken"] = REDACTED
        properties["fastlyApiKey"] = REDACTED
        properties["headers"] = dict.fromkeys(self.headers, REDACTED)
        return properties


def edge_deployment_url(corp_url: str, inputs: EdgeBindingInputs) -> str:
    return f"{corp_url}/sites/{inputs.site_name}/edgeDeployment/{inputs.service_id}"


def vendor_headers(inputs: EdgeBindingInputs) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "x-api-user": inputs.email,
        "x-api-token": inputs.auth_token.get_secret_value(),
        "Fastly-Key": inputs.fastly_api_key.get_secret_value(),
    }
