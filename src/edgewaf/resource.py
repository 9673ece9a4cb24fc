"""Pulumi dynamic resource exposing the WAF edge binding to a stack.

Usage inside a Pulumi program::

    service = fastly.ServiceVcl("site", ...)
    WafEdgeBinding(
        "site-waf",
        WafEdgeBindingArgs(
            origins=[backend.address for backend in backends],
            site_name=config.require("sigSciSite"),
            service_id=service.id,
            email=config.require("sigSciEmail"),
            auth_token=config.require_secret("sigSciApiKey"),
            fastly_api_key=config.require_secret("fastlyApiKey"),
        ),
        pulumi.ResourceOptions(parent=service),
    )

The provider runs in the Pulumi dynamic-provider host, so every mutating lifecycle
method opens its own HTTP client and drives the async engine with ``asyncio.run``.
``check`` and ``diff`` are pure and tolerate inputs that are still unknown during
a preview.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from logging import getLogger
from typing import Any, TypeVar

import pulumi
import pulumi.dynamic
from pulumi.output import Unknown
from pulumi.runtime import rpc

from edgewaf.adapters.http_client import ApiClient, default_client_factory
from edgewaf.config import HttpClientConfig, WafApiConfig, configure_logging
from edgewaf.domain.reconcile import ReconcileEngine, compare
from edgewaf.domain.state import EdgeBindingInputs, EdgeBindingState
from edgewaf.domain.validation import check_properties

T = TypeVar("T")

log = getLogger(__name__)

SECRET_OUTPUTS = ("auth_token", "fastly_api_key", "headers")

_CAMEL_TO_SNAKE = {
    "apiUrl": "api_url",
    "authToken": "auth_token",
    "fastlyApiKey": "fastly_api_key",
    "serviceId": "service_id",
    "siteName": "site_name",
}
_SNAKE_TO_CAMEL = {snake: camel for camel, snake in _CAMEL_TO_SNAKE.items()}


def _python_name(prop: str) -> str:
    return _CAMEL_TO_SNAKE.get(prop, prop)


def _engine_name(prop: str) -> str:
    return _SNAKE_TO_CAMEL.get(prop, prop)


def _is_unknown(value: object) -> bool:
    if isinstance(value, Unknown) or value == rpc.UNKNOWN:
        return True
    if isinstance(value, list | tuple):
        return any(_is_unknown(item) for item in value)
    return False


def unknown_properties(props: Mapping[str, Any]) -> frozenset[str]:
    """Names of properties whose value is not known yet (preview placeholders)."""

    return frozenset(name for name, value in props.items() if _is_unknown(value))


def binding_options(opts: pulumi.ResourceOptions | None = None) -> pulumi.ResourceOptions:
    """Merge caller options with the replacement and secrecy policy of the binding."""

    return pulumi.ResourceOptions.merge(
        opts,
        pulumi.ResourceOptions(
            delete_before_replace=True,
            additional_secret_outputs=list(SECRET_OUTPUTS),
        ),
    )


@dataclass
class WafEdgeBindingProvider(pulumi.dynamic.ResourceProvider):
    """Imperative create/diff/update/delete/check behind :class:`WafEdgeBinding`."""

    config: WafApiConfig = field(default_factory=WafApiConfig.from_environment)
    client_factory: Callable[[HttpClientConfig], ApiClient] = field(
        default=default_client_factory
    )

    def check(self, _olds: Any, news: Any) -> pulumi.dynamic.CheckResult:
        configure_logging()
        unknown = unknown_properties(news)
        known = {name: value for name, value in news.items() if name not in unknown}
        result = check_properties(known)
        failures = [
            pulumi.dynamic.CheckFailure(failure.field, failure.reason)
            for failure in result.failures
            if failure.field not in unknown
        ]
        return pulumi.dynamic.CheckResult(dict(news), failures)

    def diff(self, binding_id: str, olds: Any, news: Any) -> pulumi.dynamic.DiffResult:
        configure_logging()
        unknown = unknown_properties(news)
        if unknown:
            log.info(
                f"Edge binding {binding_id} has unknown inputs: {', '.join(sorted(unknown))}"
            )
            return pulumi.dynamic.DiffResult(changes=True)

        outcome = compare(
            EdgeBindingState.model_validate(olds),
            EdgeBindingInputs.model_validate(news),
        )
        if outcome.changed:
            log.info(f"Edge binding {binding_id} changed: {', '.join(outcome.changed_fields)}")
        return pulumi.dynamic.DiffResult(changes=outcome.changed)

    def create(self, props: Any) -> pulumi.dynamic.CreateResult:
        desired = EdgeBindingInputs.model_validate(props)
        outcome = self._run(lambda engine: engine.create(desired))
        log.info(f"Created edge binding {outcome.id}: {outcome.outputs.redacted()}")
        return pulumi.dynamic.CreateResult(outcome.id, outcome.outputs.to_properties())

    def update(self, _id: str, olds: Any, news: Any) -> pulumi.dynamic.UpdateResult:
        prior = EdgeBindingState.model_validate(olds)
        desired = EdgeBindingInputs.model_validate(news)
        outputs = self._run(lambda engine: engine.update(prior, desired))
        return pulumi.dynamic.UpdateResult(outputs.to_properties())

    def delete(self, _id: str, props: Any) -> None:
        prior = EdgeBindingState.model_validate(props or {})
        self._run(lambda engine: engine.delete(prior))

    def _run(self, operation: Callable[[ReconcileEngine], Awaitable[T]]) -> T:
        configure_logging()
        return asyncio.run(self._with_engine(operation))

    async def _with_engine(self, operation: Callable[[ReconcileEngine], Awaitable[T]]) -> T:
        async with self.client_factory(self.config.http) as client:
            engine = ReconcileEngine(client=client, corp_url=self.config.corp_url)
            return await operation(engine)


@dataclass
class WafEdgeBindingArgs:
    origins: pulumi.Input[Sequence[str]]
    site_name: pulumi.Input[str]
    service_id: pulumi.Input[str]
    email: pulumi.Input[str]
    auth_token: pulumi.Input[str]
    fastly_api_key: pulumi.Input[str]

    def to_props(self) -> dict[str, Any]:
        return {
            "origins": self.origins,
            "site_name": self.site_name,
            "service_id": self.service_id,
            "email": self.email,
            "auth_token": self.auth_token,
            "fastly_api_key": self.fastly_api_key,
        }


class WafEdgeBinding(pulumi.dynamic.Resource):
    """Binds a WAF edge deployment to a CDN service and keeps its origins in sync.

    Pass the CDN service as ``parent`` so the binding is torn down with it.
    """

    api_url: pulumi.Output[str]
    headers: pulumi.Output[Mapping[str, str]]
    origins: pulumi.Output[list[str]]
    site_name: pulumi.Output[str]
    service_id: pulumi.Output[str]
    email: pulumi.Output[str]
    auth_token: pulumi.Output[str]
    fastly_api_key: pulumi.Output[str]

    def __init__(
        self,
        resource_name: str,
        args: WafEdgeBindingArgs,
        opts: pulumi.ResourceOptions | None = None,
        *,
        provider: WafEdgeBindingProvider | None = None,
    ) -> None:
        props: dict[str, Any] = {**args.to_props(), "api_url": None, "headers": None}
        super().__init__(
            provider or WafEdgeBindingProvider(),
            resource_name,
            props,
            binding_options(opts),
        )

    def translate_output_property(self, prop: str) -> str:
        return _python_name(prop)

    def translate_input_property(self, prop: str) -> str:
        return _engine_name(prop)
