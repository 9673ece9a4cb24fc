"""Reconcile engine for a single WAF edge binding.

The engine is stateless: every call receives the previously observed state and
the desired inputs explicitly and returns the new observed state. Remote calls
are issued in a fixed order with no rollback:

1) bind the WAF edge deployment to the CDN service, only when the computed
   ``apiUrl`` differs from the one previously observed
2) synchronise the origin list, on every update
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import InvalidBindingError
from .state import EdgeBindingState
from .validation import CheckResult, check

if TYPE_CHECKING:
    from .ports import HttpClient
    from .state import EdgeBindingInputs

log = getLogger(__name__)

FULL_TRAFFIC_PERCENT = 100


@dataclass(slots=True, frozen=True)
class CreateOutcome:
    id: str
    outputs: EdgeBindingState


@dataclass(slots=True, frozen=True)
class DiffOutcome:
    changed: bool
    changed_fields: tuple[str, ...] = ()


def compare(prior: EdgeBindingInputs, desired: EdgeBindingInputs) -> DiffOutcome:
    """Report which compared fields differ; no remote calls."""

    changed: list[str] = []
    if prior.site_name != desired.site_name:
        changed.append("siteName")
    if prior.service_id != desired.service_id:
        changed.append("serviceId")
    # Order-sensitive: a reordered origin list counts as a change.
    if list(prior.origins) != list(desired.origins):
        changed.append("origins")
    if prior.email != desired.email:
        changed.append("email")
    if prior.auth_token != desired.auth_token:
        changed.append("authToken")
    if prior.fastly_api_key != desired.fastly_api_key:
        changed.append("fastlyApiKey")
    return DiffOutcome(changed=bool(changed), changed_fields=tuple(changed))


@dataclass(slots=True)
class ReconcileEngine:
    """Create, diff, update and delete an edge binding against the WAF vendor API."""

    client: HttpClient
    corp_url: str

    async def check(
        self,
        prior: EdgeBindingState,  # noqa: ARG002
        desired: EdgeBindingInputs,
    ) -> CheckResult:
        return check(desired)

    async def diff(self, prior: EdgeBindingState, desired: EdgeBindingInputs) -> DiffOutcome:
        return compare(prior, desired)

    async def create(self, desired: EdgeBindingInputs) -> CreateOutcome:
        binding_id = str(uuid.uuid4())
        outputs = await self.update(EdgeBindingState.empty(), desired)
        return CreateOutcome(id=binding_id, outputs=outputs)

    async def update(
        self,
        prior: EdgeBindingState,
        desired: EdgeBindingInputs,
    ) -> EdgeBindingState:
        result = check(desired)
        if not result.ok:
            raise InvalidBindingError(result.failures)

        observed = EdgeBindingState.from_inputs(desired, self.corp_url)

        if observed.api_url != prior.api_url:
            await self._bind(observed)

        await self._sync_origins(observed)
        return observed

    async def delete(self, prior: EdgeBindingState) -> None:
        if not prior.api_url or not prior.headers:
            log.info("No edge deployment recorded; nothing to detach")
            return

        try:
            await self.client.request(prior.api_url, "DELETE", headers=prior.headers)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "Detaching edgeDeployment from fastly service failed "
                "(site=%s, service=%s)\n%s",
                prior.site_name,
                prior.service_id,
                exc,
            )
            return

        log.info(
            "Detached edge deployment: site=%s, service=%s",
            prior.site_name,
            prior.service_id,
        )

    async def _bind(self, observed: EdgeBindingState) -> None:
        try:
            await self.client.request(
                observed.api_url,
                "PUT",
                headers=observed.headers,
                body={"activateVersion": True, "percentEnabled": FULL_TRAFFIC_PERCENT},
            )
        except Exception as exc:
            log.error(
                "Mapping to the fastly service failed (site=%s, service=%s)\n%s",
                observed.site_name,
                observed.service_id,
                exc,
            )
            raise

        log.info(
            "Mapped edge deployment: site=%s, service=%s",
            observed.site_name,
            observed.service_id,
        )

    async def _sync_origins(self, observed: EdgeBindingState) -> None:
        try:
            await self.client.request(
                f"{observed.api_url}/backends",
                "PUT",
                headers=observed.headers,
            )
        except Exception as exc:
            log.error(
                "Synchronizing origins failed (site=%s, service=%s)\n%s",
                observed.site_name,
                observed.service_id,
                exc,
            )
            raise

        log.info(
            "Synchronized %s origin(s) for site=%s, service=%s",
            len(observed.origins),
            observed.site_name,
            observed.service_id,
        )
