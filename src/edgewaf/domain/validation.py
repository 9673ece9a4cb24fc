"""Validation of desired edge binding state before any mutation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .state import EdgeBindingInputs

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class FieldFailure:
    field: str
    reason: str


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Either the accepted inputs or every failure found in one pass."""

    accepted: EdgeBindingInputs | None = None
    failures: tuple[FieldFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def _missing(field: str) -> FieldFailure:
    return FieldFailure(field=field, reason=f"{field} is required")


def _blank(value: str) -> bool:
    return not value.strip()


def check(desired: EdgeBindingInputs) -> CheckResult:
    """Collect one failure per missing required field; never short-circuits."""

    failures: list[FieldFailure] = []
    if _blank(desired.auth_token.get_secret_value()):
        failures.append(_missing("authToken"))
    if _blank(desired.email):
        failures.append(_missing("email"))
    if _blank(desired.fastly_api_key.get_secret_value()):
        failures.append(_missing("fastlyApiKey"))
    if not desired.origins:
        failures.append(_missing("origins"))
    if _blank(desired.service_id):
        failures.append(_missing("serviceId"))
    if _blank(desired.site_name):
        failures.append(_missing("siteName"))

    if failures:
        return CheckResult(failures=tuple(failures))
    return CheckResult(accepted=desired)


def _property_name(loc: tuple[int | str, ...]) -> str:
    name = str(loc[0]) if loc else ""
    info = EdgeBindingInputs.model_fields.get(name)
    if info is not None and info.alias:
        return info.alias
    return name


def check_properties(properties: Mapping[str, object]) -> CheckResult:
    """Parse a raw property bag and check it.

    Values of the wrong type are reported as failures alongside missing fields
    instead of raising.
    """

    type_failures: dict[str, FieldFailure] = {}
    try:
        return check(EdgeBindingInputs.model_validate(properties))
    except ValidationError as exc:
        for error in exc.errors():
            name = _property_name(error["loc"])
            type_failures.setdefault(
                name, FieldFailure(field=name, reason=f"{name}: {error['msg']}")
            )

    remaining = {
        key: value
        for key, value in properties.items()
        if _property_name((key,)) not in type_failures
    }
    required = check(EdgeBindingInputs.model_validate(remaining)).failures
    failures = [
        *type_failures.values(),
        *(failure for failure in required if failure.field not in type_failures),
    ]
    return CheckResult(failures=tuple(failures))
