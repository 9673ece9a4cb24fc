from __future__ import annotations

import pytest

from edgewaf.domain.state import EdgeBindingInputs
from edgewaf.domain.validation import FieldFailure, check, check_properties

REQUIRED_FIELDS = ("authToken", "email", "fastlyApiKey", "origins", "serviceId", "siteName")


def test_complete_inputs_are_accepted(desired: EdgeBindingInputs) -> None:
    result = check(desired)

    assert result.ok
    assert result.failures == ()
    assert result.accepted is desired


def test_empty_inputs_report_every_required_field() -> None:
    result = check(EdgeBindingInputs())

    assert not result.ok
    assert result.accepted is None
    assert [failure.field for failure in result.failures] == list(REQUIRED_FIELDS)
    assert all(failure.reason == f"{failure.field} is required" for failure in result.failures)


@pytest.mark.parametrize("missing", REQUIRED_FIELDS)
def test_single_missing_field_yields_single_failure(
    desired: EdgeBindingInputs, missing: str
) -> None:
    properties = desired.to_properties()
    properties[missing] = [] if missing == "origins" else ""

    result = check(EdgeBindingInputs.model_validate(properties))

    assert result.failures == (FieldFailure(field=missing, reason=f"{missing} is required"),)


def test_failures_are_collected_without_short_circuit(desired: EdgeBindingInputs) -> None:
    properties = desired.to_properties()
    properties["email"] = "   "
    properties["siteName"] = None

    result = check(EdgeBindingInputs.model_validate(properties))

    assert {failure.field for failure in result.failures} == {"email", "siteName"}


def test_check_properties_reports_wrong_types_without_raising() -> None:
    result = check_properties({"origins": "a.example.com", "siteName": "s1"})

    fields = [failure.field for failure in result.failures]
    assert not result.ok
    assert fields[0] == "origins"
    assert sorted(fields[1:]) == ["authToken", "email", "fastlyApiKey", "serviceId"]


def test_check_properties_reports_non_string_email() -> None:
    result = check_properties(
        {
            "origins": ["a.example.com"],
            "siteName": "s1",
            "serviceId": "svc1",
            "email": 42,
            "authToken": "t",
            "fastlyApiKey": "k",
        }
    )

    assert [failure.field for failure in result.failures] == ["email"]
    assert result.failures[0].reason.startswith("email: ")


def test_check_properties_accepts_complete_bag() -> None:
    result = check_properties(
        {
            "origins": ["a.example.com"],
            "siteName": "s1",
            "serviceId": "svc1",
            "email": "e@x.com",
            "authToken": "t",
            "fastlyApiKey": "k",
        }
    )

    assert result.ok
    assert result.accepted is not None
    assert result.accepted.site_name == "s1"
