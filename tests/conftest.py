from __future__ import annotations

import pytest

from edgewaf.config import HttpClientConfig, WafApiConfig
from edgewaf.domain.state import EdgeBindingInputs
from tests.support.vendor import FakeVendor


@pytest.fixture
def waf_config() -> WafApiConfig:
    return WafApiConfig(
        corp_name="acme",
        api_root="https://waf.test/api/v0",
        http=HttpClientConfig(name="test"),
    )


@pytest.fixture
def vendor() -> FakeVendor:
    return FakeVendor()


@pytest.fixture
def desired() -> EdgeBindingInputs:
    return EdgeBindingInputs.model_validate(
        {
            "origins": ["a.example.com"],
            "siteName": "s1",
            "serviceId": "svc1",
            "email": "e@x.com",
            "authToken": "t",
            "fastlyApiKey": "k",
        }
    )
