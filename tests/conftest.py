"""Shared test fixtures for the minFraud client tests."""

import os
from collections.abc import Callable

import httpx
import pytest
import structlog

os.environ.setdefault("MINFRAUD_LICENSE_KEY", "test-license-key")

from minfraud.config import Settings  # noqa: E402
from minfraud.request import RequestSubmitter  # noqa: E402

TEST_URI = "https://minfraud.test/app/ccv2r"

SCORED_BODY = (
    "distance=10489;countryMatch=No;countryCode=KR;freeMail=No;anonymousProxy=No;"
    "binMatch=NA;binCountry=;err=;proxyScore=0.00;ip_region=11;ip_city=Seoul;"
    "ip_latitude=37.5985;ip_longitude=126.9783;ip_isp=Seoul National University;"
    "highRiskCountry=No;queriesRemaining=1097;maxmindID=GTQOJ4MY;ip_postalCode=;"
    "ip_accuracyRadius=3;ip_areaCode=0;ip_regionName=Seoul-t'ukpyolsi;"
    "ip_countryName=Korea, Republic of;ip_corporateProxy=No;carderEmail=No;"
    "riskScore=23.29;minfraud_version=1.3;service_level=standard"
)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def config() -> Settings:
    return Settings(license_key="test-license-key", uri=TEST_URI)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def text_reply(body: str, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return handler


@pytest.fixture
def make_submitter(config):
    """Build a submitter whose HTTP traffic goes to a recording transport."""

    def _make(handler) -> tuple[RequestSubmitter, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.Client(transport=transport)
        return RequestSubmitter(config=config, client=client), transport

    return _make


@pytest.fixture
def scored_submitter(make_submitter):
    return make_submitter(text_reply(SCORED_BODY))
