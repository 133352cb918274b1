"""Tests for the command-line entry point."""

import json

import httpx
import pytest

from minfraud import cli
from minfraud.request import RequestSubmitter
from tests.conftest import SCORED_BODY, TEST_URI, RecordingTransport, text_reply


@pytest.fixture
def fake_service(monkeypatch):
    """Route CLI submissions to a recording transport serving ``body``."""

    def _install(body: str) -> RecordingTransport:
        transport = RecordingTransport(text_reply(body))

        def factory(config):
            return RequestSubmitter(config=config, client=httpx.Client(transport=transport))

        monkeypatch.setattr(cli, "RequestSubmitter", factory)
        return transport

    return _install


class TestCli:
    def test_prints_summary_json(self, fake_service, capsys):
        transport = fake_service(SCORED_BODY)
        exit_code = cli.main(
            ["--ip", "81.2.69.160", "--email", "a@b.com", "--country", "KR", "--uri", TEST_URI]
        )

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["risk_score"] == 23.29
        assert payload["maxmind_id"] == "GTQOJ4MY"
        assert transport.call_count == 1

    def test_flags_reach_the_wire(self, fake_service):
        transport = fake_service(SCORED_BODY)
        cli.main(["--ip", "1.2.3.4", "--txn-id", "t-9", "--license-key", "cli-key", "--uri", TEST_URI])

        body = transport.requests[0].content.decode()
        assert "txnID=t-9" in body
        assert "license_key=cli-key" in body

    def test_provider_error_exits_nonzero(self, fake_service, capsys):
        fake_service("err=INVALID_LICENSE_KEY")
        exit_code = cli.main(["--ip", "81.2.69.160", "--uri", TEST_URI])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "INVALID_LICENSE_KEY" in captured.err

    def test_ip_is_required(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_insecure_uri_is_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["--ip", "1.2.3.4", "--uri", "http://minfraud.test/app/ccv2r"])

    def test_nan_score_is_reported_as_zero(self, fake_service, capsys):
        fake_service("riskScore=nan;maxmindID=X")
        exit_code = cli.main(["--ip", "81.2.69.160", "--uri", TEST_URI])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["risk_score"] == 0.0
        assert payload["maxmind_id"] == "X"

    def test_out_of_range_score_exits_nonzero(self, fake_service, capsys):
        fake_service("riskScore=250;maxmindID=X")
        exit_code = cli.main(["--ip", "81.2.69.160", "--uri", TEST_URI])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "risk_score" in captured.err
