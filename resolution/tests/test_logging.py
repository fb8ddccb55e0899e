import json
import logging

import pytest
import structlog

from resolution.logging import get_logger, setup_logging


@pytest.fixture
def configured(capsys):
    setup_logging(level="DEBUG", log_format="json")
    yield capsys
    structlog.reset_defaults()
    lg = logging.getLogger("resolution")
    for h in list(lg.handlers):
        lg.removeHandler(h)
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


def test_debug_events_render_as_json(configured):
    get_logger("resolution.tests").debug("route_selected", domain="brad.crypto", service="CNS")
    line = configured.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "route_selected"
    assert event["domain"] == "brad.crypto"
    assert event["level"] == "debug"


def test_secrets_are_redacted(configured):
    get_logger("resolution.tests").info("rpc_configured", api_key="s3cr3t")
    event = json.loads(configured.readouterr().err.strip().splitlines()[-1])
    assert event["api_key"] == "***"
