import json
import logging

from helpdesk_sla.shared.infrastructure.logging import get_logger, log_latency, setup_logging


def test_setup_logging_emits_json(capsys, restore_root_logger):
    setup_logging(level="INFO", environment="staging")

    get_logger("helpdesk_sla.test").info(
        "Deadline computed",
        extra={"priority": "high", "api_key": "secret", "correlation_id": "sweep-7"},
    )

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "Deadline computed"
    assert record["levelname"] == "INFO"
    assert record["priority"] == "high"
    assert record["environment"] == "staging"
    assert record["correlation_id"] == "sweep-7"
    assert record["api_key"] == "***REDACTED***"
    assert "timestamp" in record


def test_log_latency_records_operation(caplog):
    logger = get_logger("helpdesk_sla.test")
    with caplog.at_level(logging.INFO, logger="helpdesk_sla.test"):
        with log_latency(logger, "sla_sweep", requests=3):
            pass

    record = caplog.records[-1]
    assert record.getMessage() == "sla_sweep completed"
    assert record.operation == "sla_sweep"
    assert record.requests == 3
    assert record.latency_ms >= 0
