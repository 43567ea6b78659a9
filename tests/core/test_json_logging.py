import json
import logging

from core.logging import JSONFormatter


def _record(**extra):
    record = logging.LogRecord("servicehub", logging.INFO, __file__, 10, "Built %d rows", (3,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_record_as_json():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "servicehub"
    assert payload["message"] == "Built 3 rows"
    assert "timestamp" in payload


def test_extra_attributes_are_merged():
    payload = json.loads(JSONFormatter().format(_record(retail_total="108.00")))
    assert payload["retail_total"] == "108.00"
