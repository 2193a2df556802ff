import pytest

from work_reports.core.exceptions import ValidationError
from work_reports.reports.model import (
    BatchReportPayload,
    LegacyReportPayload,
    ReportEntry,
    normalize_report_payload,
    parse_report_payload,
)


def test_flat_fields_parse_as_legacy_entry():
    payload = parse_report_payload({"taskNumber": 4, "workType": "dev", "workDescription": "x"})

    assert payload == LegacyReportPayload(entry=ReportEntry(4, "dev", "x"))
    assert normalize_report_payload(payload).entries == (ReportEntry(4, "dev", "x"),)


def test_batch_payload_is_returned_unchanged():
    payload = BatchReportPayload(entries=(ReportEntry(1, "dev", "a"),))

    assert normalize_report_payload(payload) is payload


@pytest.mark.parametrize(
    "body",
    [
        {"reports": []},
        {"reports": [{"taskNumber": 1, "workType": "dev"}]},
        {"taskNumber": "abc", "workType": "dev", "workDescription": "x"},
        {"taskNumber": 2.9, "workType": "dev", "workDescription": "x"},
        {"reports": [{"taskNumber": True, "workType": "dev", "workDescription": "x"}]},
    ],
)
def test_invalid_payloads_are_rejected(body):
    with pytest.raises(ValidationError):
        parse_report_payload(body)


def test_whole_float_task_number_is_accepted():
    payload = parse_report_payload({"taskNumber": 3.0, "workType": "dev", "workDescription": "x"})

    assert payload.entry.task_number == 3
