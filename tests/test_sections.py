"""Tests for canonical section extraction and record loading."""

import base64
import json

import pytest

from profile_report.errors import RecordFormatError
from profile_report.record import Record, load_records
from profile_report.sections import SECTION_TITLES, SUMMARY_COLUMNS, build_sections, summary_row

CANONICAL_TITLES = [title for _, title in SECTION_TITLES]


def _texts(sections, key):
    section = next(s for s in sections if s.key == key)
    return {f.label: f.text for f in section.fields}


class TestBuildSections:

    def test_canonical_order_for_full_record(self, full_record):
        assert [s.title for s in build_sections(full_record)] == CANONICAL_TITLES

    def test_canonical_order_for_sparse_record(self, sparse_record):
        assert [s.title for s in build_sections(sparse_record)] == CANONICAL_TITLES

    def test_no_field_is_ever_empty(self, sparse_record):
        for section in build_sections(sparse_record):
            for f in section.fields:
                assert f.text.strip(), f"{section.title}/{f.label} is empty"

    def test_absent_saudi_agency_uses_fallbacks(self, sparse_record):
        texts = _texts(build_sections(sparse_record), "sa_agency")
        assert texts == {
            "Agency Name": "Not assigned",
            "License Number": "Not provided",
            "Contact Person": "Not provided",
            "Phone Number": "Not provided",
            "Email Address": "Not provided",
            "Office Address": "Not provided",
        }

    def test_sparse_record_fallbacks(self, sparse_record):
        sections = build_sections(sparse_record)
        personal = _texts(sections, "personal")
        assert personal["Full Name"] == "Ana Lopez"
        assert personal["Housemaid Number"] == "Not assigned"
        assert personal["Nationality"] == "Not specified"
        employment = _texts(sections, "employment")
        assert employment["Job Position"] == "Housemaid"
        assert employment["Contract Duration"] == "Not specified"
        assert employment["Employment Start Date"] == "Not specified"
        complaint = _texts(sections, "complaint")
        assert complaint["Complaint Description"] == "No complaints reported"
        assert complaint["Resolution Details"] == "Not applicable"
        assert _texts(sections, "location")["Current Location Status"] == "Not specified"

    def test_full_record_values(self, full_record):
        sections = build_sections(full_record)
        employment = _texts(sections, "employment")
        assert employment["Employment Status"] == "Active"
        assert employment["Contract Duration"] == "2 year(s)"
        assert employment["Contract End Date"] == "March 1, 2025"
        assert _texts(sections, "location")["Current Location Status"] == "Inside Country"
        assert _texts(sections, "flight")["Flight Date"] == "February 25, 2023"

    def test_deterministic(self, full_record):
        assert build_sections(full_record) == build_sections(full_record)


class TestSummaryRow:

    def test_has_every_column(self, full_record):
        row = summary_row(full_record)
        assert list(row) == [header for header, _, _ in SUMMARY_COLUMNS]
        assert len(row) == 16

    def test_values(self, full_record, sparse_record):
        assert summary_row(full_record)["Saudi Agency"] == "Riyadh Recruitment Co"
        row = summary_row(sparse_record)
        assert row["Saudi Agency"] == "Not assigned"
        assert row["Airline"] == "Not specified"


class TestRecordLoading:

    def test_from_camel_case(self, png_bytes):
        data = {
            "id": 7,
            "housemaidNumber": "HM1",
            "personalInfo": {"name": "Grace Wanjiru", "citizenship": "Kenyan"},
            "locationStatus": {"isInsideCountry": False, "exitDate": "2024-04-01"},
            "saudiRecruitmentAgency": {"name": "Jeddah Agency", "licenseNumber": "L-1"},
            "profilePhoto": {"fileData": "data:image/png;base64," + base64.b64encode(png_bytes).decode()},
        }
        record = Record.from_dict(data)
        assert record.id == "7"
        assert record.personal_info.citizenship == "Kenyan"
        assert record.location_status.is_inside_country is False
        assert record.saudi_recruitment_agency.license_number == "L-1"
        assert record.profile_photo == png_bytes
        assert record.employer is None

    def test_from_snake_case(self):
        record = Record.from_dict({"id": "a", "personal_info": {"name": "X"},
                                   "employment": {"contract_period_years": 3}})
        assert record.employment.contract_period_years == 3

    def test_missing_id_raises(self):
        with pytest.raises(RecordFormatError):
            Record.from_dict({"personalInfo": {"name": "No Id"}})

    def test_non_mapping_sub_record_raises(self):
        with pytest.raises(RecordFormatError):
            Record.from_dict({"id": "1", "identity": ["P123"]})

    def test_display_name_fallback(self):
        assert Record(id="x").display_name == "Unnamed"

    def test_load_json_list(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"id": "1"}, {"id": "2"}]), encoding="utf-8")
        assert [r.id for r in load_records(path)] == ["1", "2"]

    def test_load_single_yaml(self, tmp_path):
        path = tmp_path / "record.yaml"
        path.write_text("id: one\npersonalInfo:\n  name: Yaml Person\n", encoding="utf-8")
        records = load_records(path)
        assert len(records) == 1
        assert records[0].display_name == "Yaml Person"

    def test_load_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RecordFormatError):
            load_records(path)
