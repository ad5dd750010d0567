"""Tests for configuration loading, sample data and the command line."""

import json
from pathlib import Path

import pytest
import yaml

from profile_report.cli import main
from profile_report.config import (
    BrandConfig, ExportConfig, load_config,
    DEFAULT_COPYRIGHT, DEFAULT_FOOTER_NAME, DEFAULT_PRODUCT_NAME,
)
from profile_report.errors import ConfigError
from profile_report.sample_data import generate_records
from profile_report.sections import build_sections


class TestBrandConfig:

    def test_defaults(self):
        brand = BrandConfig()
        assert brand.header_name == DEFAULT_PRODUCT_NAME
        assert brand.footer_name == DEFAULT_FOOTER_NAME
        assert brand.copyright_line == DEFAULT_COPYRIGHT

    def test_from_yaml_reads_logo_relative_to_file(self, tmp_path, png_bytes):
        (tmp_path / "logo.png").write_bytes(png_bytes)
        path = tmp_path / "brand.yaml"
        path.write_text(yaml.safe_dump({"company_name": "Acme", "logo_path": "logo.png"}),
                        encoding="utf-8")
        brand = BrandConfig.from_yaml(path)
        assert brand.company_name == "Acme"
        assert brand.logo_image_bytes == png_bytes
        assert brand.copyright_text is None

    def test_missing_logo_is_logged(self, tmp_path, caplog):
        path = tmp_path / "brand.yaml"
        path.write_text("company_name: Acme\nlogo_path: nowhere.png\n", encoding="utf-8")
        brand = BrandConfig.from_yaml(path)
        assert brand.logo_image_bytes is None
        assert "Could not read brand logo" in caplog.text


class TestExportConfig:

    def test_default(self):
        config = load_config()
        assert config.format == "pdf"
        assert config.render_options().include_logo

    def test_yaml_round_trip(self, tmp_path):
        config = ExportConfig(out_dir=tmp_path / "reports", format="word", locale="en-GB",
                              include_photo=False, exact_page_count=True, max_workers=4)
        path = tmp_path / "config.yaml"
        config.to_yaml(path)
        loaded = load_config(path)
        assert loaded == config
        assert loaded.render_options().locale == "en-GB"

    @pytest.mark.parametrize("text", [
        "format: csv\n",
        "report_type: monthly\n",
        "colour: blue\n",
    ])
    def test_invalid_yaml_is_rejected(self, tmp_path, text):
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)


class TestSampleData:

    def test_deterministic_per_seed(self):
        first = generate_records(5, seed=7)
        second = generate_records(5, seed=7)
        assert first == second
        assert generate_records(5, seed=8) != first

    def test_records_render_to_sections(self):
        for record in generate_records(10, seed=3):
            sections = build_sections(record)
            assert len(sections) == 9
            assert all(f.text for s in sections for f in s.fields)


class TestCli:

    def test_sample_pdf_export(self, tmp_path, capsys):
        code = main(["--sample", "2", "--out-dir", str(tmp_path), "--seed", "5"])
        assert code == 0
        assert len(list(tmp_path.glob("*_Comprehensive_Report.pdf"))) >= 1
        assert "Export complete!" in capsys.readouterr().out

    def test_summary_from_records_file(self, tmp_path):
        records = tmp_path / "records.json"
        records.write_text(json.dumps([{"id": "1", "personalInfo": {"name": "A B"}},
                                       {"id": "2"}]), encoding="utf-8")
        out = tmp_path / "out"
        code = main(["--records", str(records), "--format", "excel",
                     "--report-type", "summary", "--out-dir", str(out)])
        assert code == 0
        assert (out / "Housemaid_summary_Report.xlsx").exists()

    def test_single_record_word(self, tmp_path):
        records = tmp_path / "records.yaml"
        records.write_text("- id: x1\n  personalInfo:\n    name: Jane Doe\n", encoding="utf-8")
        code = main(["--records", str(records), "--format", "word", "--record-id", "x1",
                     "--out-dir", str(tmp_path)])
        assert code == 0
        assert (tmp_path / "Jane_Doe_Report.docx").exists()

    def test_contract_violation_returns_error(self, tmp_path):
        code = main(["--sample", "1", "--format", "pdf", "--report-type", "summary",
                     "--out-dir", str(tmp_path)])
        assert code == 1
        assert not list(Path(tmp_path).glob("*.pdf"))

    def test_invalid_config_file_exits_with_usage_error(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("format: csv\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config), "--sample", "1", "--out-dir", str(tmp_path)])
        assert exc.value.code == 2
        assert "format must be one of pdf, excel, word" in capsys.readouterr().err
        assert not list(Path(tmp_path).glob("*.pdf"))
