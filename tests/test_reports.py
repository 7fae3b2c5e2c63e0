"""Tests for period resolution, period summaries and the CSV/Excel exports."""

import io
from datetime import date, datetime

import pytest
from openpyxl import load_workbook

from core.config import EXPORT_HEADERS
from models.records import TrainingRecord
from services.reports import (
    PeriodKind,
    build_period_report,
    create_period_excel_report,
    export_filename,
    filter_by_period,
    records_to_csv,
    resolve_period,
)


class TestResolvePeriod:
    @pytest.mark.parametrize(
        "kind,year,index,start,end,label",
        [
            ("monthly", 2025, 3, date(2025, 3, 1), date(2025, 3, 31), "marzo 2025"),
            ("monthly", 2024, 2, date(2024, 2, 1), date(2024, 2, 29), "febrero 2024"),
            ("bimonthly", 2025, 2, date(2025, 3, 1), date(2025, 4, 30), "mar - abr 2025"),
            ("bimonthly", 2024, 6, date(2024, 11, 1), date(2024, 12, 31), "nov - dic 2024"),
            ("quarterly", 2025, 2, date(2025, 4, 1), date(2025, 6, 30), "Q2 2025"),
            ("semiannual", 2025, 1, date(2025, 1, 1), date(2025, 6, 30), "Primer Semestre 2025"),
            ("semiannual", 2025, 2, date(2025, 7, 1), date(2025, 12, 31), "Segundo Semestre 2025"),
            ("annual", 2025, None, date(2025, 1, 1), date(2025, 12, 31), "Año 2025"),
        ],
    )
    def test_ranges_and_labels(self, kind, year, index, start, end, label):
        period = resolve_period(kind, year, index)
        assert (period.start, period.end, period.label) == (start, end, label)

    def test_index_defaults_to_first(self):
        assert resolve_period(PeriodKind.QUARTERLY, 2025).start == date(2025, 1, 1)

    def test_annual_ignores_index(self):
        period = resolve_period("annual", 2025, 7)
        assert period.index == 1
        assert period.end == date(2025, 12, 31)

    @pytest.mark.parametrize("kind,index", [("quarterly", 5), ("quarterly", 0), ("monthly", 13), ("semiannual", 3)])
    def test_index_out_of_range(self, kind, index):
        with pytest.raises(ValueError):
            resolve_period(kind, 2025, index)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            resolve_period("weekly", 2025, 1)


def test_filter_by_period_uses_overlap(sample_records):
    q2 = filter_by_period(sample_records, date(2025, 4, 1), date(2025, 6, 30))
    assert [r.campaign for r in q2] == ["Telco Sur", "Energia Norte"]


def test_month_overlaps_record_spanning_the_year(sample_records):
    april = filter_by_period(sample_records, date(2025, 4, 1), date(2025, 4, 30))
    assert [r.campaign for r in april] == ["Telco Sur"]


def test_filter_by_period_drops_dateless(sample_records):
    year = filter_by_period(sample_records, date(2025, 1, 1), date(2025, 12, 31))
    assert len(year) == 4


class TestBuildReport:
    def test_monthly(self, sample_records):
        report = build_period_report(sample_records, "monthly", 2025, 3)

        assert report.total == 3
        assert report.campaign_count == 2
        assert report.developer_count == 2
        assert report.statuses.completed == 1
        assert report.statuses.in_progress == 1
        assert report.statuses.pending == 1
        assert [(e.name, e.count, e.related) for e in report.top_campaigns] == [
            ("Banco Andino", 2, 2),
            ("Telco Sur", 1, 1),
        ]
        assert [(e.name, e.count, e.related) for e in report.top_developers] == [
            ("Ana Gomez", 2, 2),
            ("Carlos Ruiz", 1, 1),
        ]
        assert [e.name for e in report.clients] == ["Banco Andino", "Telco Sur"]

    def test_quarterly(self, sample_records):
        report = build_period_report(sample_records, PeriodKind.QUARTERLY, 2025, 2)
        assert report.period.label == "Q2 2025"
        assert report.total == 2
        assert report.statuses.pending == 1

    def test_top_n(self, generated_records):
        report = build_period_report(generated_records, "annual", 2025, top_n=3)
        assert len(report.top_campaigns) <= 3
        assert len(report.top_developers) <= 3
        counts = [e.count for e in report.top_campaigns]
        assert counts == sorted(counts, reverse=True)

    def test_empty_period(self, sample_records):
        report = build_period_report(sample_records, "annual", 2030)
        assert report.total == 0
        assert report.top_campaigns == []


class TestCsv:
    def test_header_and_quoting(self, sample_record):
        lines = records_to_csv([sample_record, TrainingRecord()]).splitlines()

        assert lines[0] == ",".join(header for header, _ in EXPORT_HEADERS)
        assert lines[1].startswith('"Date(2025,1,20)","Laura Rios","Banco Andino"')
        assert lines[2] == ",".join(['""'] * len(EXPORT_HEADERS))

    def test_values_with_commas_stay_in_one_cell(self):
        csv_text = records_to_csv([TrainingRecord(name='Curso "A", parte 2')])
        assert '"Curso ""A"", parte 2"' in csv_text

    def test_title_banner(self, sample_record):
        csv_text = records_to_csv(
            [sample_record], title="marzo 2025", generated_at=datetime(2025, 3, 5, 14, 30)
        )
        lines = csv_text.split("\n")

        assert lines[0] == "\ufeffREPORTE MARZO 2025,,,,"
        assert lines[1] == "Generado el: 05/03/2025 14:30"
        assert lines[2] == ""
        assert lines[3].startswith("Fecha Solicitud,")


def test_export_filename():
    period = resolve_period("quarterly", 2025, 2)
    assert (
        export_filename(period, "xlsx", today=date(2025, 7, 1))
        == "reporte_quarterly_2025_2_2025-07-01.xlsx"
    )


class TestExcel:
    def test_workbook_layout(self, sample_records):
        report = build_period_report(sample_records, "monthly", 2025, 3)
        wb = load_workbook(io.BytesIO(create_period_excel_report(report)))

        assert wb.sheetnames == ["Resumen", "Detalle"]
        summary = wb["Resumen"]
        assert summary["A1"].value == "Reporte marzo 2025"
        assert summary["A2"].value == "1/3/2025 - 31/3/2025"
        assert summary["A4"].value == "Total Registros"
        assert summary["B4"].value == 3

        detail = wb["Detalle"]
        assert detail.max_row == 4
        assert detail["A1"].value == "Fecha Solicitud"
        assert detail["A1"].font.bold
        start_col = [attr for _, attr in EXPORT_HEADERS].index("start_date") + 1
        assert detail.cell(row=2, column=start_col).value == "1/3/2025"

    def test_writes_file(self, sample_records, tmp_path):
        report = build_period_report(sample_records, "annual", 2025)
        output = tmp_path / "out" / "report.xlsx"
        content = create_period_excel_report(report, output)
        assert output.read_bytes() == content
