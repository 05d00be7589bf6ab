"""
Revenue export tests (CSV and Excel).
"""
from io import BytesIO

import pytest
from fastapi import HTTPException
from openpyxl import load_workbook

from controllers.reports_controller import to_csv, revenue_rows, export_revenue
from models.dashboard import RevenuePoint

POINTS = [
    RevenuePoint(month="Dec", revenue=28550, previous_revenue=0),
    RevenuePoint(month="Jan", revenue=12500, previous_revenue=28550),
]


class TestCsv:

    def test_escaping(self):
        csv_text = to_csv([{"Name": "plain", "Note": "a,b", "Quote": 'say "hi"', "Empty": None}])
        assert csv_text.split("\n")[1] == 'plain,"a,b","say ""hi""",'

    def test_empty_rows(self):
        assert to_csv([]) == ""

    def test_rows_with_comparison(self):
        rows = revenue_rows(POINTS)
        assert rows[0] == {"Month": "Dec", "Revenue": "$28,550", "Previous Period": "$0", "Change": "n/a"}
        assert rows[1]["Change"] == "-56.2%"

    def test_rows_without_comparison(self):
        assert revenue_rows([RevenuePoint(month="Jan", revenue=100)]) == [{"Month": "Jan", "Revenue": "$100"}]

    def test_csv_response(self):
        response = export_revenue(POINTS, "csv")
        assert response.media_type.startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        lines = response.body.decode().split("\n")
        assert lines[0] == "Month,Revenue,Previous Period,Change"
        assert lines[1] == 'Dec,"$28,550",$0,n/a'


class TestExcel:

    def test_workbook_contents(self):
        response = export_revenue(POINTS, "excel")
        wb = load_workbook(BytesIO(response.body))
        ws = wb["Revenue"]
        assert [c.value for c in ws[1]] == ["Month", "Revenue", "Previous Period", "Change"]
        assert [c.value for c in ws[3]] == ["Jan", 12500, 28550, -56.2]
        assert ws["A1"].font.bold


class TestExportErrors:

    def test_no_data(self):
        with pytest.raises(HTTPException) as exc:
            export_revenue([], "csv")
        assert exc.value.status_code == 404

    def test_unknown_format(self):
        with pytest.raises(HTTPException) as exc:
            export_revenue(POINTS, "pdf")
        assert exc.value.status_code == 400
