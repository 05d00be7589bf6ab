from fastapi import HTTPException
from fastapi.responses import Response
from typing import List, Dict, Any
from datetime import datetime, timezone
from io import BytesIO, StringIO
import csv

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment

from models.dashboard import RevenuePoint

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def style_excel_header(ws, row=1):
    header_font = Font(bold=True, color="FFFFFF", size=10)
    header_fill = PatternFill(start_color="1e293b", end_color="1e293b", fill_type="solid")
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")


def auto_column_width(ws):
    for col in ws.columns:
        max_len = max((len(str(cell.value or "")) for cell in col), default=0)
        ws.column_dimensions[col[0].column_letter].width = min(max_len + 3, 40)


def format_currency(amount: float) -> str:
    return f"${amount:,.0f}"


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """Header from the first row's keys, one line per row."""
    if not rows:
        return ""
    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()), lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def revenue_rows(points: List[RevenuePoint]) -> List[Dict[str, Any]]:
    rows = []
    for point in points:
        row = {"Month": point.month, "Revenue": format_currency(point.revenue)}
        if point.previous_revenue is not None:
            row["Previous Period"] = format_currency(point.previous_revenue)
            if point.previous_revenue:
                change = (point.revenue - point.previous_revenue) / point.previous_revenue * 100
                row["Change"] = f"{change:.1f}%"
            else:
                row["Change"] = "n/a"
        rows.append(row)
    return rows


def _filename(extension: str) -> str:
    return f"revenue-export-{datetime.now(timezone.utc).strftime('%Y-%m-%d')}.{extension}"


def export_revenue(points: List[RevenuePoint], format: str = "csv") -> Response:
    rows = revenue_rows(points)
    if not rows:
        raise HTTPException(status_code=404, detail="No data to export")

    if format == "csv":
        return Response(
            content=to_csv(rows),
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{_filename("csv")}"'},
        )

    if format == "excel":
        wb = Workbook()
        ws = wb.active
        ws.title = "Revenue"
        headers = list(rows[0].keys())
        ws.append(headers)
        style_excel_header(ws)
        for point in points:
            line = [point.month, point.revenue]
            if point.previous_revenue is not None:
                line.append(point.previous_revenue)
                line.append(
                    round((point.revenue - point.previous_revenue) / point.previous_revenue * 100, 1)
                    if point.previous_revenue else None
                )
            ws.append(line)
        auto_column_width(ws)
        buffer = BytesIO()
        wb.save(buffer)
        return Response(
            content=buffer.getvalue(),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{_filename("xlsx")}"'},
        )

    raise HTTPException(status_code=400, detail=f"Unsupported export format '{format}'")
