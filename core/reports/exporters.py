"""
Tabular downloads: CSV, Excel and PDF.

Every export view builds a ``TabularReport`` (headers plus rows, first column
``S.No`` style numbering from 1) and hands it to one of the ``export_*``
functions, which return a ready ``HttpResponse`` attachment.
"""
import csv
import io
from dataclasses import dataclass, field

import pandas as pd
from django.http import HttpResponse
from django.utils import timezone

from core.reports.pdf_generator import PDFReportGenerator
from core.utils.logging_utils import log_performance

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
# Excel limits sheet titles to 31 characters
MAX_SHEET_NAME = 31


@dataclass
class TabularReport:
    title: str
    headers: list
    rows: list = field(default_factory=list)
    filename_prefix: str = 'report'
    sheet_name: str = 'Sheet1'
    total_label: str = 'Total Records'

    @classmethod
    def numbered(cls, title, headers, records, row_builder, **kwargs):
        """Builds rows as ``[n, *row_builder(record)]`` with n starting at 1."""
        rows = [[index, *row_builder(record)] for index, record in enumerate(records, start=1)]
        return cls(title=title, headers=headers, rows=rows, **kwargs)

    def filename(self, extension, today=None):
        today = today or timezone.localdate()
        return f"{self.filename_prefix}_{today.strftime('%Y-%m-%d')}.{extension}"


def _attachment(response, filename):
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def _cell(value):
    if value is None:
        return ''
    if hasattr(value, 'strftime'):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.strftime('%Y-%m-%d %H:%M:%S')
    return value


@log_performance(threshold_ms=2000)
def export_csv(report):
    response = HttpResponse(content_type='text/csv; charset=utf-8')
    _attachment(response, report.filename('csv'))
    # BOM so Excel opens the file as UTF-8
    response.write('\ufeff')

    writer = csv.writer(response)
    writer.writerow(report.headers)
    for row in report.rows:
        writer.writerow([_cell(value) for value in row])
    return response


def column_width(header):
    return min(50, max(len(str(header)), 10))


@log_performance(threshold_ms=2000)
def export_xlsx(report):
    frame = pd.DataFrame([[_cell(v) for v in row] for row in report.rows], columns=report.headers)
    sheet_name = (report.sheet_name or 'Sheet1')[:MAX_SHEET_NAME]

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
        worksheet = writer.sheets[sheet_name]
        for index, header in enumerate(report.headers):
            letter = worksheet.cell(row=1, column=index + 1).column_letter
            worksheet.column_dimensions[letter].width = column_width(header)

    response = HttpResponse(buffer.getvalue(), content_type=XLSX_CONTENT_TYPE)
    return _attachment(response, report.filename('xlsx'))


@log_performance(threshold_ms=5000)
def export_pdf(report, request=None):
    base_url = request.build_absolute_uri('/') if request is not None else None
    pdf_bytes = PDFReportGenerator.generate_table_report(
        report,
        base_url=base_url,
        rows=[[_cell(v) for v in row] for row in report.rows],
    )
    response = HttpResponse(pdf_bytes, content_type='application/pdf')
    return _attachment(response, report.filename('pdf'))


EXPORTERS = {
    'csv': export_csv,
    'xlsx': export_xlsx,
    'pdf': export_pdf,
}


def export_report(report, fmt, request=None):
    """Dispatch on the format name used in export URLs."""
    if fmt == 'pdf':
        return export_pdf(report, request=request)
    try:
        exporter = EXPORTERS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported export format: {fmt}") from None
    return exporter(report)
