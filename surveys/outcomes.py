"""
Outcome reports: one definition per list the redirect endpoint feeds.
"""
from dataclasses import dataclass

from core.reports.exporters import TabularReport
from core.utils.helpers import format_field_name, format_timestamp, status_color
from surveys.domain import count_by_status


@dataclass(frozen=True)
class OutcomeReport:
    kind: str
    title: str
    subtitle: str
    sheet_name: str
    filename_prefix: str
    date_label: str
    total_label: str

    @property
    def headers(self):
        return ['S.No', 'User ID', 'Project ID', 'IP Address', 'Status', self.date_label]

    @property
    def shows_status_counts(self):
        return self.kind == 'clicks'

    def build_table(self, records):
        return TabularReport.numbered(
            f"{self.title} Report",
            self.headers,
            records,
            lambda r: [r.user_id, r.project_id, r.ip_address, r.status, r.created_at],
            filename_prefix=self.filename_prefix,
            sheet_name=self.sheet_name,
            total_label=self.total_label,
        )


OUTCOME_REPORTS = {
    'complete': OutcomeReport(
        kind='complete',
        title='Completed Surveys',
        subtitle='Track and manage completed survey responses',
        sheet_name='Completed Surveys',
        filename_prefix='completed_surveys',
        date_label='Completed At',
        total_label='Total Completed Surveys',
    ),
    'terminate': OutcomeReport(
        kind='terminate',
        title='Terminate Surveys',
        subtitle='Track and manage all terminate survey responses',
        sheet_name='Terminate Surveys',
        filename_prefix='terminate_surveys',
        date_label='Terminate At',
        total_label='Total Terminate Surveys',
    ),
    'quota_full': OutcomeReport(
        kind='quota_full',
        title='Quota Full Surveys',
        subtitle='Track and manage all quota full survey responses',
        sheet_name='Quota Full Surveys',
        filename_prefix='quota_full_surveys',
        date_label='Quota Full At',
        total_label='Total Quota Full Surveys',
    ),
    'clicks': OutcomeReport(
        kind='clicks',
        title='Total Click Surveys',
        subtitle='Every recorded click with its outcome',
        sheet_name='Total Click Surveys',
        filename_prefix='total_click_surveys',
        date_label='Clicked At',
        total_label='Total Surveys',
    ),
}


def status_summary(records):
    """Per-status counts with badge colours for the clicks page."""
    counts = count_by_status(records)
    return [
        {'status': status, 'label': format_field_name(status), 'count': count, 'color': status_color(status)}
        for status, count in counts.items()
    ]


def raw_data_rows(record):
    """``(label, value)`` pairs for the raw-data panel, dates formatted."""
    rows = []
    for key, value in record.raw_data.items():
        if key == 'createdAt' and record.created_at:
            value = format_timestamp(record.created_at)
        elif isinstance(value, dict):
            value = ', '.join(f"{k}: {v}" for k, v in value.items())
        rows.append((format_field_name(key), value))
    return rows
