"""core/reports/pdf_generator.py"""
import logging

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone
from weasyprint import HTML

logger = logging.getLogger(__name__)


class PDFReportGenerator:
    """
    PDF reports built from HTML templates.
    Uses WeasyPrint for the conversion.
    """

    DEFAULT_TEMPLATE = 'core/reports/table_report.html'

    @staticmethod
    def build_context(report, **extra):
        """Template context for a ``TabularReport``."""
        return {
            'title': report.title,
            'headers': report.headers,
            'rows': report.rows,
            'total_label': report.total_label,
            'total': len(report.rows),
            'generated_at': timezone.localtime(),
            'company_name': getattr(settings, 'COMPANY_NAME', 'SurveyDesk'),
            **extra,
        }

    @classmethod
    def generate_table_report(cls, report, template_name=None, base_url=None, **extra):
        """Render a table report and return the PDF bytes."""
        html_string = render_to_string(template_name or cls.DEFAULT_TEMPLATE, cls.build_context(report, **extra))
        logger.debug("Rendering PDF report '%s' with %d rows", report.title, len(report.rows))
        return HTML(string=html_string, base_url=base_url).write_pdf()
