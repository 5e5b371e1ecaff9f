"""
Validators shared by the views.
Query-string and form values are checked here before they reach the survey API.
"""
import re

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from core.services.dashboard_service import DEFAULT_PERIOD, PERIODS

MAX_SEARCH_LENGTH = 100
OTP_PATTERN = re.compile(r'^\d{6}$')
# Mongo ObjectIds, plus plain slugs for older records
ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


class QueryValidator:
    """Validators for list filters: search, sorting, paging and dashboard period."""

    @staticmethod
    def validate_search(term):
        """Strips the search term and checks its length. Blank means no filter."""
        if not term:
            return ''
        term = str(term).strip()
        if len(term) > MAX_SEARCH_LENGTH:
            raise ValidationError(
                f"Search term is too long (maximum {MAX_SEARCH_LENGTH} characters)"
            )
        return term

    @staticmethod
    def validate_period(period):
        """Dashboard filter. Unknown values fall back to the default period."""
        if period in PERIODS:
            return period
        return DEFAULT_PERIOD

    @staticmethod
    def validate_sort(sort_by, sort_order, allowed_fields, default_field='createdAt'):
        """Returns a ``(field, order)`` pair restricted to the allowed columns."""
        field = sort_by if sort_by in allowed_fields else default_field
        order = sort_order if sort_order in ('asc', 'desc') else 'desc'
        return field, order

    @staticmethod
    def validate_page(page_str):
        """Page numbers start at 1; anything unparseable is page 1."""
        try:
            page = int(page_str)
        except (TypeError, ValueError):
            return 1
        return max(page, 1)


class IdentifierValidator:

    @staticmethod
    def validate_id(value, label="ID"):
        if value is None or str(value).strip() == "":
            raise ValidationError(f"{label} is missing")
        value = str(value).strip()
        if not ID_PATTERN.match(value):
            raise ValidationError(f"Invalid {label}: '{value}'")
        return value


class ContactValidator:
    """Email and one-time-code checks for the registration flow."""

    @staticmethod
    def validate_email_address(email):
        email = (email or '').strip()
        if not email:
            raise ValidationError("Please enter your email first")
        try:
            validate_email(email)
        except ValidationError:
            raise ValidationError("Please enter a valid email address")
        return email.lower()

    @staticmethod
    def validate_otp(code):
        code = (code or '').strip()
        if not OTP_PATTERN.match(code):
            raise ValidationError("Please enter a valid 6-digit OTP")
        return code
