"""
Unit tests for core/validators.py
"""
import pytest
from django.core.exceptions import ValidationError

from core.validators import ContactValidator, IdentifierValidator, QueryValidator


class TestQueryValidator:

    def test_validate_search_strips(self):
        assert QueryValidator.validate_search('  brand  ') == 'brand'
        assert QueryValidator.validate_search(None) == ''

    def test_validate_search_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            QueryValidator.validate_search('x' * 101)

    def test_validate_period(self):
        assert QueryValidator.validate_period('weekly') == 'weekly'
        assert QueryValidator.validate_period('daily') == 'monthly'
        assert QueryValidator.validate_period(None) == 'monthly'

    def test_validate_sort_restricts_fields(self):
        fields = ('createdAt', 'surveyName')
        assert QueryValidator.validate_sort('surveyName', 'asc', fields) == ('surveyName', 'asc')
        assert QueryValidator.validate_sort('password', 'sideways', fields) == ('createdAt', 'desc')

    def test_validate_page(self):
        assert QueryValidator.validate_page('3') == 3
        assert QueryValidator.validate_page('-2') == 1
        assert QueryValidator.validate_page('abc') == 1
        assert QueryValidator.validate_page(None) == 1


class TestIdentifierValidator:

    def test_object_id(self):
        assert IdentifierValidator.validate_id(' 65a1f0c2e4b0a1b2c3d4e5f6 ') == '65a1f0c2e4b0a1b2c3d4e5f6'

    def test_missing(self):
        with pytest.raises(ValidationError, match="survey ID is missing"):
            IdentifierValidator.validate_id('', label="survey ID")

    def test_path_characters_rejected(self):
        with pytest.raises(ValidationError):
            IdentifierValidator.validate_id('../admin')


class TestContactValidator:

    def test_email_lowercased(self):
        assert ContactValidator.validate_email_address(' Ada@Example.COM ') == 'ada@example.com'

    def test_email_missing(self):
        with pytest.raises(ValidationError, match="Please enter your email first"):
            ContactValidator.validate_email_address('')

    def test_email_invalid(self):
        with pytest.raises(ValidationError, match="Please enter a valid email address"):
            ContactValidator.validate_email_address('not-an-email')

    @pytest.mark.parametrize('code', ['12345', '1234567', 'abcdef', ''])
    def test_otp_invalid(self, code):
        with pytest.raises(ValidationError, match="6-digit"):
            ContactValidator.validate_otp(code)

    def test_otp_valid(self):
        assert ContactValidator.validate_otp(' 123456 ') == '123456'
