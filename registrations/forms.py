from django import forms
from django.core.exceptions import ValidationError

from registrations import domain
from registrations.domain import Registration

_select = {'class': 'form-select'}
_text = {'class': 'form-control'}


def _radio(choices, label):
    return forms.ChoiceField(label=label, choices=choices, widget=forms.RadioSelect)


def _dropdown(choices, label, placeholder):
    return forms.ChoiceField(
        label=label,
        choices=[('', placeholder), *choices],
        widget=forms.Select(attrs=_select),
    )


class RegistrationForm(forms.Form):
    """
    Panelist sign-up. Every answer is required except the job title.
    Submission also needs the email to be verified by OTP in this session.
    """
    full_name = forms.CharField(label='Full Name', max_length=200, widget=forms.TextInput(attrs=_text))
    age = _radio(domain.AGE_CHOICES, 'Age')
    gender = _radio(domain.GENDER_CHOICES, 'Gender')
    location = forms.CharField(
        label='Country, City & State of Residence', max_length=300, widget=forms.TextInput(attrs=_text),
    )
    education = _dropdown(domain.EDUCATION_CHOICES, 'Highest Level of Education', 'Select education level')
    email = forms.EmailField(label='Primary Email Address', widget=forms.EmailInput(attrs=_text))

    household_size = _radio(domain.HOUSEHOLD_CHOICES, 'How many people live in your household (including you)?')
    marital_status = _radio(domain.MARITAL_CHOICES, 'Marital Status')
    income = _dropdown(domain.INCOME_CHOICES, 'Annual Household Income', 'Select income range')
    home_ownership = _radio(domain.HOME_CHOICES, 'Do you own or rent your home?')

    employment_status = _dropdown(
        domain.EMPLOYMENT_CHOICES, 'Current Employment Status', 'Select employment status',
    )
    job_title = forms.CharField(
        label='Job Title (if employed)', required=False, max_length=200, widget=forms.TextInput(attrs=_text),
    )
    industry = _dropdown(domain.INDUSTRY_CHOICES, 'Which industry do you work in?', 'Select your industry')
    experience = _radio(domain.EXPERIENCE_CHOICES, 'How many years of work experience do you have?')
    designation = _dropdown(domain.DESIGNATION_CHOICES, 'Designation Level', 'Select designation level')
    org_size = _dropdown(
        domain.ORG_SIZE_CHOICES, 'How many employees work in your organization?', 'Select organization size',
    )
    purchase_decision = _radio(domain.YES_NO_CHOICES, 'Do you make purchase decisions for your household?')
    vehicle = _radio(domain.VEHICLE_CHOICES, 'Do you own a vehicle?')

    data_consent = _radio(
        domain.YES_NO_CHOICES, 'Do you consent to your data being used for research purposes only?',
    )
    nda = _radio(domain.YES_NO_CHOICES, 'Do you agree not to disclose any study-related information?')
    age_confirm = _radio(domain.YES_NO_CHOICES, 'Are you 18 years or older?')
    communication = _radio(
        domain.YES_NO_CHOICES, 'Do you agree to receive communication regarding research opportunities?',
    )
    final_consent = forms.BooleanField(
        label='I have read, understood, and agree to all terms outlined above. '
              'I voluntarily consent to participate in this research.',
        error_messages={'required': 'Please agree to the terms before submitting.'},
    )

    def __init__(self, *args, verified_email=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.verified_email = (verified_email or '').lower()

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()

    def clean_age_confirm(self):
        value = self.cleaned_data.get('age_confirm')
        if value != 'Yes':
            raise ValidationError('You must confirm you are 18 years or older.')
        return value

    def clean(self):
        cleaned_data = super().clean()
        email = cleaned_data.get('email')
        if email and email != self.verified_email:
            raise ValidationError(
                'Please verify your email before submitting.', code='email_not_verified',
            )
        return cleaned_data

    @property
    def email_not_verified(self):
        return any(e.code == 'email_not_verified' for e in self.non_field_errors().as_data())

    def to_registration(self):
        values = {name: self.cleaned_data.get(name, '') for name in domain.API_FIELDS}
        return Registration(email_verified=True, **values)
