"""
Panelist registrations and the choice lists offered on the sign-up form.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime

from core.utils.helpers import parse_api_datetime


def _same(values):
    return [(value, value) for value in values]


AGE_CHOICES = _same(['18–24', '25–34', '35–44', '45–54', '55+'])
GENDER_CHOICES = _same(['Male', 'Female', 'Non-binary', 'Prefer not to say'])
HOUSEHOLD_CHOICES = _same(['1', '2', '3–4', '5 or more'])
MARITAL_CHOICES = _same(['Single', 'Married', 'Divorced', 'Widowed'])
HOME_CHOICES = _same(['Own', 'Rent'])
EXPERIENCE_CHOICES = _same(['0-1 year', '2-5 years', '6–10 years', '10+ years'])
YES_NO_CHOICES = _same(['Yes', 'No'])
VEHICLE_CHOICES = _same(['Car', 'Two-Wheeler', 'None'])

EDUCATION_CHOICES = [
    ('less-high', 'Less than High School'),
    ('high', 'High School / Diploma'),
    ('grad', 'Graduate'),
    ('postgrad', 'Postgraduate'),
    ('doctorate', 'Doctorate'),
]
INCOME_CHOICES = [
    ('$0-25', '$0 – $25,000'),
    ('$25-50', '$25,000 – $50,000'),
    ('$51-100', '$51,000 – $100,000'),
    ('$100-150', '$100,000 – $150,000'),
    ('$150+', '$150,000+'),
]
EMPLOYMENT_CHOICES = [
    ('full', 'Employed Full-Time'),
    ('part', 'Employed Part-Time'),
    ('self', 'Self-Employed'),
    ('student', 'Student'),
    ('homemaker', 'Homemaker'),
    ('retired', 'Retired'),
    ('unemployed', 'Unemployed'),
]
DESIGNATION_CHOICES = [
    ('entry', 'Entry-Level'),
    ('mid', 'Mid-Level'),
    ('senior', 'Senior Management'),
    ('director', 'Director / C-Suite'),
]
ORG_SIZE_CHOICES = [
    ('<10', 'Less than 10'),
    ('10-50', '10–50'),
    ('51-200', '51–200'),
    ('201-500', '201–500'),
    ('500-1000', '500–1,000'),
    ('1000-2500', '1,000–2,500'),
    ('2500+', '2,500+'),
]
INDUSTRY_CHOICES = _same([
    "Agriculture", "Forestry", "Fishing", "Extraction / Mining", "Energy", "Oil & Gas", "Utilities",
    "Construction", "Electrical / Plumbing / HVAC", "Carpentry & Installations",
    "Maintenance Services (Landscaping, Snow Removal, etc.)", "Manufacturing",
    "Chemicals / Plastics / Rubber", "Consumer Packaged Goods (CPG)", "Printing & Publishing",
    "Food & Beverage Manufacturing", "Transportation", "Shipping / Distribution", "Wholesale",
    "Retail", "E-commerce", "Consumer Electronics", "Automotive (Sales/Service)", "Hospitality",
    "Tourism", "Personal Services (Housekeeping, Gardening, Child Care, etc.)", "Healthcare",
    "Animal Healthcare / Veterinary Medicine", "Bio-Tech / Pharmaceuticals", "Information Technology",
    "Computer Hardware", "Computer Software", "Telecommunications", "Internet",
    "Banking / Financial Services", "Insurance", "Architecture", "Engineering", "Legal Services",
    "Consulting (Management / Business Consulting)", "Accounting", "Real Estate",
    "Brokerage (Real Estate / Financial)", "Advertising & Public Relations", "Market Research",
    "Environmental Services", "Government / Public Sector", "Military", "Social Services",
    "Education", "Media", "Entertainment", "Communications", "Other",
])

# API key for every attribute that maps one-to-one
API_FIELDS = {
    'full_name': 'fullName',
    'age': 'age',
    'gender': 'gender',
    'location': 'location',
    'education': 'education',
    'email': 'email',
    'household_size': 'householdSize',
    'marital_status': 'maritalStatus',
    'income': 'income',
    'home_ownership': 'homeOwnership',
    'employment_status': 'employmentStatus',
    'job_title': 'jobTitle',
    'industry': 'industry',
    'experience': 'experience',
    'designation': 'designation',
    'org_size': 'orgSize',
    'purchase_decision': 'purchaseDecision',
    'vehicle': 'vehicle',
    'data_consent': 'dataConsent',
    'nda': 'nda',
    'age_confirm': 'ageConfirm',
    'communication': 'communication',
}

OPTIONAL_FIELDS = ('job_title',)


@dataclass
class Registration:
    id: str = ''
    full_name: str = ''
    age: str = ''
    gender: str = ''
    location: str = ''
    education: str = ''
    email: str = ''
    household_size: str = ''
    marital_status: str = ''
    income: str = ''
    home_ownership: str = ''
    employment_status: str = ''
    job_title: str = ''
    industry: str = ''
    experience: str = ''
    designation: str = ''
    org_size: str = ''
    purchase_decision: str = ''
    vehicle: str = ''
    data_consent: str = ''
    nda: str = ''
    age_confirm: str = ''
    communication: str = ''
    email_verified: bool = False
    created_at: datetime | None = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload):
        values = {attr: payload.get(key) or '' for attr, key in API_FIELDS.items()}
        known = set(API_FIELDS.values()) | {'_id', 'id', 'emailVerified', 'createdAt', '__v'}
        return cls(
            id=str(payload.get('_id') or payload.get('id') or ''),
            email_verified=bool(payload.get('emailVerified', False)),
            created_at=parse_api_datetime(payload.get('createdAt')),
            extra={k: v for k, v in payload.items() if k not in known},
            **values,
        )

    def to_api(self):
        data = {key: getattr(self, attr) for attr, key in API_FIELDS.items()}
        data['emailVerified'] = self.email_verified
        return data

    def missing_required(self):
        """Attribute names of required answers that are still blank."""
        return [
            f.name for f in fields(self)
            if f.name in API_FIELDS and f.name not in OPTIONAL_FIELDS and not str(getattr(self, f.name)).strip()
        ]
