"""
Redirect links: URLs that send a respondent to the API's click endpoint with
a target outcome status and arbitrary tracking parameters.
"""
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import quote

from core.utils.helpers import parse_api_datetime

CLICK_PATH = '/api/survey/click'

# Parameters offered on a blank form
DEFAULT_PARAMETERS = [('pid', '1123'), ('uid', '12134')]

# Characters left untouched, matching JavaScript's encodeURIComponent
_UNRESERVED = "!*'()"


def encode_component(value):
    return quote(str(value), safe=_UNRESERVED)


def clean_parameters(pairs):
    """Drop pairs whose key or value is blank. Order is preserved."""
    return [(key, value) for key, value in pairs if str(key).strip() and str(value).strip()]


def build_click_url(base_url, pairs, status):
    """
    Preview URL for a link.
    Every non-blank pair is percent-encoded in order, then ``status`` is appended last.
    """
    query = [f"{encode_component(key)}={encode_component(value)}" for key, value in clean_parameters(pairs)]
    query.append(f"status={encode_component(status)}")
    return f"{base_url.rstrip('/')}{CLICK_PATH}?{'&'.join(query)}"


@dataclass
class RedirectLink:
    id: str
    name: str = ''
    url: str = ''
    status: str = ''
    parameters: dict = field(default_factory=dict)
    is_active: bool = True
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, payload):
        is_active = payload.get('isActive')
        return cls(
            id=str(payload.get('_id') or payload.get('id') or ''),
            name=payload.get('name') or '',
            url=payload.get('url') or '',
            status=payload.get('status') or '',
            parameters=dict(payload.get('parameters') or {}),
            # A link without the flag predates activation and counts as active
            is_active=is_active is not False,
            created_at=parse_api_datetime(payload.get('createdAt')),
        )

    @property
    def display_name(self):
        return self.name or 'Unnamed Link'
