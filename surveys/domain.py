"""
surveys/domain.py
Survey-side records as returned by the survey API.
The panel never persists these; they are rebuilt from every response.
"""
from dataclasses import dataclass, field
from datetime import datetime

from core.utils.helpers import parse_api_datetime, to_int


class Outcome:
    """Status recorded by the redirect endpoint for a respondent."""

    COMPLETE = 'complete'
    TERMINATE = 'terminate'
    QUOTA_FULL = 'quota_full'

    CHOICES = [
        (COMPLETE, 'Complete'),
        (TERMINATE, 'Terminate'),
        (QUOTA_FULL, 'Quota Full'),
    ]

    @classmethod
    def values(cls):
        return [value for value, _ in cls.CHOICES]


@dataclass
class Question:
    TYPE_TEXT = 'text'
    TYPE_MCQ = 'mcq'
    TYPE_CHOICES = [
        (TYPE_TEXT, 'Text'),
        (TYPE_MCQ, 'Multiple Choice'),
    ]

    question_text: str
    answer_type: str = TYPE_TEXT
    options: list = field(default_factory=list)
    id: str | None = None

    @classmethod
    def from_api(cls, payload):
        return cls(
            id=payload.get('_id') or payload.get('id'),
            question_text=payload.get('questionText') or '',
            answer_type=payload.get('answerType') or cls.TYPE_TEXT,
            options=list(payload.get('options') or []),
        )

    def to_api(self):
        data = {
            'questionText': self.question_text,
            'answerType': self.answer_type,
            'options': self.options if self.answer_type == self.TYPE_MCQ else [],
        }
        if self.id:
            data['_id'] = self.id
        return data


@dataclass
class QuestionStats:
    total: int = 0
    text: int = 0
    mcq: int = 0

    @classmethod
    def from_questions(cls, questions):
        text = sum(1 for q in questions if q.answer_type == Question.TYPE_TEXT)
        mcq = sum(1 for q in questions if q.answer_type == Question.TYPE_MCQ)
        return cls(total=len(questions), text=text, mcq=mcq)

    @classmethod
    def from_api(cls, payload, questions=()):
        """Read ``{totalQuestions, questionTypes{text, mcq}}``; count ``questions`` when absent."""
        if not isinstance(payload, dict):
            return cls.from_questions(list(questions))
        types = payload.get('questionTypes') or {}
        return cls(
            total=to_int(payload.get('totalQuestions')),
            text=to_int(types.get('text')),
            mcq=to_int(types.get('mcq')),
        )


@dataclass
class Survey:
    id: str
    name: str
    description: str = ''
    questions: list = field(default_factory=list)
    redirect_url: str = ''
    max_responses: int = 0
    response_count: int = 0
    is_active: bool = False
    created_at: datetime | None = None
    generated_link: str = ''
    project_id_client: str = ''
    project_id_internal: str = ''
    is_full: bool = False
    question_stats: QuestionStats | None = None

    @classmethod
    def from_api(cls, payload):
        return cls(
            id=str(payload.get('_id') or payload.get('id') or ''),
            name=payload.get('surveyName') or payload.get('name') or '',
            description=payload.get('description') or '',
            questions=[Question.from_api(q) for q in payload.get('questions') or []],
            redirect_url=payload.get('redirectUrl') or '',
            max_responses=to_int(payload.get('maxResponses')),
            response_count=to_int(payload.get('responseCount')),
            is_active=bool(payload.get('isActive', False)),
            created_at=parse_api_datetime(payload.get('createdAt')),
            generated_link=payload.get('generatedLink') or '',
            project_id_client=payload.get('projectIDfromClient') or '',
            project_id_internal=payload.get('projectIDfromInter') or '',
        )

    @property
    def quota_reached(self):
        return self.max_responses > 0 and self.response_count == self.max_responses

    def to_api(self):
        return {
            'surveyName': self.name,
            'description': self.description,
            'projectIDfromClient': self.project_id_client,
            'projectIDfromInter': self.project_id_internal,
            'questions': [q.to_api() for q in self.questions],
            'redirectUrl': self.redirect_url,
            'maxResponses': self.max_responses,
        }


def annotate_quota(survey):
    """
    Mark a survey full when its response count matches the quota exactly.
    A full survey is always shown inactive, whatever the API says.
    maxResponses == 0 means no quota.
    """
    if survey.quota_reached:
        survey.is_full = True
        survey.is_active = False
    else:
        survey.is_full = False
    return survey


@dataclass
class ClickRecord:
    """One respondent outcome captured by the redirect endpoint."""

    HIDDEN_FIELDS = ('_id', '__v')

    id: str
    survey_id: str = ''
    user_id: str = ''
    project_id: str = ''
    ip_address: str = ''
    status: str = ''
    created_at: datetime | None = None
    raw_data: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload):
        dynamic = payload.get('dynamicFields') or {}
        return cls(
            id=str(payload.get('_id') or payload.get('id') or ''),
            survey_id=str(payload.get('surveyId') or ''),
            user_id=str(payload.get('userId') or dynamic.get('uid') or ''),
            project_id=str(payload.get('projectId') or dynamic.get('pid') or ''),
            ip_address=payload.get('ipaddress') or payload.get('ipAddress') or '',
            status=payload.get('status') or '',
            created_at=parse_api_datetime(payload.get('createdAt')),
            raw_data={k: v for k, v in payload.items() if k not in cls.HIDDEN_FIELDS},
        )


def count_by_status(records):
    """Case-insensitive tally of records per outcome status."""
    counts = {status: 0 for status in Outcome.values()}
    for record in records:
        key = (record.status or '').lower()
        if key in counts:
            counts[key] += 1
    return counts


@dataclass
class Submission:
    id: str
    answers: dict = field(default_factory=dict)
    submitted_at: datetime | None = None

    @classmethod
    def from_api(cls, payload):
        answers = {}
        for item in payload.get('responses') or []:
            answers[str(item.get('questionId'))] = item.get('answer')
        return cls(
            id=str(payload.get('_id') or payload.get('id') or ''),
            answers=answers,
            submitted_at=parse_api_datetime(payload.get('submittedAt')),
        )

    def answer_for(self, question, missing='-'):
        value = self.answers.get(str(question.id))
        if value is None or value == '':
            return missing
        if isinstance(value, (list, tuple)):
            return ', '.join(str(v) for v in value)
        return value
