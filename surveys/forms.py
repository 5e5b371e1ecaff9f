from django import forms
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from surveys.domain import Question, Survey


class SurveyForm(forms.Form):
    """
    Survey metadata plus the question list built in the page editor.
    Used for both creation and edition.
    """
    name = forms.CharField(
        label=_('Survey Name'),
        max_length=200,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('e.g. Customer Satisfaction 2025'),
        }),
        error_messages={'required': _('Survey name is required.')},
    )
    description = forms.CharField(
        label=_('Description'),
        required=False,
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 3,
            'placeholder': _('What is this survey about?'),
        }),
    )
    project_id_client = forms.CharField(
        label=_('Project ID (client)'),
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    project_id_internal = forms.CharField(
        label=_('Project ID (internal)'),
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    questions_json = forms.JSONField(
        widget=forms.HiddenInput,
        required=False,
        error_messages={'invalid': _('The question list is not valid.')},
    )
    redirect_url = forms.URLField(
        label=_('Redirect URL'),
        max_length=500,
        widget=forms.URLInput(attrs={
            'class': 'form-control',
            'placeholder': 'https://example.com/thank-you',
        }),
        error_messages={'required': _('Redirect URL is required.')},
    )
    max_responses = forms.IntegerField(
        label=_('Maximum responses'),
        required=False,
        min_value=0,
        widget=forms.NumberInput(attrs={
            'class': 'form-control',
            'min': 0,
            'placeholder': _('0 or blank for unlimited'),
        }),
    )

    @classmethod
    def initial_for(cls, survey):
        return {
            'name': survey.name,
            'description': survey.description,
            'project_id_client': survey.project_id_client,
            'project_id_internal': survey.project_id_internal,
            'questions_json': [q.to_api() for q in survey.questions],
            'redirect_url': survey.redirect_url,
            'max_responses': survey.max_responses,
        }

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if not name:
            raise ValidationError(_('Survey name is required.'))
        return name

    def clean_max_responses(self):
        return self.cleaned_data.get('max_responses') or 0

    def clean_questions_json(self):
        data = self.cleaned_data.get('questions_json')
        if not data:
            raise ValidationError(_('Add at least one question.'))
        if not isinstance(data, list):
            raise ValidationError(_('The question list must be a list.'))

        valid_types = [c[0] for c in Question.TYPE_CHOICES]
        questions = []
        for idx, item in enumerate(data, start=1):
            if not isinstance(item, dict):
                raise ValidationError(_('Question #%(n)s is not valid.') % {'n': idx})

            text = str(item.get('questionText') or '').strip()
            if not text:
                raise ValidationError(_('Question #%(n)s has no text.') % {'n': idx})

            answer_type = item.get('answerType') or Question.TYPE_TEXT
            if answer_type not in valid_types:
                raise ValidationError(
                    _('Question #%(n)s has an invalid type (%(t)s).') % {'n': idx, 't': answer_type}
                )

            options = []
            if answer_type == Question.TYPE_MCQ:
                raw_options = item.get('options') or []
                if not isinstance(raw_options, list):
                    raise ValidationError(_('Question #%(n)s has invalid options.') % {'n': idx})
                options = [str(o).strip() for o in raw_options if str(o).strip()]
                if len(options) < 2:
                    raise ValidationError(
                        _("Question '%(q)s' needs at least 2 options.") % {'q': text}
                    )

            questions.append(Question(
                question_text=text,
                answer_type=answer_type,
                options=options,
                id=item.get('_id') or None,
            ))
        return questions

    def to_survey(self, survey_id=''):
        data = self.cleaned_data
        return Survey(
            id=survey_id,
            name=data['name'],
            description=data.get('description', ''),
            questions=data['questions_json'],
            redirect_url=data['redirect_url'],
            max_responses=data['max_responses'],
            project_id_client=data.get('project_id_client', ''),
            project_id_internal=data.get('project_id_internal', ''),
        )
