from django import forms
from django.forms import formset_factory

from links.domain import DEFAULT_PARAMETERS, clean_parameters
from surveys.domain import Outcome


class LinkForm(forms.Form):
    name = forms.CharField(
        label='Link Name',
        required=False,
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Vendor A complete'}),
    )
    status = forms.ChoiceField(
        label='Status',
        choices=Outcome.CHOICES,
        initial=Outcome.COMPLETE,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )

    def clean_name(self):
        return self.cleaned_data.get('name', '').strip()


class ParameterForm(forms.Form):
    key = forms.CharField(
        required=False,
        max_length=100,
        strip=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'key'}),
    )
    value = forms.CharField(
        required=False,
        max_length=500,
        strip=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'value'}),
    )


ParameterFormSet = formset_factory(ParameterForm, extra=1, can_delete=True)


def default_parameter_initial():
    return [{'key': key, 'value': value} for key, value in DEFAULT_PARAMETERS]


def parameter_pairs(formset):
    """Ordered ``(key, value)`` pairs from a validated formset, blanks removed."""
    pairs = [
        (form.cleaned_data.get('key', ''), form.cleaned_data.get('value', ''))
        for form in formset.forms
        if form.cleaned_data and not form.cleaned_data.get('DELETE')
    ]
    return clean_parameters(pairs)
