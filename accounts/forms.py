from django import forms


class AdminLoginForm(forms.Form):
    """Credentials checked by the survey API, not by django.contrib.auth."""

    username = forms.CharField(
        label='Username',
        max_length=150,
        widget=forms.TextInput(attrs={
            'class': 'form-control form-control-lg',
            'placeholder': 'Enter your username',
            'autocomplete': 'username',
            'autofocus': True,
        }),
        error_messages={'required': 'Username is required.'},
    )
    password = forms.CharField(
        label='Password',
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control form-control-lg',
            'placeholder': 'Enter your password',
            'autocomplete': 'current-password',
        }),
        error_messages={'required': 'Password is required.'},
    )
