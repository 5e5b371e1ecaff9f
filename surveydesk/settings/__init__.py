"""Dynamic settings loader for SurveyDesk."""

import os

from decouple import config


def _get_env() -> str:
    """Return the active environment, defaulting to ``local`` for dev."""
    env = (config('DJANGO_ENV', default='local') or 'local').lower()
    os.environ.setdefault('DJANGO_ENV', env)
    return env


_DJANGO_ENV = _get_env()

if _DJANGO_ENV in {'production', 'prod'}:
    from .production import *  # noqa: F401,F403
elif _DJANGO_ENV in {'test', 'testing'}:
    from .test import *  # noqa: F401,F403
elif _DJANGO_ENV == 'base':
    from .base import *  # noqa: F401,F403
else:
    # Default to local settings for developer convenience
    from .local import *  # noqa: F401,F403
