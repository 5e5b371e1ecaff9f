# surveys/views/__init__.py
"""
Survey views package.
Exports all views from submodules for convenient imports.
"""
from . import crud_views
from . import outcome_views
from . import report_views

from .crud_views import (
    SurveyListView,
    survey_create_view,
    survey_detail_view,
    survey_delete_view,
    survey_toggle_view,
    survey_not_live_view,
)
from .report_views import (
    survey_submissions_view,
    export_submissions_view,
)
from .outcome_views import (
    outcome_list_view,
    outcome_raw_data_view,
    export_outcomes_view,
)
