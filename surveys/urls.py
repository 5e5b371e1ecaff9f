from django.urls import path

from .views import crud_views, outcome_views, report_views

app_name = "surveys"

urlpatterns = [
    # CRUD
    path("", crud_views.SurveyListView.as_view(), name="list"),
    path("create/", crud_views.survey_create_view, name="create"),
    path("not-live/", crud_views.survey_not_live_view, name="not_live"),

    # Outcome reports
    path("outcomes/<str:kind>/", outcome_views.outcome_list_view, name="outcomes"),
    path("outcomes/<str:kind>/export/<str:fmt>/", outcome_views.export_outcomes_view, name="outcomes_export"),
    path("outcomes/<str:kind>/<str:record_id>/", outcome_views.outcome_raw_data_view, name="outcome_raw"),

    path("<str:survey_id>/", crud_views.survey_detail_view, name="detail"),
    path("<str:survey_id>/delete/", crud_views.survey_delete_view, name="delete"),
    path("<str:survey_id>/toggle/", crud_views.survey_toggle_view, name="toggle"),

    # Responses
    path("<str:survey_id>/responses/", report_views.survey_submissions_view, name="submissions"),
    path("<str:survey_id>/responses/export/<str:fmt>/", report_views.export_submissions_view, name="submissions_export"),
]
