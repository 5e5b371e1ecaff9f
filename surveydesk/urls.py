# surveydesk/urls.py
from django.urls import path, include

urlpatterns = [
    # Authentication
    path("", include("accounts.urls")),

    # Apps
    path("", include("core.urls")),
    path("surveys/", include("surveys.urls")),
    path("links/", include("links.urls")),
    path("registrations/", include("registrations.urls")),
]

# Custom error handlers
handler404 = 'surveydesk.views.custom_404'
handler500 = 'surveydesk.views.custom_500'
