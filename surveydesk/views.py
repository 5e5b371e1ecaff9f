# surveydesk/views.py

from django.shortcuts import render


def custom_404(request, exception=None):
    """Custom 404 page (page not found)."""
    return render(request, 'errors/404.html', status=404)


def custom_500(request):
    """Custom 500 page (server error)."""
    return render(request, 'errors/500.html', status=500)
