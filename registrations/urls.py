from django.urls import path

from . import views

app_name = 'registrations'

urlpatterns = [
    # Public sign-up
    path('join/', views.register_view, name='register'),
    path('join/otp/send/', views.otp_send_view, name='otp_send'),
    path('join/otp/verify/', views.otp_verify_view, name='otp_verify'),

    # Admin
    path('', views.RegistrationListView.as_view(), name='list'),
    path('export/<str:fmt>/', views.export_registrations_view, name='export'),
    path('<str:registration_id>/', views.registration_detail_view, name='detail'),
]
