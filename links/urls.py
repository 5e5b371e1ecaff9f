from django.urls import path

from . import views

app_name = 'links'

urlpatterns = [
    path('', views.link_list_view, name='list'),
    path('create/', views.link_create_view, name='create'),
    path('<str:link_id>/delete/', views.link_delete_view, name='delete'),
    path('<str:link_id>/toggle/', views.link_toggle_view, name='toggle'),
]
