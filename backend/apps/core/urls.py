# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('admin/test-email/', views.send_test_email_view, name='test_email'),
]
