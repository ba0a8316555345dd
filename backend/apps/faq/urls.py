# apps/faq/urls.py

from django.urls import path
from . import views

app_name = 'faq'

urlpatterns = [
    path('faqs/', views.public_faq_list, name='public_list'),
    path('admin/faqs/', views.AdminFaqListView.as_view(), name='admin_list'),
    path('admin/faqs/<int:pk>/', views.AdminFaqDetailView.as_view(), name='admin_detail'),
    path('admin/faqs/<int:pk>/move/', views.AdminFaqMoveView.as_view(), name='admin_move'),
]
