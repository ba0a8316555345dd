# apps/auth/account_urls.py

from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('address/', views.AddressView.as_view(), name='address'),

    # Back-office user management
    path('admin/users/', views.AdminUserListView.as_view(), name='admin_user_list'),
    path('admin/users/<int:pk>/', views.AdminUserDetailView.as_view(), name='admin_user_detail'),
]
