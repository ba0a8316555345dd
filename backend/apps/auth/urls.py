# apps/auth/urls.py

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'auth'

urlpatterns = [
    # Signup and token flows
    path('signup/', views.SignupView.as_view(), name='signup'),
    path('verify/', views.VerifyEmailView.as_view(), name='verify'),
    path('auto-login/', views.AutoLoginView.as_view(), name='auto_login'),
    path('resend-verification/', views.resend_verification, name='resend_verification'),
    path('forgot-password/', views.ForgotPasswordView.as_view(), name='forgot_password'),
    path('reset-password/', views.ResetPasswordView.as_view(), name='reset_password'),

    # JWT sessions
    path('login/', views.LoginView.as_view(), name='login'),
    path('logout/', views.logout, name='logout'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Own account
    path('profile/', views.UserProfileView.as_view(), name='profile'),
]
