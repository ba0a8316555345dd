# config/urls.py

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def api_root(request):
    """
    API Root endpoint
    """
    return Response({
        'message': 'Welcome to the Remoof API',
        'version': '1.0.0',
        'status': 'operational',
        'documentation': {
            'swagger': request.build_absolute_uri('/api/docs/'),
            'redoc': request.build_absolute_uri('/api/redoc/'),
            'schema': request.build_absolute_uri('/api/schema/')
        },
        'quick_start': {
            'signup': 'POST /api/v1/auth/signup/',
            'login': 'POST /api/v1/auth/login/',
            'products': 'GET /api/v1/products/',
            'health_check': 'GET /health/'
        }
    })


urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/', api_root, name='api-root'),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # Authentication
    path('api/v1/auth/', include('apps.auth.urls')),

    # Storefront and back office
    path('api/v1/', include('apps.auth.account_urls')),
    path('api/v1/', include('apps.ecommerce.urls')),
    path('api/v1/', include('apps.faq.urls')),
    path('api/v1/', include('apps.core.urls')),

    # Health
    path('health/', include('apps.core.health_urls')),
]
