# apps/ecommerce/apps.py

from django.apps import AppConfig


class EcommerceConfig(AppConfig):
    """Storefront app configuration"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.ecommerce'
    verbose_name = 'E-commerce'
