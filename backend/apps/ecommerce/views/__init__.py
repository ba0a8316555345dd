# apps/ecommerce/views/__init__.py
