# apps/core/utils.py

from urllib.parse import urlencode

from django.conf import settings

CURRENCY_SYMBOLS = {
    'usd': '$',
    'eur': '€',
    'gbp': '£',
    'dkk': 'kr ',
}


def format_minor_units(amount, currency=None):
    """
    Format an integer amount of minor currency units for display.

    Args:
        amount (int): Amount in cents/øre.
        currency (str, optional): ISO currency code, defaults to STORE_CURRENCY.

    Returns:
        str: e.g. "$1,299.00"
    """
    currency = (currency or settings.STORE_CURRENCY).lower()
    value = (amount or 0) / 100
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{value:,.2f}"
    return f"{value:,.2f} {currency.upper()}"


def build_frontend_url(path, **params):
    """Absolute storefront URL with query parameters"""
    url = f"{settings.APP_BASE_URL.rstrip('/')}/{path.lstrip('/')}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url
