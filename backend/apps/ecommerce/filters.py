import django_filters
from .models import Order, Product


class ProductFilter(django_filters.FilterSet):
    """Filter for catalogue products"""

    category = django_filters.CharFilter(
        field_name='category',
        lookup_expr='iexact',
        label='Category'
    )

    min_price = django_filters.NumberFilter(
        field_name='price',
        lookup_expr='gte',
        label='Min Price'
    )

    max_price = django_filters.NumberFilter(
        field_name='price',
        lookup_expr='lte',
        label='Max Price'
    )

    in_stock = django_filters.BooleanFilter(
        method='filter_in_stock',
        label='In Stock'
    )

    class Meta:
        model = Product
        fields = ['category', 'min_price', 'max_price', 'in_stock']

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stock__gt=0)
        return queryset.filter(stock=0)


class OrderFilter(django_filters.FilterSet):
    """Filter for back-office order listings"""

    status = django_filters.MultipleChoiceFilter(
        field_name='status',
        choices=Order.Status.choices,
        label='Status'
    )

    customer_email = django_filters.CharFilter(
        field_name='user__email',
        lookup_expr='icontains',
        label='Customer Email'
    )

    date_from = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__gte',
        label='From Date'
    )

    date_to = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__lte',
        label='To Date'
    )

    class Meta:
        model = Order
        fields = ['status', 'customer_email', 'date_from', 'date_to']
