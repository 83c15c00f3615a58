"""django-filter FilterSet for the public product list."""

from django_filters import rest_framework as filters

from .models import Product
from .selectors import search_products


class ProductFilter(filters.FilterSet):
    category = filters.CharFilter(method="filter_category")
    search = filters.CharFilter(method="filter_search")
    minPrice = filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = filters.NumberFilter(field_name="price", lookup_expr="lte")
    min_price = filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["category", "search"]

    def filter_category(self, queryset, name, value):
        # Accepts a category slug or numeric id
        if value.isascii() and value.isdigit():
            return queryset.filter(category_id=int(value))
        return queryset.filter(category__slug=value)

    def filter_search(self, queryset, name, value):
        return search_products(queryset, value)
