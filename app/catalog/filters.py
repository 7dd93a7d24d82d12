import django_filters as filters
from django.db.models import Q

from catalog.models import Product
from core.helpers import is_valid_object_id


class ProductFilter(filters.FilterSet):
    """
    Query filters for the public product list.

    ?search=shoe&category=Footwear&price_min=10&price_max=100&featured=true&sort=-price
    """

    search = filters.CharFilter(method="filter_search")
    category = filters.CharFilter(method="filter_category")
    price_min = filters.NumberFilter(field_name="price", lookup_expr="gte")
    price_max = filters.NumberFilter(field_name="price", lookup_expr="lte")
    brand = filters.CharFilter(field_name="brand", lookup_expr="iexact")
    sort = filters.OrderingFilter(
        fields=(
            ("price", "price"),
            ("created_at", "createdAt"),
            ("name", "name"),
            ("ratings", "ratings"),
        ),
    )

    class Meta:
        model = Product
        fields = ["featured", "search", "category", "price_min", "price_max", "brand"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_category(self, queryset, name, value):
        # 24-hex values are ids; anything else is a case-insensitive name
        if is_valid_object_id(value):
            return queryset.filter(category_id=value.lower())
        return queryset.filter(category__name__iexact=value)
