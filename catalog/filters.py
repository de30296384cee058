import django_filters

from .models import Work


class CatalogEntityFilter(django_filters.FilterSet):
    """
    Query filters shared by every catalog table.

    Declared without a model so the same set applies to whichever table a
    category route resolves to. ``category`` is not a filter here: the views
    resolve it through the registry.
    """

    search = django_filters.CharFilter(method="filter_search")
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    hit = django_filters.BooleanFilter(field_name="hit")
    popular = django_filters.BooleanFilter(field_name="popular")
    new = django_filters.BooleanFilter(field_name="is_new")
    availability = django_filters.CharFilter(field_name="availability", lookup_expr="iexact")

    def filter_search(self, queryset, name, value):
        return queryset.search(value)


class PublicationFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    tag = django_filters.CharFilter(method="filter_tag")

    def filter_search(self, queryset, name, value):
        return queryset.search(value)

    def filter_tag(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        # JSON containment is not available on SQLite; tags lists are short.
        ids = [obj.pk for obj in queryset.only("pk", "tags") if value in (obj.tags or [])]
        return queryset.filter(pk__in=ids)


class WorkFilter(django_filters.FilterSet):
    productId = django_filters.CharFilter(field_name="product_id")
    productType = django_filters.CharFilter(field_name="product_type")
    category = django_filters.CharFilter(method="filter_category")

    class Meta:
        model = Work
        fields = ["productId", "productType", "category"]

    def filter_category(self, queryset, name, value):
        value = (value or "").strip()
        if not value or value == "Все работы":
            return queryset
        return queryset.filter(category=value)
