import logging
from pathlib import PurePosixPath

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename
from PIL import Image, UnidentifiedImageError
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from . import bulk_seo, registry
from .exceptions import InvalidUpload, SlugMismatch
from .filters import CatalogEntityFilter, WorkFilter
from .models import Epitaph, PageDescription, PageSEO, Product, SeoTemplate, Work
from .seo_templates import SeoData, fill_missing_seo, get_template, resolve_seo
from .serializers import (
    BulkSeoOptionsSerializer,
    EntitySeoSerializer,
    EpitaphSerializer,
    PageDescriptionSerializer,
    PageSEOSerializer,
    SeoTemplateSerializer,
    WorkSerializer,
    entity_serializer_for,
)

logger = logging.getLogger(__name__)


class CatalogPagination(LimitOffsetPagination):
    default_limit = 200
    max_limit = 2000

    def get_paginated_response(self, data):
        return Response({"success": True, "count": self.count, "data": data})

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "count": {"type": "integer"},
                "data": schema,
            },
        }


class EnvelopeMixin:
    """Single-object responses wrapped as ``{"success": true, "data": ...}``."""

    deleted_message = "Запись удалена"

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return Response({"success": True, "data": serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return Response({"success": True, "data": serializer.data}, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response({"success": True, "data": serializer.data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        expected_slug = request.query_params.get("slug")
        if expected_slug is not None and hasattr(instance, "slug") and instance.slug != expected_slug:
            raise SlugMismatch(id=instance.pk, expectedSlug=instance.slug, providedSlug=expected_slug)
        data = self.get_serializer(instance).data
        self.perform_destroy(instance)
        logger.info("Deleted %s id=%s", instance._meta.label, data.get("id"))
        return Response({"success": True, "message": self.deleted_message, "data": data})


class EntityTypeContextMixin:
    entity_type: str = ""

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["entity_type"] = self.entity_type
        return context


# Monuments: every category key owns a route (table + label).


class MonumentRouteMixin(EntityTypeContextMixin):
    entity_type = registry.EntityType.MONUMENTS
    filterset_class = CatalogEntityFilter
    pagination_class = CatalogPagination

    def get_route(self) -> registry.Route:
        if getattr(self, "swagger_fake_view", False):
            return registry.resolve(self.entity_type, registry.MONUMENT_CATEGORIES[0].key)
        return registry.resolve_key_or_label(self.entity_type, self.kwargs["category"])

    def get_queryset(self):
        return self.get_route().queryset()

    def get_serializer_class(self):
        return entity_serializer_for(self.get_route().model)


class MonumentListAPI(EntityTypeContextMixin, generics.ListAPIView):
    """All monument categories merged, ordered by id."""

    entity_type = registry.EntityType.MONUMENTS
    serializer_class = entity_serializer_for(Product)
    filterset_class = CatalogEntityFilter
    pagination_class = CatalogPagination

    def get_queryset(self):
        return Product.objects.none()

    def merged_rows(self) -> list:
        rows = []
        for entry in registry.MONUMENT_CATEGORIES:
            route = registry.resolve(self.entity_type, entry.key)
            rows.extend(self.filter_queryset(route.queryset()))
        rows.sort(key=lambda obj: obj.pk)
        return rows

    def list(self, request, *args, **kwargs):
        page = self.paginate_queryset(self.merged_rows())
        context = self.get_serializer_context()
        data = [entity_serializer_for(type(obj))(obj, context=context).data for obj in page]
        return self.get_paginated_response(data)


class MonumentBySlugAPI(EntityTypeContextMixin, generics.RetrieveAPIView):
    entity_type = registry.EntityType.MONUMENTS
    serializer_class = entity_serializer_for(Product)

    def get_object(self):
        slug = self.kwargs["slug"]
        for entry in registry.MONUMENT_CATEGORIES:
            obj = registry.resolve(self.entity_type, entry.key).queryset().filter(slug=slug).first()
            if obj is not None:
                return obj
        raise NotFound("Памятник не найден")

    def retrieve(self, request, *args, **kwargs):
        obj = self.get_object()
        serializer = entity_serializer_for(type(obj))(obj, context=self.get_serializer_context())
        return Response({"success": True, "data": serializer.data})


class MonumentCategoryListAPI(MonumentRouteMixin, generics.ListAPIView):
    pass


class MonumentDetailAPI(MonumentRouteMixin, EnvelopeMixin, generics.RetrieveAPIView):
    lookup_field = "slug"


class AdminMonumentListCreateAPI(MonumentRouteMixin, EnvelopeMixin, generics.ListCreateAPIView):
    def perform_create(self, serializer):
        route = self.get_route()
        seo = resolve_seo(serializer.validated_data, route.entity_type, route.key)
        instance = serializer.save(category=route.label, **seo.as_dict())
        logger.info("Created %s id=%s in category %s", instance._meta.label, instance.pk, route.key)


class AdminMonumentDetailAPI(MonumentRouteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    def perform_update(self, serializer):
        route = self.get_route()
        instance = serializer.save(category=route.label)
        fill_missing_seo(instance, route.entity_type, route.key)


# Fences, accessories, landscape: one table per type, category from the data.


class CategorizedTableMixin(EntityTypeContextMixin):
    filterset_class = CatalogEntityFilter
    pagination_class = CatalogPagination

    def get_model(self):
        return registry.model_for(self.entity_type)

    def get_queryset(self):
        category = self.request.query_params.get("category")
        if category:
            return registry.resolve_key_or_label(self.entity_type, category).queryset()
        return self.get_model()._default_manager.all()

    def get_serializer_class(self):
        return entity_serializer_for(self.get_model())

    def route_for(self, category: str | None) -> registry.Route:
        if not category:
            raise ValidationError({"category": ["Обязательное поле."]})
        return registry.resolve_key_or_label(self.entity_type, category)


class CategorizedListAPI(CategorizedTableMixin, generics.ListAPIView):
    pass


class CategorizedDetailAPI(CategorizedTableMixin, EnvelopeMixin, generics.RetrieveAPIView):
    lookup_field = "slug"


class AdminCategorizedListCreateAPI(CategorizedTableMixin, EnvelopeMixin, generics.ListCreateAPIView):
    def perform_create(self, serializer):
        route = self.route_for(serializer.validated_data.get("category"))
        seo = resolve_seo(serializer.validated_data, route.entity_type, route.key)
        instance = serializer.save(category=route.label, **seo.as_dict())
        logger.info("Created %s id=%s in category %s", instance._meta.label, instance.pk, route.key)


class AdminCategorizedDetailAPI(CategorizedTableMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    def get_queryset(self):
        return self.get_model()._default_manager.all()

    def perform_update(self, serializer):
        if "category" in serializer.validated_data:
            label = self.route_for(serializer.validated_data["category"]).label
        else:
            label = serializer.instance.category
        instance = serializer.save(category=label)
        fill_missing_seo(instance, self.entity_type, registry.key_for_label(self.entity_type, label))


# SEO templates and bulk propagation.


class SeoTemplateListCreateAPI(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = SeoTemplate.objects.all()
    serializer_class = SeoTemplateSerializer
    pagination_class = CatalogPagination

    def get_queryset(self):
        queryset = super().get_queryset()
        entity_type = self.request.query_params.get("entityType")
        if entity_type:
            queryset = queryset.filter(entity_type=registry.parse_entity_type(entity_type))
        return queryset

    def perform_create(self, serializer):
        template = serializer.save()
        logger.info("SEO template created: %s", template)


class SeoTemplateDetailAPI(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = SeoTemplate.objects.all()
    serializer_class = SeoTemplateSerializer
    deleted_message = "SEO шаблон удален"


def _bulk_options(data, entity_type: str, category_key: str) -> dict:
    options = BulkSeoOptionsSerializer(
        data={
            "entityType": entity_type,
            "categoryKey": category_key,
            "forceUpdate": data.get("forceUpdate", False),
        }
    )
    options.is_valid(raise_exception=True)
    return options.validated_data


class BulkSeoPreviewAPI(APIView):
    def get(self, request, entity_type, category_key):
        options = _bulk_options(request.query_params, entity_type, category_key)
        result = bulk_seo.preview(options["entityType"], options["categoryKey"], options["forceUpdate"])
        return Response({"success": True, "preview": result.as_dict()})


class BulkSeoUpdateAPI(APIView):
    def post(self, request, entity_type, category_key):
        options = _bulk_options(request.data, entity_type, category_key)
        result = bulk_seo.apply(options["entityType"], options["categoryKey"], options["forceUpdate"])
        payload = {"success": True, "message": result.message, "stats": result.stats()}
        if result.error_details:
            payload["errorDetails"] = result.error_details
        return Response(payload)


class BulkSeoCheckTemplateAPI(APIView):
    def get(self, request, entity_type, category_key):
        template = bulk_seo.find_template(entity_type, category_key)
        data = None
        if template is not None:
            data = {
                "id": template.pk,
                "categoryName": template.category_name,
                **SeoData.from_instance(template).as_camel_dict(),
            }
        return Response({"success": True, "hasTemplate": template is not None, "template": data})


class SeoHierarchyAPI(APIView):
    """Template that new rows of a category would inherit."""

    def get(self, request, entity_type, category_key):
        entity_type = registry.parse_entity_type(entity_type)
        template = get_template(entity_type, category_key)
        data = None
        if template is not None:
            data = {"id": template.pk, **SeoData.from_instance(template).as_camel_dict()}
        return Response({"success": True, "template": data})


class EntitySeoAPI(APIView):
    """Read or directly overwrite the SEO fields of one row."""

    def get_object(self):
        model = registry.model_for_kind(self.kwargs["entity_kind"])
        obj = model._default_manager.filter(pk=self.kwargs["pk"]).first()
        if obj is None:
            raise NotFound("Запись не найдена")
        return obj

    def get(self, request, entity_kind, pk):
        obj = self.get_object()
        return Response({"success": True, "data": {"id": obj.pk, **SeoData.from_instance(obj).as_camel_dict()}})

    def put(self, request, entity_kind, pk):
        obj = self.get_object()
        fields = EntitySeoSerializer().fields
        serializer = EntitySeoSerializer(obj, data={name: request.data.get(name) for name in fields})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("SEO fields updated for %s id=%s", obj._meta.label, obj.pk)
        return Response({"success": True, "data": {"id": obj.pk, **SeoData.from_instance(obj).as_camel_dict()}})


# Pages, works, epitaphs.


class PageSEOPublicAPI(APIView):
    def get(self, request, page_slug):
        page = PageSEO.objects.filter(page_slug=page_slug).first()
        data = None
        if page is not None:
            data = PageSEOSerializer(page).data
        return Response({"success": True, "data": data})


class PageDescriptionPublicAPI(APIView):
    def get(self, request, page_slug):
        page = PageDescription.objects.filter(page_slug=page_slug).first()
        data = None
        if page is not None:
            data = PageDescriptionSerializer(page).data
        return Response({"success": True, "data": data})


class AdminPageSEOListCreateAPI(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = PageSEO.objects.all()
    serializer_class = PageSEOSerializer
    pagination_class = CatalogPagination


class AdminPageSEODetailAPI(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = PageSEO.objects.all()
    serializer_class = PageSEOSerializer


class AdminPageDescriptionListCreateAPI(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = PageDescription.objects.all()
    serializer_class = PageDescriptionSerializer
    pagination_class = CatalogPagination


class AdminPageDescriptionDetailAPI(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = PageDescription.objects.all()
    serializer_class = PageDescriptionSerializer


class WorkListAPI(generics.ListAPIView):
    queryset = Work.objects.filter(is_active=True)
    serializer_class = WorkSerializer
    filterset_class = WorkFilter
    pagination_class = CatalogPagination


class AdminWorkListCreateAPI(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Work.objects.all()
    serializer_class = WorkSerializer
    filterset_class = WorkFilter
    pagination_class = CatalogPagination


class AdminWorkDetailAPI(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Work.objects.all()
    serializer_class = WorkSerializer


class EpitaphListAPI(generics.ListAPIView):
    queryset = Epitaph.objects.all()
    serializer_class = EpitaphSerializer
    pagination_class = CatalogPagination


class AdminEpitaphListCreateAPI(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Epitaph.objects.all()
    serializer_class = EpitaphSerializer
    pagination_class = CatalogPagination


class AdminEpitaphDetailAPI(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Epitaph.objects.all()
    serializer_class = EpitaphSerializer


# Files.


def _check_folder(folder: str | None) -> str:
    if not folder:
        raise InvalidUpload("Не указана папка")
    if folder not in settings.UPLOAD_ALLOWED_FOLDERS:
        raise InvalidUpload("Недопустимая папка", folder=folder, available=list(settings.UPLOAD_ALLOWED_FOLDERS))
    return folder


def _is_image_name(name: str) -> bool:
    extension = PurePosixPath(name).suffix.lower().lstrip(".")
    return extension in {ext.lower().lstrip(".") for ext in settings.MEDIA_ALLOWED_IMAGE_EXTENSIONS}


class ImageListAPI(APIView):
    def get(self, request):
        folder = _check_folder(request.query_params.get("folder"))
        try:
            _dirs, files = default_storage.listdir(folder)
        except FileNotFoundError:
            files = []
        urls = [
            request.build_absolute_uri(default_storage.url(f"{folder}/{name}"))
            for name in sorted(files)
            if _is_image_name(name)
        ]
        return Response({"success": True, "data": urls})


class UploadAPI(APIView):
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        folder = _check_folder(request.data.get("folder"))
        upload = request.FILES.get("file")
        if upload is None:
            raise InvalidUpload("Файл не передан")

        filename = get_valid_filename(PurePosixPath(upload.name).name)
        if not _is_image_name(filename):
            raise InvalidUpload("Недопустимое расширение файла")
        if upload.size > settings.MAX_IMAGE_SIZE:
            raise InvalidUpload("Файл слишком большой")
        try:
            with Image.open(upload) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError):
            raise InvalidUpload("Файл не является изображением") from None
        upload.seek(0)

        stored = default_storage.save(f"{folder}/{filename}", upload)
        logger.info("Uploaded image %s (%s bytes)", stored, upload.size)
        return Response(
            {
                "success": True,
                "data": {
                    "filename": PurePosixPath(stored).name,
                    "path": request.build_absolute_uri(default_storage.url(stored)),
                },
            },
            status=status.HTTP_201_CREATED,
        )
