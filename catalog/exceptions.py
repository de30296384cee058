class CatalogError(Exception):
    """Domain error that maps onto a client-facing HTTP status."""

    status_code = 400
    default_message = "Ошибка запроса"

    def __init__(self, message: str | None = None, **details):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details


class UnknownEntityType(CatalogError):
    default_message = "Неверный тип сущности"


class CategoryNotFound(CatalogError):
    default_message = "Категория не найдена"


class TemplateNotFound(CatalogError):
    status_code = 404
    default_message = "SEO шаблон не найден для данной категории"


class SlugMismatch(CatalogError):
    default_message = "Slug не совпадает с удаляемой записью"


class InvalidUpload(CatalogError):
    default_message = "Недопустимый файл"
