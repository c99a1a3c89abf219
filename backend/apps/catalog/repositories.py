from apps.common.repository import GenericRepository
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)

    def get_active_by_name(self, name: str):
        return (
            self.model.objects.filter(name=name, deleted=False).order_by("id").first()
        )

    def get_by_name(self, name: str):
        """Match on name alone; deleted categories are included."""
        return self.model.objects.filter(name=name).order_by("id").first()


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def list(self, **filters):  # type: ignore[override]
        """Return products with their category joined to avoid N+1 during DTO mapping."""
        return (
            self.model.objects.filter(**filters)
            .select_related("category")
            .order_by("id")
        )

    def list_by_deleted(self, deleted: bool):
        return self.list(deleted=deleted)

    def get(self, **filters):
        return self.list(**filters).first()

    def get_active_by_title(self, title: str):
        return self.model.objects.filter(
            title=title, deleted=False, deleted_on__isnull=True
        ).first()
