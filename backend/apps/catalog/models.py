from django.db import models
from django.db.models import Q

from apps.common.models import SoftDeleteModel


class Category(SoftDeleteModel):
    # Natural lookup key; not unique because deleted rows keep their name.
    name = models.CharField(max_length=100)
    description = models.TextField(null=True, blank=True)

    def __str__(self):
        return self.name

    class Meta:
        indexes = [
            models.Index(fields=["name"], name="category_name_idx"),
        ]


class Product(SoftDeleteModel):
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image = models.TextField(blank=True, default="")
    # related_name="+": categories carry no back-reference to products
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="+",
    )

    def __str__(self):
        return self.title

    class Meta:
        indexes = [
            models.Index(fields=["title"], name="product_title_idx"),
            models.Index(fields=["deleted"], name="product_deleted_idx"),
        ]
        constraints = [
            # The deleted flag is part of the uniqueness key.
            models.UniqueConstraint(
                fields=["title", "deleted"], name="product_title_deleted_uniq"
            ),
            models.CheckConstraint(
                condition=(
                    Q(deleted=True, deleted_on__isnull=False)
                    | Q(deleted=False, deleted_on__isnull=True)
                ),
                name="product_deleted_on_consistent",
            ),
        ]
