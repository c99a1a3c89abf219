from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO; category is the flattened category name
    id = serializers.IntegerField()
    title = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image = serializers.CharField(allow_blank=True)
    deleted = serializers.BooleanField()
    deletedOn = serializers.DateTimeField(source="deleted_on", allow_null=True)
    category = serializers.CharField(allow_null=True)


class ProductWriteSerializer(serializers.Serializer):
    # 'id', 'deleted' and 'deletedOn' are store-owned and never accepted from clients.
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    # Category name; an unknown name provisions a new category
    category = serializers.CharField(
        max_length=100, required=False, allow_blank=False, allow_null=True
    )


class ProductListQuerySerializer(serializers.Serializer):
    deleted = serializers.BooleanField(required=False, default=False)
