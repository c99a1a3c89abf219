from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_product_service
from .mappers import ProductMapper
from .serializers import (
    ProductListQuerySerializer,
    ProductReadSerializer,
    ProductWriteSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")

ERROR_RESPONSE = OpenApiResponse(response=ErrorResponseSerializer)


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Returns active products, or deleted ones with ?deleted=true.",
        parameters=[ProductListQuerySerializer],
        responses={
            200: ProductReadSerializer(many=True),
            400: ERROR_RESPONSE,
        },
    )
    def get(self, request):
        query = ProductListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        deleted = query.validated_data["deleted"]
        self.log.debug("Handling product list request", deleted=deleted)
        dtos = self.service.find_all_products(deleted=deleted)
        return Response(ProductReadSerializer(dtos, many=True).data)

    @extend_schema(
        summary="Create product",
        request=ProductWriteSerializer,
        responses={
            201: ProductReadSerializer,
            400: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
        },
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Creating product via API", title=serializer.validated_data.get("title")
        )
        dto = self.service.save_product(
            ProductMapper.from_data(serializer.validated_data)
        )
        self.log.info("Product created via API", product_id=dto.id)
        return Response(ProductReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: ERROR_RESPONSE,
            410: ERROR_RESPONSE,
        },
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.find_product_by_id(product_id)
        return Response(ProductReadSerializer(dto).data)

    @extend_schema(
        summary="Replace product fields",
        description="Validates a full payload; stored fields are still merged, not cleared.",
        request=ProductWriteSerializer,
        responses={
            200: ProductReadSerializer,
            400: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            410: ERROR_RESPONSE,
        },
    )
    def put(self, request, product_id: int):
        return self._update(request, product_id, partial=False)

    @extend_schema(
        summary="Update product",
        request=ProductWriteSerializer,
        responses={
            200: ProductReadSerializer,
            400: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            410: ERROR_RESPONSE,
        },
    )
    def patch(self, request, product_id: int):
        return self._update(request, product_id, partial=True)

    @extend_schema(
        summary="Delete product",
        description="Soft delete: the product is flagged and kept in storage.",
        responses={
            204: None,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
            410: ERROR_RESPONSE,
        },
    )
    def delete(self, request, product_id: int):
        self.log.info("Deleting product", product_id=product_id)
        self.service.delete_product(product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, product_id: int, *, partial: bool):
        serializer = ProductWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.log.info("Updating product", product_id=product_id, partial=partial)
        dto = self.service.update_product(
            product_id, ProductMapper.from_data(serializer.validated_data)
        )
        return Response(ProductReadSerializer(dto).data)
