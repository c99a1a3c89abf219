from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    """OpenAPI shape of the envelope produced by ``apps.api.utils.error_response``."""

    error = ErrorDetailSerializer()
