"""Catalog API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.repositories.django_repository import CatalogDjangoRepository
from modules.catalog.serializers import CatalogEntrySerializer
from modules.catalog.services import CatalogService
from modules.core.authorization import AccessDenied, UserAuthorizationContext


class CatalogEntryViewSet(GenericViewSet):
    """Read-only access to the purchasable catalog.

    The full (capped) list is returned in one response; the client pages
    through it locally.
    """

    serializer_class = CatalogEntrySerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CatalogService(repository=CatalogDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/catalog/entries/"""
        try:
            entries = self._service.list_available_entries(
                UserAuthorizationContext(request.user)
            )
        except AccessDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(CatalogEntrySerializer(entries, many=True).data)
