"""Catalog URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.catalog.views import CatalogEntryViewSet

router = DefaultRouter(trailing_slash=True)
router.register("catalog/entries", CatalogEntryViewSet, basename="catalog-entry")

urlpatterns = router.urls
