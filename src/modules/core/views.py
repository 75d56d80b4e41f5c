import time
from typing import Any, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.catalog.models import PriceBookEntry
from modules.core.authorization import UserAuthorizationContext
from modules.orders.models import Order, OrderItem

logger = structlog.get_logger()


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    # Check database
    try:
        start = time.monotonic()
        conn = connections["default"]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        services["database"] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except Exception:
        services["database"] = {"status": "down"}
        overall_healthy = False
        logger.exception("health_check_db_failure")

    # Check cache
    try:
        start = time.monotonic()
        cache.set("_health_check", "ok", 10)
        result = cache.get("_health_check")
        if result != "ok":
            raise ConnectionError("Cache read failed")
        services["cache"] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except Exception:
        services["cache"] = {"status": "down"}
        overall_healthy = False
        logger.exception("health_check_cache_failure")

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )


class CapabilitiesView(APIView):
    """Report what the authenticated caller may do in the order workflow.

    Lets a client decide up front whether the picker and confirm controls
    should be offered, instead of discovering silently skipped writes.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        auth = UserAuthorizationContext(request.user)
        return Response(
            {
                "user": str(request.user),
                "can_browse_catalog": auth.can_read(PriceBookEntry),
                "can_view_order_lines": auth.can_read(OrderItem),
                "can_add_order_lines": auth.can_create(OrderItem),
                "can_update_order_lines": auth.can_update(OrderItem),
                "can_update_orders": auth.can_update(Order),
            }
        )
