"""Authorization context consulted by the service layer.

The services never read ``request.user`` or a global: they receive an
``IAuthorizationContext`` and ask it whether the caller may read, create or
update a given record kind (a Django model class).  Reads that are denied
raise ``AccessDenied``; writes that are denied are skipped by the caller and
recorded in the workflow result.

``UserAuthorizationContext`` answers from Django's model permissions
(``<app_label>.<action>_<model_name>``), so both ``auth.User`` (groups,
superuser) and JWT-backed users that expose ``has_perm`` work unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from django.db import models

logger = structlog.get_logger(__name__)

ModelType = type[models.Model]


class AccessDenied(Exception):
    """The caller lacks read access to a record kind."""


class IAuthorizationContext(Protocol):
    """Capability gate for the current caller."""

    def can_read(self, model: ModelType) -> bool: ...

    def can_create(self, model: ModelType) -> bool: ...

    def can_update(self, model: ModelType) -> bool: ...


def permission_codename(action: str, model: ModelType) -> str:
    """Return the Django permission string, e.g. ``orders.add_orderitem``."""
    opts = model._meta
    return f"{opts.app_label}.{action}_{opts.model_name}"


def require_read(auth: IAuthorizationContext, *record_kinds: ModelType) -> None:
    """Raise ``AccessDenied`` unless every record kind is readable."""
    for model in record_kinds:
        if not auth.can_read(model):
            logger.warning("authorization.read_denied", model=model._meta.label)
            raise AccessDenied(f"Insufficient access to read {model._meta.label}.")


class UserAuthorizationContext:
    """``IAuthorizationContext`` backed by ``user.has_perm``."""

    def __init__(self, user: Any) -> None:
        self._user = user

    def can_read(self, model: ModelType) -> bool:
        return self._has("view", model)

    def can_create(self, model: ModelType) -> bool:
        return self._has("add", model)

    def can_update(self, model: ModelType) -> bool:
        return self._has("change", model)

    def _has(self, action: str, model: ModelType) -> bool:
        if self._user is None or not getattr(self._user, "is_authenticated", False):
            return False
        return bool(self._user.has_perm(permission_codename(action, model)))
