import pytest

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission

from rest_framework.test import APIClient

User = get_user_model()

SALES_PERMISSIONS = [
    "view_account",
    "view_product",
    "view_pricebookentry",
    "view_order",
    "change_order",
    "view_orderitem",
    "add_orderitem",
    "change_orderitem",
]


@pytest.fixture()
def make_client():
    """APIClient force-authenticated as a user holding ``codenames``."""

    def _make(*codenames, username="apiuser"):
        user = User.objects.create_user(username=username, password="testpass123")
        user.user_permissions.add(*Permission.objects.filter(codename__in=codenames))
        client = APIClient()
        # Re-fetch: permissions are cached on the instance.
        client.force_authenticate(user=User.objects.get(pk=user.pk))
        return client

    return _make


@pytest.fixture()
def auth_client(make_client):
    """APIClient for a user with every permission the workflow needs."""
    return make_client(*SALES_PERMISSIONS)
