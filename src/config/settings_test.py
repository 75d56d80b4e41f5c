"""Settings used by the test suite.

Supplies the values that production settings refuse to default and points
the confirmation gateway at a host that is never contacted (tests patch
``requests.post``).
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "")

from config.settings import *  # noqa: E402,F401,F403

ORDER_CONFIRMATION_URL = "https://confirmation.test/orders"
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Rate limits keep state in the cache across tests.
REST_FRAMEWORK = {**REST_FRAMEWORK, "DEFAULT_THROTTLE_CLASSES": []}  # noqa: F405
