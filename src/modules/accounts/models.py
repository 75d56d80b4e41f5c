"""Account record.

Only the pieces the order workflow reads are modelled: the display name and
the account number known to the external confirmation system.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Account(BaseModel):
    """Customer account that owns orders."""

    name = models.CharField(max_length=255)
    account_number = models.CharField(max_length=40, blank=True, default="")

    class Meta:
        db_table = "accounts"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["account_number"], name="accounts_number_idx"),
        ]

    def __str__(self) -> str:
        if self.account_number:
            return f"{self.name} ({self.account_number})"
        return self.name
