from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group, Permission
from django.core.management.base import BaseCommand

from modules.accounts.models import Account
from modules.catalog.models import PriceBook, PriceBookEntry, Product
from modules.orders.models import Order, OrderItem

# Group -> permission codenames (app label omitted).
GROUP_PERMISSIONS = {
    "Sales": [
        "view_account",
        "view_product",
        "view_pricebookentry",
        "view_order",
        "change_order",
        "view_orderitem",
        "add_orderitem",
        "change_orderitem",
    ],
    "Viewers": [
        "view_account",
        "view_product",
        "view_pricebookentry",
        "view_order",
        "view_orderitem",
    ],
}


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        accounts = self._seed_accounts()
        standard, entries = self._seed_catalog()
        orders_created = self._seed_orders(accounts, standard, entries)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"accounts={len(accounts)}, "
                f"entries={len(entries)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        groups = {}
        for group_name, codenames in GROUP_PERMISSIONS.items():
            group, _ = Group.objects.get_or_create(name=group_name)
            group.permissions.set(Permission.objects.filter(codename__in=codenames))
            groups[group_name] = group

        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        for username, group_name in (("sales", "Sales"), ("viewer", "Viewers")):
            if User.objects.filter(username=username).exists():
                continue
            user = User.objects.create_user(username, password=f"{username}123")
            user.groups.add(groups[group_name])
            created += 1
        return created

    def _seed_accounts(self) -> list[Account]:
        self.stdout.write("Creating accounts...")
        accounts: list[Account] = []
        seed_accounts = [
            ("Acme Corporation", "CD451796"),
            ("Globex Industries", "CD355118"),
            ("Initech", "CC634267"),
            ("Umbrella Logistics", "CD736025"),
            ("Stark Components", "CC978213"),
        ]
        for name, number in seed_accounts:
            account, _ = Account.objects.get_or_create(
                account_number=number, defaults={"name": name}
            )
            accounts.append(account)
        self.stdout.write(self.style.SUCCESS("Creating accounts... Done!"))
        return accounts

    def _seed_catalog(self) -> tuple[PriceBook, list[PriceBookEntry]]:
        self.stdout.write("Creating catalog...")
        standard, _ = PriceBook.objects.get_or_create(
            is_standard=True, defaults={"name": "Standard Price Book"}
        )
        partner, _ = PriceBook.objects.get_or_create(
            name="Partner Price Book", defaults={"is_standard": False}
        )

        catalog = [
            ("GC1020", "GenWatt Diesel 200kW", Decimal("25000.00")),
            ("GC1040", "GenWatt Diesel 10kW", Decimal("5000.00")),
            ("GC1060", "GenWatt Propane 500kW", Decimal("50000.00")),
            ("GC3020", "GenWatt Gasoline 750kW", Decimal("75000.00")),
            ("GC3040", "GenWatt Gasoline 300kW", Decimal("35000.00")),
            ("GC5020", "GenWatt Diesel 1000kW", Decimal("100000.00")),
            ("IN7020", "Installation: Portable", Decimal("50000.00")),
            ("IN7040", "Installation: Industrial - Low", Decimal("85000.00")),
            ("IN7060", "Installation: Industrial - Medium", Decimal("115000.00")),
            ("SL9020", "SLA: Bronze", Decimal("20000.00")),
            ("SL9040", "SLA: Silver", Decimal("40000.00")),
            ("SL9060", "SLA: Gold", Decimal("60000.00")),
        ]
        entries: list[PriceBookEntry] = []
        for code, name, price in catalog:
            product, _ = Product.objects.get_or_create(
                product_code=code, defaults={"name": name}
            )
            entry, _ = PriceBookEntry.objects.get_or_create(
                product=product, price_book=standard, defaults={"unit_price": price}
            )
            PriceBookEntry.objects.get_or_create(
                product=product,
                price_book=partner,
                defaults={"unit_price": (price * Decimal("0.9")).quantize(Decimal("0.01"))},
            )
            entries.append(entry)
        self.stdout.write(self.style.SUCCESS("Creating catalog... Done!"))
        return standard, entries

    def _seed_orders(
        self,
        accounts: list[Account],
        standard: PriceBook,
        entries: list[PriceBookEntry],
    ) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        orders_created = 0
        for i, account in enumerate(accounts):
            # Every other order starts empty, without a price book.
            if i % 2:
                Order.objects.create(account=account, order_type="New")
                orders_created += 1
                continue

            order = Order.objects.create(
                account=account, order_type="New", price_book=standard
            )
            for entry in random.sample(entries, k=random.randint(1, 4)):
                OrderItem.objects.create(
                    order=order,
                    product=entry.product,
                    price_book_entry=entry,
                    unit_price=entry.unit_price,
                    quantity=Decimal(random.randint(1, 3)),
                )
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
