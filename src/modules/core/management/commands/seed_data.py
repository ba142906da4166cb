from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, UpdateOrderDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

CATALOG = [
    ("Monitor 27\"", "Eletrônicos", Decimal("1299.90")),
    ("Teclado Mecânico", "Eletrônicos", Decimal("399.90")),
    ("Mouse Gamer", "Eletrônicos", Decimal("249.90")),
    ("Notebook 14\"", "Eletrônicos", Decimal("3999.00")),
    ("Headset", "Eletrônicos", Decimal("299.90")),
    ("Mesa Escritório", "Móveis", Decimal("899.00")),
    ("Cadeira Ergonômica", "Móveis", Decimal("1499.00")),
    ("Estante", "Móveis", Decimal("699.00")),
    ("Papel A4", "Escritório", Decimal("29.90")),
    ("Caneta Azul", "Escritório", Decimal("4.90")),
    ("Caderno", "Escritório", Decimal("19.90")),
    ("Calculadora", "Escritório", Decimal("89.90")),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=10,
            help="Number of orders to create (default: 10).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        products = self._seed_products()
        orders_created = self._seed_orders(products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for name, category, price in CATALOG:
            product, _ = Product.objects.alive().get_or_create(
                name=name,
                category=category,
                defaults={
                    "description": f"{name} ({category})",
                    "price": price,
                    "quantity_stock": random.randint(10, 200),
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, products: list[Product], count: int) -> int:
        self.stdout.write("Creating orders...")
        if not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no products)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        targets = [
            OrderStatus.PENDING,
            OrderStatus.COMPLETED,
            OrderStatus.CANCELLED,
        ]

        orders_created = 0
        for _ in range(count):
            picked = random.sample(products, k=min(random.randint(1, 3), len(products)))
            dto = CreateOrderDTO(
                products=[
                    CreateOrderItemDTO(product_id=product.id, quantity=random.randint(1, 3))
                    for product in picked
                ]
            )
            try:
                order = service.create_order(dto)
                target = random.choice(targets)
                if target == OrderStatus.CANCELLED:
                    # Cancelled seeds pass through CONCLUIDO first.
                    service.update_order(
                        order.id, UpdateOrderDTO(status=OrderStatus.COMPLETED)
                    )
                if target != OrderStatus.PENDING:
                    service.update_order(order.id, UpdateOrderDTO(status=target))
            except InsufficientStock as exc:
                self.stdout.write(self.style.WARNING(f"Skipped order: {exc}"))
                continue
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
