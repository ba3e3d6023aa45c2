from __future__ import annotations

import random

from django.core.management.base import BaseCommand

from modules.audit.services import AuditTrail
from modules.branches.models import Branch
from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.employees.constants import EmployeeRole
from modules.employees.dtos import CreateEmployeeDTO
from modules.employees.models import Employee
from modules.employees.repositories.django_repository import EmployeeDjangoRepository
from modules.employees.services import EmployeeService
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

# Happy path of a parcel, in order.
PIPELINE = [
    OrderStatus.ARRIVED_CN,
    OrderStatus.PACKED,
    OrderStatus.SENT_TO_KZ,
    OrderStatus.IN_TRANSIT,
    OrderStatus.ARRIVED_BRANCH,
    OrderStatus.READY_FOR_PICKUP,
    OrderStatus.ISSUED,
]

SEED_PASSWORD = "cargo-dev-123"


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=40)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        branches = self._seed_branches()
        employees = self._seed_employees(branches)
        clients = self._seed_clients()
        orders_created = self._seed_orders(employees, branches, clients, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"branches={len(branches)}, "
                f"employees={len(employees)}, "
                f"clients={len(clients)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_branches(self) -> list[Branch]:
        self.stdout.write("Creating branches...")
        seed_branches = [
            ("ALA-01", "Алматы Центр", "Алматы", "пр. Абая 10", "+7 727 100 00 01"),
            ("AST-01", "Астана Левый берег", "Астана", "ул. Сыганак 5", "+7 717 200 00 02"),
            ("SHY-01", "Шымкент", "Шымкент", "ул. Тауке хана 3", "+7 725 300 00 03"),
        ]
        branches: list[Branch] = []
        for code, name, city, address, phone in seed_branches:
            branch, _ = Branch.objects.get_or_create(
                code=code,
                defaults={"name": name, "city": city, "address": address, "phone": phone},
            )
            branches.append(branch)
        self.stdout.write(self.style.SUCCESS("Creating branches... Done!"))
        return branches

    def _seed_employees(self, branches: list[Branch]) -> dict[str, Employee]:
        self.stdout.write("Creating employees...")
        service = EmployeeService(
            employee_repository=EmployeeDjangoRepository(),
            branch_repository=BranchDjangoRepository(),
        )
        seed_employees = [
            ("admin", "Админ", "admin@cargo.local", EmployeeRole.ADMIN, None),
            ("china", "Ли Вэй", "china@cargo.local", EmployeeRole.CHINA_WORKER, None),
            ("branch", "Айгерим", "branch@cargo.local", EmployeeRole.BRANCH_WORKER, branches[0]),
        ]
        employees: dict[str, Employee] = {}
        for key, name, email, role, branch in seed_employees:
            employee = Employee.objects.filter(email=email).first()
            if employee is None:
                employee = service.create_employee(
                    CreateEmployeeDTO(
                        name=name,
                        email=email,
                        password=SEED_PASSWORD,
                        role=role,
                        branch_id=branch.id if branch else None,
                    )
                )
            employees[key] = employee
        self.stdout.write(self.style.SUCCESS("Creating employees... Done!"))
        return employees

    def _seed_clients(self) -> list[Client]:
        self.stdout.write("Creating clients...")
        seed_clients = [
            (1001, "Асель Нурланова", "+7 701 111 22 33", "Алматы"),
            (1002, "Даурен Ахметов", "+7 702 222 33 44", "Астана"),
            (1003, "Мария Ким", "+7 705 333 44 55", "Алматы"),
            (1004, "Ерлан Сапаров", "+7 707 444 55 66", "Шымкент"),
        ]
        clients: list[Client] = []
        for code, name, phone, city in seed_clients:
            client, _ = Client.objects.get_or_create(
                client_code=code,
                defaults={"name": name, "phone": phone, "city": city},
            )
            clients.append(client)
        self.stdout.write(self.style.SUCCESS("Creating clients... Done!"))
        return clients

    def _seed_orders(
        self,
        employees: dict[str, Employee],
        branches: list[Branch],
        clients: list[Client],
        count: int,
    ) -> int:
        """Create orders and walk each one a random distance down the pipeline.

        Transitions go through ``OrderService`` so versions, history and
        audit entries are consistent with real usage.
        """
        self.stdout.write("Creating orders...")
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            branch_repository=BranchDjangoRepository(),
            client_repository=ClientDjangoRepository(),
            audit_trail=AuditTrail(),
        )
        admin = employees["admin"].to_actor()
        china = employees["china"].to_actor()

        orders_created = 0
        for i in range(count):
            tracking_number = f"YT{7000000000 + i}"
            if Order.objects.filter(tracking_number=tracking_number).exists():
                continue

            order = service.create_order(
                CreateOrderDTO(
                    tracking_number=tracking_number,
                    client_id=random.choice(clients).id,
                ),
                china,
            )
            branch = random.choice(branches)
            for target in PIPELINE[: random.randint(0, len(PIPELINE))]:
                order = service.attempt_transition(
                    order, target, admin, branch_choice=branch.id
                )
            if random.random() < 0.05:
                order = service.attempt_transition(
                    order, OrderStatus.PROBLEM, admin, note="Повреждена упаковка"
                )
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
