"""Employee domain constants."""

from django.db import models


class EmployeeRole(models.TextChoices):
    ADMIN = "admin", "Администратор"
    CHINA_WORKER = "china_worker", "Сотрудник склада в Китае"
    BRANCH_WORKER = "branch_worker", "Сотрудник филиала"
