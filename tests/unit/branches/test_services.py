"""Unit tests for BranchService and CreateBranchDTO."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.branches.dtos import CreateBranchDTO
from modules.branches.exceptions import BranchAlreadyExists, BranchNotFound
from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.branches.services import BranchService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return BranchService(repository=BranchDjangoRepository())


def _dto(**overrides):
    data = {
        "name": "Шымкент",
        "city": "Шымкент",
        "address": "ул. Тауке хана 3",
        "phone": "+7 725 300 00 03",
        "code": "shy-01",
    }
    data.update(overrides)
    return CreateBranchDTO(**data)


class TestCreateBranchDTO:
    def test_code_is_uppercased(self):
        assert _dto().code == "SHY-01"

    @pytest.mark.parametrize("code", ["", "   ", None])
    def test_empty_code_is_none(self, code):
        assert _dto(code=code).code is None

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="must not be blank"):
            _dto(name="   ")


class TestBranchService:
    def test_create(self, service):
        branch = service.create_branch(_dto())
        assert branch.code == "SHY-01"
        assert service.get_branch(str(branch.id)) == branch

    def test_duplicate_code(self, service):
        service.create_branch(_dto())
        with pytest.raises(BranchAlreadyExists):
            service.create_branch(_dto(name="Другой"))

    def test_several_branches_without_code(self, service):
        service.create_branch(_dto(code=None))
        service.create_branch(_dto(code=None, name="Второй"))
        assert len(service.list_branches()) == 2

    def test_get_unknown(self, service):
        with pytest.raises(BranchNotFound):
            service.get_branch(str(uuid4()))

    def test_get_malformed_id(self, service):
        with pytest.raises(BranchNotFound):
            service.get_branch("not-a-uuid")

    def test_soft_deleted_branch_not_listed(self, service, branch, other_branch):
        other_branch.delete()
        assert service.list_branches() == [branch]
