"""Repository contract tests shared by the SQL and in-memory implementations."""

import uuid
from decimal import Decimal

import pytest
from sqlmodel import Session

from src.inventory.core.errors import ConflictError, NotFound, ValidationError
from src.inventory.core.repositories.base import InMemoryRepository, Repository
from src.inventory.entities import Product, ProductRepository


@pytest.fixture(params=["sql", "memory"])
def product_repo(request, session: Session) -> Repository[Product]:
    if request.param == "sql":
        return ProductRepository(session)
    return ProductRepository.in_memory()


def _product(code: str = "P-001", name: str = "Widget", **fields) -> Product:
    return Product(product_code=code, product_name=name, **fields)


class TestRepositoryContract:
    """Both implementations must behave identically."""

    @pytest.mark.parametrize("count", [0, 1, 7])
    def test_list_returns_exactly_created(self, product_repo, count):
        created = [product_repo.create(_product(code=f"P-{i}")) for i in range(count)]

        listed = product_repo.list_all()

        assert len(listed) == count
        assert {p.id for p in listed} == {p.id for p in created}

    def test_create_then_get(self, product_repo):
        created = product_repo.create(_product(total_stock=Decimal("4.25")))

        assert product_repo.get(created.id) == created
        assert created.created_date == created.updated_date

    def test_never_issued_id_not_found(self, product_repo):
        product_repo.create(_product())

        with pytest.raises(NotFound) as exc_info:
            product_repo.get(uuid.uuid4())
        assert exc_info.value.kind == "Product"

    def test_get_for_update_matches_get(self, product_repo):
        created = product_repo.create(_product())

        assert product_repo.get_for_update(created.id) == created
        with pytest.raises(NotFound):
            product_repo.get_for_update(uuid.uuid4())

    def test_create_none_leaves_storage_untouched(self, product_repo):
        with pytest.raises(ValidationError):
            product_repo.create(None)

        assert product_repo.list_all() == []

    def test_unique_code_enforced(self, product_repo):
        product_repo.create(_product(code="SAME"))

        with pytest.raises(ConflictError):
            product_repo.create(_product(code="SAME", name="Other"))

    def test_list_by_filters_on_equality(self, product_repo):
        active = product_repo.create(_product(code="A"))
        product_repo.create(_product(code="B", active=False))

        assert [p.id for p in product_repo.list_by(active=True)] == [active.id]

    def test_update_none_rejected(self, product_repo):
        with pytest.raises(ValidationError):
            product_repo.update(None)


class TestInMemoryRepository:
    """Behaviour specific to the dict-backed fake."""

    def test_returns_copies(self):
        repo = ProductRepository.in_memory()
        created = repo.create(_product())

        created.product_name = "Mutated"

        assert repo.get(created.id).product_name == "Widget"

    def test_in_memory_carries_unique_fields(self):
        repo = ProductRepository.in_memory()

        assert isinstance(repo, InMemoryRepository)
        assert repo.unique_fields == ("product_code",)

    def test_update_may_keep_own_unique_value(self):
        repo = ProductRepository.in_memory()
        created = repo.create(_product(code="KEEP"))

        updated = repo.update(created.model_copy(update={"product_name": "Renamed"}))

        assert updated.product_code == "KEEP"
        assert len(repo) == 1
