"""Test catalog service outcomes."""
import pytest
from sqlalchemy.exc import OperationalError

from catalog.query import PageRequest
from catalog.service import CatalogService
from core.errors import NotFoundError, TransportError, ValidationError
from core.results import Failure, Found, NotFound
from tests.conftest import make_book


async def _create(service, *books):
    created = []
    for book in books:
        outcome = await service.create(book)
        assert isinstance(outcome, Found)
        created.append(outcome.value)
    return created


class BrokenRepository:
    """Stands in for a store that cannot be reached."""

    async def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("store down"))

    find = count = categories = authors = insert = update_by_id = delete_by_id = _fail


@pytest.mark.asyncio
async def test_seven_books_second_page(service):
    await _create(service, *(make_book(i) for i in range(7)))

    outcome = await service.list(PageRequest(page=2))
    assert isinstance(outcome, Found)
    page = outcome.value
    assert len(page.books) == 1
    assert page.total_pages == 2
    assert page.total_books == 7
    assert page.current_page == 2


@pytest.mark.asyncio
async def test_default_sort_is_newest_first(service):
    await _create(service, *(make_book(i) for i in range(7)))
    first_page = (await service.list(PageRequest())).value
    assert [b.title for b in first_page.books] == [f"Book {i}" for i in range(6, 0, -1)]


@pytest.mark.asyncio
async def test_page_beyond_range_is_empty_not_error(service):
    await _create(service, *(make_book(i) for i in range(7)))
    outcome = await service.list(PageRequest(page=5))
    assert isinstance(outcome, Found)
    assert outcome.value.books == []
    assert outcome.value.total_pages == 2
    assert outcome.value.total_books == 7


@pytest.mark.asyncio
async def test_filters_narrow_results(service):
    await _create(
        service,
        make_book(1, title="Learning Python", category="Tech"),
        make_book(2, title="python cookbook", category="Tech"),
        make_book(3, title="Python Tales", category="Fiction"),
    )
    request = PageRequest.from_params(title="PYTHON", category="Tech")
    page = (await service.list(request)).value
    assert page.total_books == 2
    assert all(b.category == "Tech" for b in page.books)
    assert all("python" in b.title.lower() for b in page.books)


@pytest.mark.asyncio
async def test_filter_values(service):
    await _create(
        service,
        make_book(1, category="Fiction", author="A"),
        make_book(2, category="Fiction", author="B"),
        make_book(3, category="History", author="A"),
    )
    values = (await service.filter_values()).value
    assert sorted(values.categories) == ["Fiction", "History"]
    assert sorted(values.authors) == ["A", "B"]


@pytest.mark.asyncio
async def test_create_round_trip(service):
    data = make_book(1, title="Unique Title")
    (created,) = await _create(service, data)

    page = (await service.list(PageRequest.from_params(title="Unique Title"))).value
    assert page.total_books == 1
    fetched = page.books[0]
    assert fetched.id == created["id"]
    for key, value in data.items():
        assert getattr(fetched, key) == value


@pytest.mark.asyncio
async def test_create_missing_field_is_validation_failure(service):
    data = make_book(1)
    del data["category"]
    outcome = await service.create(data)
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, ValidationError)
    assert [d["field"] for d in outcome.error.details] == ["category"]


@pytest.mark.asyncio
async def test_create_rejects_null_and_non_numeric_price(service):
    outcome = await service.create(make_book(1, price="cheap", title=None))
    assert isinstance(outcome, Failure)
    assert {d["field"] for d in outcome.error.details} == {"title", "price"}


@pytest.mark.asyncio
async def test_update_existing(service):
    (book,) = await _create(service, make_book(1))
    outcome = await service.update(book["id"], {"title": "Renamed", "price": 3, "description": "nope"})
    assert isinstance(outcome, Found)
    assert outcome.value["title"] == "Renamed"
    assert outcome.value["price"] == 3.0
    assert outcome.value["description"] == "Description 1"


@pytest.mark.asyncio
async def test_update_missing_leaves_records_unchanged(service):
    await _create(service, make_book(1), make_book(2))
    outcome = await service.update("12345", {"title": "Ghost"})
    assert isinstance(outcome, NotFound)
    assert isinstance(outcome.error, NotFoundError)

    after = (await service.list(PageRequest())).value
    assert {b.title for b in after.books} == {"Book 1", "Book 2"}


@pytest.mark.asyncio
async def test_update_invalid_price_is_validation_failure(service):
    (book,) = await _create(service, make_book(1))
    outcome = await service.update(book["id"], {"price": "free"})
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, ValidationError)


@pytest.mark.asyncio
async def test_delete_decrements_total(service):
    first, second = await _create(service, make_book(1), make_book(2))
    outcome = await service.delete(first["id"])
    assert isinstance(outcome, Found)

    page = (await service.list(PageRequest())).value
    assert page.total_books == 1
    assert [b.id for b in page.books] == [second["id"]]


@pytest.mark.asyncio
async def test_delete_missing(service):
    outcome = await service.delete("999")
    assert isinstance(outcome, NotFound)


@pytest.mark.asyncio
async def test_store_failures_become_transport_errors():
    service = CatalogService(BrokenRepository())
    outcomes = [
        await service.list(PageRequest()),
        await service.filter_values(),
        await service.create(make_book(1)),
        await service.update("1", {"title": "x"}),
        await service.delete("1"),
    ]
    for outcome in outcomes:
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, TransportError)


@pytest.mark.asyncio
async def test_create_rejects_nan_price(service):
    outcome = await service.create(make_book(1, price=float("nan")))
    assert isinstance(outcome, Failure)
    assert [d["field"] for d in outcome.error.details] == ["price"]


@pytest.mark.asyncio
async def test_update_rejects_infinite_price(service):
    (book,) = await _create(service, make_book(1))
    outcome = await service.update(book["id"], {"price": float("inf")})
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, ValidationError)


@pytest.mark.asyncio
async def test_list_page_beyond_any_offset(service):
    await _create(service, make_book(1))
    outcome = await service.list(PageRequest(page=10**20))
    assert isinstance(outcome, Found)
    assert outcome.value.books == []
    assert outcome.value.total_books == 1
    assert outcome.value.current_page == 10**20
