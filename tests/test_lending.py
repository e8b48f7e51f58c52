import pytest

from app.exceptions import EntityNotFoundError, OperationNotPermittedError
from app.models.history import BookTransactionHistory
from app.schemas.book import BookRequest
from app.services import book as book_service


@pytest.fixture
def owner(make_user):
    return make_user(email="owner@example.com", firstname="Bob", lastname="Owner")


@pytest.fixture
def borrower(make_user):
    return make_user(email="alice@example.com", firstname="Alice", lastname="Reader")


@pytest.fixture
def other(make_user):
    return make_user(email="carol@example.com", firstname="Carol", lastname="Other")


@pytest.fixture
def book_id(db, owner):
    request = BookRequest(
        title="Dune",
        authorName="Frank Herbert",
        isbn="9780441013593",
        synopsis="Spice and sandworms.",
        shareable=True,
    )
    return book_service.save(db, request, owner)


def _history(db, history_id):
    db.expire_all()
    return db.query(BookTransactionHistory).filter(BookTransactionHistory.history_id == history_id).one()


def test_full_borrow_return_approve_cycle(db, book_id, owner, borrower, other):
    history_id = book_service.borrow_book(db, book_id, borrower)
    record = _history(db, history_id)
    assert (record.returned, record.return_approved) == (False, False)
    assert record.audit.created_by == borrower.user_id

    with pytest.raises(OperationNotPermittedError, match="already borrowed"):
        book_service.borrow_book(db, book_id, other)

    assert book_service.return_borrowed_book(db, book_id, borrower) == history_id
    record = _history(db, history_id)
    assert (record.returned, record.return_approved) == (True, False)

    assert book_service.approve_return_borrowed_book(db, book_id, owner) == history_id
    record = _history(db, history_id)
    assert (record.returned, record.return_approved) == (True, True)
    assert record.audit.last_modified_by == owner.user_id


def test_book_is_available_again_after_approval(db, book_id, owner, borrower, other):
    book_service.borrow_book(db, book_id, borrower)
    book_service.return_borrowed_book(db, book_id, borrower)

    # Returned but not approved still blocks other borrowers
    with pytest.raises(OperationNotPermittedError):
        book_service.borrow_book(db, book_id, other)

    book_service.approve_return_borrowed_book(db, book_id, owner)
    assert book_service.borrow_book(db, book_id, other) > 0


def test_owner_cannot_borrow_own_book(db, book_id, owner):
    with pytest.raises(OperationNotPermittedError, match="your own book"):
        book_service.borrow_book(db, book_id, owner)


def test_same_user_cannot_borrow_twice(db, book_id, borrower):
    book_service.borrow_book(db, book_id, borrower)
    with pytest.raises(OperationNotPermittedError, match="You already borrowed"):
        book_service.borrow_book(db, book_id, borrower)


def test_return_before_borrow_fails(db, book_id, borrower):
    with pytest.raises(OperationNotPermittedError, match="did not borrow"):
        book_service.return_borrowed_book(db, book_id, borrower)


def test_return_twice_fails(db, book_id, borrower):
    book_service.borrow_book(db, book_id, borrower)
    book_service.return_borrowed_book(db, book_id, borrower)
    with pytest.raises(OperationNotPermittedError):
        book_service.return_borrowed_book(db, book_id, borrower)


def test_owner_cannot_return_own_book(db, book_id, owner):
    with pytest.raises(OperationNotPermittedError):
        book_service.return_borrowed_book(db, book_id, owner)


def test_approve_before_return_fails(db, book_id, owner, borrower):
    book_service.borrow_book(db, book_id, borrower)
    with pytest.raises(OperationNotPermittedError, match="not returned yet"):
        book_service.approve_return_borrowed_book(db, book_id, owner)


def test_only_owner_can_approve(db, book_id, borrower, other):
    book_service.borrow_book(db, book_id, borrower)
    book_service.return_borrowed_book(db, book_id, borrower)
    with pytest.raises(OperationNotPermittedError, match="do not own"):
        book_service.approve_return_borrowed_book(db, book_id, other)
    with pytest.raises(OperationNotPermittedError, match="do not own"):
        book_service.approve_return_borrowed_book(db, book_id, borrower)


def _make_unavailable(db, book_id, owner, toggle):
    if toggle == "archived":
        book_service.update_archived_status(db, book_id, owner)
    else:
        book_service.update_shareable_status(db, book_id, owner)


@pytest.mark.parametrize("toggle", ["archived", "unshared"])
def test_unavailable_book_cannot_be_borrowed(db, book_id, owner, borrower, toggle):
    _make_unavailable(db, book_id, owner, toggle)
    with pytest.raises(OperationNotPermittedError, match="cannot be borrowed since it is archived or not shareable"):
        book_service.borrow_book(db, book_id, borrower)


@pytest.mark.parametrize("toggle", ["archived", "unshared"])
def test_unavailable_book_cannot_be_returned(db, book_id, owner, borrower, toggle):
    book_service.borrow_book(db, book_id, borrower)
    _make_unavailable(db, book_id, owner, toggle)
    with pytest.raises(OperationNotPermittedError, match="archived or not shareable"):
        book_service.return_borrowed_book(db, book_id, borrower)


@pytest.mark.parametrize("toggle", ["archived", "unshared"])
def test_unavailable_book_return_cannot_be_approved(db, book_id, owner, borrower, toggle):
    book_service.borrow_book(db, book_id, borrower)
    book_service.return_borrowed_book(db, book_id, borrower)
    _make_unavailable(db, book_id, owner, toggle)
    with pytest.raises(OperationNotPermittedError, match="archived or not shareable"):
        book_service.approve_return_borrowed_book(db, book_id, owner)


def test_unknown_book(db, borrower):
    with pytest.raises(EntityNotFoundError):
        book_service.borrow_book(db, 999, borrower)


def test_borrowed_and_returned_listings(db, book_id, owner, borrower):
    book_service.borrow_book(db, book_id, borrower)

    borrowed = book_service.find_all_borrowed_books(db, 0, 10, borrower)
    assert borrowed.totalElements == 1
    assert borrowed.content[0].id == book_id
    assert borrowed.content[0].returned is False

    lent = book_service.find_all_returned_books(db, 0, 10, owner)
    assert lent.totalElements == 1
    assert book_service.find_all_borrowed_books(db, 0, 10, owner).totalElements == 0
