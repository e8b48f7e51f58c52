import pytest

from app.config import settings

BOOKS = f"{settings.api_prefix}/books"
FEEDBACKS = f"{settings.api_prefix}/feedbacks"


@pytest.fixture
def owner(make_user):
    return make_user(email="owner@example.com")


@pytest.fixture
def book_id(client, owner, headers_for):
    response = client.post(BOOKS, json={
        "title": "Solaris",
        "authorName": "Stanislaw Lem",
        "isbn": "9780156027601",
        "synopsis": "A sentient ocean.",
        "shareable": True,
    }, headers=headers_for(owner))
    return response.json()


def _feedback(client, headers, book_id, note=4, comment="Great read"):
    return client.post(FEEDBACKS, json={"note": note, "comment": comment, "bookId": book_id}, headers=headers)


def test_feedback_and_rate(client, make_user, book_id, headers_for):
    alice = make_user(email="alice@example.com")
    carol = make_user(email="carol@example.com")

    assert _feedback(client, headers_for(alice), book_id, note=4).status_code == 200
    assert _feedback(client, headers_for(carol), book_id, note=3.5).status_code == 200

    book = client.get(f"{BOOKS}/{book_id}", headers=headers_for(alice)).json()
    assert book["rate"] == 3.8

    page = client.get(f"{FEEDBACKS}/book/{book_id}", headers=headers_for(alice)).json()
    assert page["totalElements"] == 2
    own = {item["note"]: item["ownFeedback"] for item in page["content"]}
    assert own == {4.0: True, 3.5: False}


def test_owner_cannot_give_feedback(client, owner, book_id, headers_for):
    response = _feedback(client, headers_for(owner), book_id)
    assert response.status_code == 403
    assert response.json()["error"] == "You cannot give feedback to your own book"


def test_feedback_on_archived_book_rejected(client, make_user, owner, book_id, headers_for):
    client.patch(f"{BOOKS}/archived/{book_id}", headers=headers_for(owner))
    response = _feedback(client, headers_for(make_user()), book_id)
    assert response.status_code == 403


def test_feedback_on_unknown_book(client, make_user, headers_for):
    response = _feedback(client, headers_for(make_user()), 777)
    assert response.status_code == 404


@pytest.mark.parametrize("payload,field,code", [
    ({"note": 6, "comment": "x", "bookId": 1}, "note", "202"),
    ({"note": -1, "comment": "x", "bookId": 1}, "note", "201"),
    ({"note": 3, "comment": "  ", "bookId": 1}, "comment", "203"),
    ({"note": 3, "comment": "x"}, "bookId", "204"),
])
def test_feedback_validation(client, make_user, headers_for, payload, field, code):
    response = client.post(FEEDBACKS, json=payload, headers=headers_for(make_user()))
    assert response.status_code == 400
    assert response.json()["errors"][field] == code


def test_feedback_with_nan_note_rejected(client, make_user, book_id, headers_for):
    headers = {**headers_for(make_user()), "Content-Type": "application/json"}
    body = '{"note": NaN, "comment": "x", "bookId": %d}' % book_id
    response = client.post(FEEDBACKS, content=body, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"]["note"] == "202"


def test_feedback_on_unshared_book_rejected(client, make_user, owner, book_id, headers_for):
    client.patch(f"{BOOKS}/shareable/{book_id}", headers=headers_for(owner))
    response = _feedback(client, headers_for(make_user()), book_id)
    assert response.status_code == 403
    assert "archived or not shareable" in response.json()["error"]
