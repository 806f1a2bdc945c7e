import pytest

from webapp.app import app, tasks


@pytest.fixture
def client():
    tasks.clear()
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c
    tasks.clear()


def test_add_update_delete_keeps_order(client):
    client.post("/add", data={"id": "1", "title": "first"})
    client.post("/add", data={"id": "2", "title": "second"})
    client.post("/add", data={"id": "3", "title": "third"})
    client.post("/add", data={"id": "1", "title": "first again"})

    assert list(tasks.items()) == [(1, "first again"), (2, "second"), (3, "third")]

    resp = client.post("/delete", data={"id": "2"})
    assert resp.status_code == 302
    assert list(tasks) == [1, 3]
    assert tasks.position_of(3) == 1

    page = client.get("/").get_data(as_text=True)
    assert page.index("first again") < page.index("third")
    assert "second" not in page


def test_bad_id_is_rejected(client):
    resp = client.post("/add", data={"id": "abc", "title": "x"})
    assert resp.status_code == 400
    assert tasks.is_empty()
