"""Test the /books resource over HTTP."""
import pytest
from httpx import ASGITransport, AsyncClient
from loguru import logger

from verticals.bookstore.router import parse_author_body
from verticals.bookstore.service import get_book_service

DUNE = {"id": 1, "name": "Dune", "author": "Herbert"}


async def create(client, book=DUNE):
    return await client.post("/books", json=book)


# -- Scenario --

@pytest.mark.asyncio
async def test_book_lifecycle(client):
    resp = await create(client)
    assert resp.status_code == 201
    assert resp.headers["location"] == "/books/1"
    assert resp.json() == DUNE

    resp = await client.get("/books/1")
    assert resp.status_code == 200
    assert resp.json() == DUNE

    resp = await client.patch(
        "/books/1", content="F. Herbert", headers={"Content-Type": "text/plain"}
    )
    assert resp.status_code == 200
    assert resp.content == b""

    resp = await client.get("/books/1")
    assert resp.json() == {"id": 1, "name": "Dune", "author": "F. Herbert"}

    resp = await client.delete("/books/1")
    assert resp.status_code == 200

    resp = await client.get("/books/1")
    assert resp.status_code == 404
    assert resp.content == b""


# -- List --

@pytest.mark.asyncio
async def test_list_books(client):
    resp = await client.get("/books")
    assert resp.status_code == 200
    assert resp.json() == []

    await create(client)
    await create(client, {"id": 2, "name": "Emma", "author": "Austen"})
    resp = await client.get("/books")
    assert [b["id"] for b in resp.json()] == [1, 2]


# -- Create --

@pytest.mark.asyncio
async def test_create_conflict(client):
    await create(client)
    resp = await create(client, {"id": 1, "name": "Other", "author": "Someone"})
    assert resp.status_code == 409
    assert resp.content == b""

    resp = await client.get("/books/1")
    assert resp.json() == DUNE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"id": "abc", "name": "Dune", "author": "Herbert"},
        {"id": 1, "name": "Dune"},
        {"id": 1, "name": "", "author": "Herbert"},
        {"id": -1, "name": "Dune", "author": "Herbert"},
    ],
)
async def test_create_bad_payload(client, payload):
    resp = await client.post("/books", json=payload)
    assert resp.status_code == 400
    assert resp.content == b""


@pytest.mark.asyncio
async def test_create_malformed_json(client):
    resp = await client.post(
        "/books", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400


# -- Read --

@pytest.mark.asyncio
async def test_get_missing(client):
    resp = await client.get("/books/99")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_get_non_integer_id(client):
    resp = await client.get("/books/abc")
    assert resp.status_code == 400


# -- Full update --

@pytest.mark.asyncio
async def test_put_replaces_all_fields(client):
    await create(client)
    resp = await client.put(
        "/books/1", json={"id": 1, "name": "Dune Messiah", "author": "F. Herbert"}
    )
    assert resp.status_code == 200
    assert resp.content == b""

    resp = await client.get("/books/1")
    assert resp.json() == {"id": 1, "name": "Dune Messiah", "author": "F. Herbert"}


@pytest.mark.asyncio
async def test_put_missing(client):
    resp = await client.put("/books/1", json=DUNE)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_put_id_mismatch(client):
    await create(client)
    resp = await client.put("/books/1", json={**DUNE, "id": 2})
    assert resp.status_code == 400


# -- Partial update --

@pytest.mark.asyncio
async def test_patch_missing(client):
    resp = await client.patch("/books/5", content="Nobody")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_patch_blank_author(client):
    await create(client)
    resp = await client.patch("/books/1", content="   ")
    assert resp.status_code == 400

    resp = await client.get("/books/1")
    assert resp.json()["author"] == "Herbert"


@pytest.mark.asyncio
async def test_patch_accepts_json_string(client):
    await create(client)
    resp = await client.patch(
        "/books/1", content='"F. Herbert"', headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 200
    resp = await client.get("/books/1")
    assert resp.json()["author"] == "F. Herbert"


def test_parse_author_body():
    assert parse_author_body(b"  Tolkien \n") == "Tolkien"
    assert parse_author_body(b'"J. R. R. Tolkien"') == "J. R. R. Tolkien"
    assert parse_author_body('Ursula K. Le Guin'.encode()) == "Ursula K. Le Guin"
    assert parse_author_body(b"\xff\xfe") is None


# -- Delete --

@pytest.mark.asyncio
async def test_delete_twice(client):
    await create(client)
    assert (await client.delete("/books/1")).status_code == 200
    assert (await client.delete("/books/1")).status_code == 404

    resp = await client.get("/books")
    assert resp.json() == []


# -- Method restrictions --

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("POST", "/books/1"),
        ("PUT", "/books"),
        ("PATCH", "/books"),
        ("DELETE", "/books"),
    ],
)
async def test_method_not_allowed(client, method, path):
    resp = await client.request(method, path)
    assert resp.status_code == 405


# -- Error handling --

@pytest.mark.asyncio
async def test_error_message_is_logged(client):
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        await client.delete("/books/99")
    finally:
        logger.remove(handler_id)
    assert any("Cannot find Book with id: 99" in m for m in messages)


class ExplodingService:
    async def get_book(self, book_id):
        raise RuntimeError("store unreachable")


@pytest.mark.asyncio
async def test_store_failure_is_500_not_404(app):
    app.dependency_overrides[get_book_service] = lambda: ExplodingService()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    messages = []
    handler_id = logger.add(
        messages.append, level="INFO", format="[{extra[request_id]}] {message}"
    )
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.get("/books/1", headers={"X-Request-ID": "req-500"})
    finally:
        logger.remove(handler_id)
        app.dependency_overrides.pop(get_book_service, None)
    assert resp.status_code == 500
    assert resp.content == b""
    assert resp.headers["x-request-id"] == "req-500"
    assert any("[req-500] GET /books/1 -> 500" in m for m in messages)


# -- Column limits --

OUT_OF_RANGE_IDS = [2**31, 2**63]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"id": 2**31, "name": "Dune", "author": "Herbert"},
        {"id": 2**63, "name": "Dune", "author": "Herbert"},
        {"id": 1, "name": "x" * 256, "author": "Herbert"},
        {"id": 1, "name": "Dune", "author": "y" * 256},
    ],
)
async def test_create_beyond_column_limits(client, payload):
    resp = await client.post("/books", json=payload)
    assert resp.status_code == 400
    assert (await client.get("/books")).json() == []


@pytest.mark.asyncio
async def test_create_at_column_limits(client):
    book = {"id": 2**31 - 1, "name": "x" * 255, "author": "y" * 255}
    resp = await client.post("/books", json=book)
    assert resp.status_code == 201
    assert (await client.get(f"/books/{2**31 - 1}")).json() == book


@pytest.mark.asyncio
@pytest.mark.parametrize("book_id", OUT_OF_RANGE_IDS)
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
async def test_path_id_beyond_column_range(client, method, book_id):
    kwargs = {}
    if method == "PUT":
        kwargs["json"] = {"id": book_id, "name": "Dune", "author": "Herbert"}
    elif method == "PATCH":
        kwargs["content"] = "Herbert"
    resp = await client.request(method, f"/books/{book_id}", **kwargs)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_patch_author_too_long(client):
    await create(client)
    resp = await client.patch("/books/1", content="z" * 256)
    assert resp.status_code == 400
    assert (await client.get("/books/1")).json()["author"] == "Herbert"
