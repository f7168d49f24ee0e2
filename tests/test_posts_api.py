"""
Post and comment endpoint tests over the full request lifecycle.
"""

import uuid

import pytest

JSONAPI = "application/vnd.api+json"


def post_document(attributes, resource_id=None):
    data = {"type": "posts", "attributes": attributes}
    if resource_id is not None:
        data["id"] = resource_id
    return {"data": data}


async def create_post(client, **attributes):
    response = await client.post("/api/v1/posts", json=post_document(attributes))
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_create_post(test_client):
    response = await test_client.post(
        "/api/v1/posts",
        json=post_document({"title": "Hello World", "content": "First!"}),
    )

    assert response.status_code == 201
    assert response.headers["content-type"].startswith(JSONAPI)
    data = response.json()["data"]
    assert data["type"] == "posts"
    assert data["attributes"]["slug"] == "hello-world"
    assert data["attributes"]["published"] is False
    assert response.headers["location"] == f"http://test/api/v1/posts/{data['id']}"
    assert data["links"]["self"] == response.headers["location"]


@pytest.mark.asyncio
async def test_create_post_with_client_generated_id(test_client):
    post_id = str(uuid.uuid4())

    response = await test_client.post(
        "/api/v1/posts",
        json=post_document({"title": "Mine"}, resource_id=post_id),
    )

    assert response.status_code == 201
    assert response.json()["data"]["id"] == post_id


@pytest.mark.asyncio
async def test_duplicate_titles_get_distinct_slugs(test_client):
    first = await create_post(test_client, title="Same")
    second = await create_post(test_client, title="Same")

    assert first["attributes"]["slug"] == "same"
    assert second["attributes"]["slug"] == "same-2"


@pytest.mark.asyncio
async def test_create_post_validation_error(test_client):
    response = await test_client.post("/api/v1/posts", json=post_document({"content": "no title"}))

    assert response.status_code == 422
    assert response.json()["errors"][0]["status"] == "422"

    listing = await test_client.get("/api/v1/posts")
    assert listing.json()["data"] == []


@pytest.mark.asyncio
async def test_create_with_wrong_type_conflicts(test_client):
    response = await test_client.post(
        "/api/v1/posts",
        json={"data": {"type": "comments", "attributes": {"title": "x"}}},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_read_post(test_client):
    created = await create_post(test_client, title="Readable")

    response = await test_client.get(f"/api/v1/posts/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["attributes"]["title"] == "Readable"


@pytest.mark.asyncio
async def test_read_missing_post_returns_404(test_client):
    response = await test_client.get(f"/api/v1/posts/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["errors"][0]["title"] == "Post not found"


@pytest.mark.asyncio
async def test_index_filters_sorts_and_pages(test_client):
    await create_post(test_client, title="Bravo", published=True)
    await create_post(test_client, title="Alpha", published=True)
    await create_post(test_client, title="Draft")

    published = await test_client.get("/api/v1/posts", params={"filter[published]": "true", "sort": "title"})
    titles = [item["attributes"]["title"] for item in published.json()["data"]]
    assert titles == ["Alpha", "Bravo"]

    descending = await test_client.get("/api/v1/posts", params={"sort": "-title", "page[size]": "2"})
    titles = [item["attributes"]["title"] for item in descending.json()["data"]]
    assert titles == ["Draft", "Bravo"]

    second_page = await test_client.get(
        "/api/v1/posts",
        params={"sort": "-title", "page[size]": "2", "page[number]": "2"},
    )
    titles = [item["attributes"]["title"] for item in second_page.json()["data"]]
    assert titles == ["Alpha"]


@pytest.mark.asyncio
async def test_index_rejects_bad_page_number(test_client):
    response = await test_client.get("/api/v1/posts", params={"page[number]": "0"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_post(test_client):
    created = await create_post(test_client, title="Before")

    response = await test_client.patch(
        f"/api/v1/posts/{created['id']}",
        json=post_document({"title": "After"}, resource_id=created["id"]),
    )

    assert response.status_code == 200
    attributes = response.json()["data"]["attributes"]
    assert attributes["title"] == "After"
    assert attributes["slug"] == "before"


@pytest.mark.asyncio
async def test_update_with_mismatched_id_conflicts(test_client):
    created = await create_post(test_client, title="Before")

    response = await test_client.patch(
        f"/api/v1/posts/{created['id']}",
        json=post_document({"title": "After"}, resource_id=str(uuid.uuid4())),
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_updating_hook_rejection_rolls_back(test_client):
    created = await create_post(test_client, title="Live", published=True)

    response = await test_client.patch(
        f"/api/v1/posts/{created['id']}",
        json=post_document({"title": "Renamed", "slug": "renamed"}, resource_id=created["id"]),
    )

    assert response.status_code == 409
    current = await test_client.get(f"/api/v1/posts/{created['id']}")
    attributes = current.json()["data"]["attributes"]
    assert attributes["title"] == "Live"
    assert attributes["slug"] == "live"


@pytest.mark.asyncio
async def test_delete_post_removes_its_comments(test_client):
    created = await create_post(test_client, title="Doomed")
    comment = await test_client.post(
        "/api/v1/comments",
        json={
            "data": {
                "type": "comments",
                "attributes": {"body": "Nice"},
                "relationships": {"post": {"data": {"type": "posts", "id": created["id"]}}},
            }
        },
    )
    assert comment.status_code == 201

    response = await test_client.delete(f"/api/v1/posts/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert (await test_client.get(f"/api/v1/posts/{created['id']}")).status_code == 404
    comment_id = comment.json()["data"]["id"]
    assert (await test_client.get(f"/api/v1/comments/{comment_id}")).status_code == 404


@pytest.mark.asyncio
async def test_comment_requires_existing_post(test_client):
    response = await test_client.post(
        "/api/v1/comments",
        json={
            "data": {
                "type": "comments",
                "attributes": {"body": "Orphan"},
                "relationships": {"post": {"data": {"type": "posts", "id": str(uuid.uuid4())}}},
            }
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_comments_filter_by_post(test_client):
    first = await create_post(test_client, title="First")
    second = await create_post(test_client, title="Second")
    for post, body in ((first, "one"), (second, "two"), (first, "three")):
        await test_client.post(
            "/api/v1/comments",
            json={
                "data": {
                    "type": "comments",
                    "attributes": {"body": body},
                    "relationships": {"post": {"data": {"type": "posts", "id": post["id"]}}},
                }
            },
        )

    response = await test_client.get(
        "/api/v1/comments",
        params={"filter[post_id]": first["id"], "sort": "body"},
    )

    bodies = [item["attributes"]["body"] for item in response.json()["data"]]
    assert bodies == ["one", "three"]


@pytest.mark.asyncio
async def test_recreated_title_after_delete_gets_free_slug(test_client):
    first = await create_post(test_client, title="Same")
    second = await create_post(test_client, title="Same")
    assert (await test_client.delete(f"/api/v1/posts/{first['id']}")).status_code == 204

    third = await create_post(test_client, title="Same")

    assert second["attributes"]["slug"] == "same-2"
    assert third["attributes"]["slug"] == "same"
    fourth = await create_post(test_client, title="Same")
    assert fourth["attributes"]["slug"] == "same-3"


@pytest.mark.asyncio
async def test_derived_slug_skips_client_chosen_slugs(test_client):
    await create_post(test_client, title="Taken")
    await create_post(test_client, title="Other", slug="taken-2")

    derived = await create_post(test_client, title="Taken")

    assert derived["attributes"]["slug"] == "taken-3"


@pytest.mark.asyncio
async def test_duplicate_client_slug_conflicts(test_client):
    await create_post(test_client, title="Original", slug="clash")

    response = await test_client.post(
        "/api/v1/posts",
        json=post_document({"title": "Copy", "slug": "clash"}),
    )

    assert response.status_code == 409
    listing = await test_client.get("/api/v1/posts")
    assert [item["attributes"]["title"] for item in listing.json()["data"]] == ["Original"]
