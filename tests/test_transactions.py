"""
DatabaseTransactionManager tests against in-memory SQLite.
"""

import pytest
from sqlalchemy import func, select

from resource_api.controllers.post_controller import PostController
from resource_api.db.repositories.post_repository import PostRepository
from resource_api.db.transactions import DatabaseTransactionManager
from resource_api.deps.di_container import get_container
from resource_api.hydrators.post_hydrator import PostHydrator
from resource_api.models.post import Post
from resource_api.schemas.resource import ResourceObject

class FailingPostHydrator(PostHydrator):
    """Inserts the post, then fails."""

    async def create(self, resource):
        await super().create(resource)
        raise RuntimeError("hydration failed after insert")

async def count_posts(connection_manager) -> int:
    async with connection_manager.sessionmaker()() as session:
        result = await session.execute(select(func.count(Post.id)))
        return result.scalar()

async def post_titles(connection_manager) -> list:
    async with connection_manager.sessionmaker()() as session:
        result = await session.execute(select(Post.title).order_by(Post.title))
        return list(result.scalars().all())

async def seed_post(connection_manager, title: str, slug: str):
    async with connection_manager.sessionmaker()() as session:
        post = await PostRepository(session).create(title=title, slug=slug)
        await session.commit()
        return post.id

@pytest.mark.asyncio
async def test_commits_when_closure_returns(connection_manager, connections):
    transactions = DatabaseTransactionManager(connections)
    repo = PostRepository(connections.session())

    post = await transactions.run_in_transaction(
        None,
        lambda: repo.create(title="Hello", slug="hello"),
    )

    assert post.slug == "hello"
    assert not connections.session().in_transaction()
    assert await count_posts(connection_manager) == 1

@pytest.mark.asyncio
async def test_rolls_back_and_reraises_when_closure_raises(connection_manager, connections):
    transactions = DatabaseTransactionManager(connections)
    repo = PostRepository(connections.session())

    async def work():
        await repo.create(title="Hello", slug="hello")
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        await transactions.run_in_transaction(None, work)

    assert await count_posts(connection_manager) == 0

@pytest.mark.asyncio
async def test_read_transaction_is_ended_before_work_commits(connection_manager, connections):
    post_id = await seed_post(connection_manager, "Before", "before")
    session = connections.session()
    repo = PostRepository(session)
    post = await repo.get(post_id)
    assert session.in_transaction()

    transactions = DatabaseTransactionManager(connections)
    await transactions.run_in_transaction(None, lambda: repo.update(post, title="After"))

    assert not session.in_transaction()
    assert await post_titles(connection_manager) == ["After"]

@pytest.mark.asyncio
async def test_inner_unit_of_work_rolls_back_alone(connection_manager, connections):
    transactions = DatabaseTransactionManager(connections)
    repo = PostRepository(connections.session())

    async def dropped():
        await repo.create(title="Dropped", slug="dropped")
        raise ValueError("boom")

    async def outer():
        await repo.create(title="Kept", slug="kept")
        with pytest.raises(ValueError):
            await transactions.run_in_transaction(None, dropped)

    await transactions.run_in_transaction(None, outer)

    assert not connections.session().in_transaction()
    assert await post_titles(connection_manager) == ["Kept"]

@pytest.mark.asyncio
async def test_unknown_connection_name_raises(connections):
    from resource_api.core.exceptions import JsonApiRuntimeError

    transactions = DatabaseTransactionManager(connections)

    async def work():
        return None

    with pytest.raises(JsonApiRuntimeError, match="reporting is not configured"):
        await transactions.run_in_transaction("reporting", work)

@pytest.mark.asyncio
async def test_controller_create_persists_nothing_when_hydration_fails(connection_manager, connections):
    controller = PostController(connections, hydrator=FailingPostHydrator(connections))
    resource = ResourceObject(type="posts", attributes={"title": "Never saved"})

    with pytest.raises(RuntimeError, match="hydration failed"):
        await controller.create(resource)

    assert await count_posts(connection_manager) == 0

@pytest.mark.asyncio
async def test_controller_create_commits_through_hydrator(connection_manager, connections):
    controller = PostController(connections, hydrator=PostHydrator(connections))
    resource = ResourceObject(type="posts", attributes={"title": "Hello World"})

    response = await controller.create(resource)

    assert response.status_code == 201
    assert await count_posts(connection_manager) == 1

@pytest.mark.asyncio
async def test_controller_update_commits_before_returning(connection_manager, connections):
    post_id = await seed_post(connection_manager, "Before", "before")
    record = await PostRepository(connections.session()).get(post_id)
    controller = PostController(connections, container=get_container())
    resource = ResourceObject(type="posts", id=str(post_id), attributes={"title": "After"})

    response = await controller.update(resource, record)

    assert response.status_code == 200
    assert not connections.session().in_transaction()
    assert await post_titles(connection_manager) == ["After"]

@pytest.mark.asyncio
async def test_controller_delete_commits_before_returning(connection_manager, connections):
    post_id = await seed_post(connection_manager, "Doomed", "doomed")
    record = await PostRepository(connections.session()).get(post_id)
    controller = PostController(connections, container=get_container())

    response = await controller.delete(record)

    assert response.status_code == 204
    assert not connections.session().in_transaction()
    assert await count_posts(connection_manager) == 0
