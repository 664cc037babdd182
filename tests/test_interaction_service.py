import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from comment.comment_service import CommentService
from core.repository import ContentRepository
from like.like_service import LikeService
from shared.enum.post_status import PostStatus
from shared.errors import UnauthorizedError
from shared.models import Post


@pytest_asyncio.fixture
async def post(db_session: AsyncSession) -> Post:
    post = Post(user_id=1, title="Walkies", content="c", status=PostStatus.PUBLISHED)
    db_session.add(post)
    await db_session.commit()
    await db_session.refresh(post)
    return post


# --- 评论 ---


@pytest.mark.asyncio
async def test_create_comment_increments_count(db_session: AsyncSession, post: Post):
    """测试发表评论后帖子评论数加一"""
    service = CommentService(db_session)
    await service.create_comment(post.id, 2, "good boy")
    await service.create_comment(post.id, 3, "very good boy")

    refreshed = await ContentRepository(db_session).get_post_by_id(post.id)
    assert refreshed.comment_count == 2

    comments = await service.list_comments(post.id)
    assert [c.content for c in comments] == ["good boy", "very good boy"]


@pytest.mark.asyncio
async def test_delete_comment_decrements_count(db_session: AsyncSession, post: Post):
    service = CommentService(db_session)
    first = await service.create_comment(post.id, 2, "one")
    await service.create_comment(post.id, 2, "two")

    assert await service.delete_comment(first.id, 2) is True

    refreshed = await ContentRepository(db_session).get_post_by_id(post.id)
    assert refreshed.comment_count == 1
    assert [c.content for c in await service.list_comments(post.id)] == ["two"]


@pytest.mark.asyncio
async def test_comment_count_never_negative(db_session: AsyncSession, post: Post):
    """评论数已经为 0 时删除评论，计数保持 0"""
    service = CommentService(db_session)
    comment = await service.create_comment(post.id, 2, "one")

    post.comment_count = 0
    db_session.add(post)
    await db_session.commit()

    await service.delete_comment(comment.id, 2)
    refreshed = await ContentRepository(db_session).get_post_by_id(post.id)
    assert refreshed.comment_count == 0


@pytest.mark.asyncio
async def test_delete_comment_by_other_user(db_session: AsyncSession, post: Post):
    """只有评论作者可以删除评论"""
    service = CommentService(db_session)
    comment = await service.create_comment(post.id, 2, "mine")

    with pytest.raises(UnauthorizedError):
        await service.delete_comment(comment.id, 3)
    with pytest.raises(UnauthorizedError):
        await service.delete_comment(9999, 2)

    refreshed = await ContentRepository(db_session).get_post_by_id(post.id)
    assert refreshed.comment_count == 1


@pytest.mark.asyncio
async def test_comment_on_missing_post_skips_counter(db_session: AsyncSession):
    """帖子不存在时评论照常写入，只是不更新计数"""
    comment = await CommentService(db_session).create_comment(404, 2, "hello?")
    assert comment.id is not None


# --- 点赞 ---


@pytest.mark.asyncio
async def test_toggle_like_twice_restores_state(db_session: AsyncSession, post: Post):
    """测试连续两次切换点赞，状态和计数都回到原样"""
    service = LikeService(db_session)
    repo = ContentRepository(db_session)

    assert await service.is_liked(post.id, 2) is False

    assert await service.toggle_like(post.id, 2) is True
    assert await service.is_liked(post.id, 2) is True
    assert (await repo.get_post_by_id(post.id)).like_count == 1

    assert await service.toggle_like(post.id, 2) is False
    assert await service.is_liked(post.id, 2) is False
    assert (await repo.get_post_by_id(post.id)).like_count == 0


@pytest.mark.asyncio
async def test_likes_from_different_users(db_session: AsyncSession, post: Post):
    service = LikeService(db_session)
    await service.toggle_like(post.id, 2)
    await service.toggle_like(post.id, 3)

    refreshed = await ContentRepository(db_session).get_post_by_id(post.id)
    assert refreshed.like_count == 2
    assert await service.is_liked(post.id, 4) is False


@pytest.mark.asyncio
async def test_like_count_never_negative(db_session: AsyncSession, post: Post):
    service = LikeService(db_session)
    await service.toggle_like(post.id, 2)

    post.like_count = 0
    db_session.add(post)
    await db_session.commit()

    assert await service.toggle_like(post.id, 2) is False
    refreshed = await ContentRepository(db_session).get_post_by_id(post.id)
    assert refreshed.like_count == 0
