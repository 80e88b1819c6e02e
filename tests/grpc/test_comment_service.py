from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.comment.entity import Comment
from domain.comment.repository import CommentNotFoundError, CommentRepository
from domain.common.exceptions import CommentNotFoundException, InvalidUUIDException
from grpc_app.generated import comment_pb2
from grpc_app.services.comment_service import CommentService


class UnknownStoreError(Exception):
    pass


class VideoLookupError(Exception):
    pass


MALFORMED_IDS = ["", "not-a-uuid", "1234", "g" * 32, "123e4567-e89b-12d3-a456-42661417400"]


@pytest.fixture
def dao():
    return AsyncMock(spec=CommentRepository)


@pytest.fixture
def video_client():
    client = AsyncMock()
    client.get_video.return_value = object()
    return client


@pytest.fixture
def svc(dao, video_client):
    return CommentService(dao, video_client)


def _comment(video_id="65a0c0ffee0000000000beef", content="nice"):
    now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    return Comment(id=uuid4(), video_id=video_id, content=content, created_at=now, updated_at=now)


async def test_healthz(svc):
    resp = await svc.Healthz(comment_pb2.HealthzRequest(), None)
    assert resp.status == "ok"


class TestListComment:
    async def test_returns_comments_in_dao_order(self, svc, dao):
        comments = [_comment(content="a"), _comment(content="b")]
        dao.list_by_video_id.return_value = comments

        resp = await svc.ListComment(
            comment_pb2.ListCommentRequest(video_id="vid", limit=10, offset=5), None
        )

        dao.list_by_video_id.assert_awaited_once_with("vid", limit=10, offset=5)
        assert [c.id for c in resp.comments] == [str(c.id) for c in comments]
        assert [c.content for c in resp.comments] == ["a", "b"]
        assert resp.comments[0].created_at.ToDatetime(tzinfo=timezone.utc) == comments[0].created_at

    async def test_store_error_propagates(self, svc, dao):
        err = UnknownStoreError("boom")
        dao.list_by_video_id.side_effect = err

        with pytest.raises(UnknownStoreError) as ei:
            await svc.ListComment(comment_pb2.ListCommentRequest(video_id="vid"), None)
        assert ei.value is err


class TestCreateComment:
    async def test_returns_id_reported_by_storage(self, svc, dao, video_client):
        stored_id = uuid4()
        dao.create.return_value = stored_id

        resp = await svc.CreateComment(
            comment_pb2.CreateCommentRequest(video_id="vid", content="hello"), None
        )

        assert resp.id == str(stored_id)
        video_client.get_video.assert_awaited_once_with("vid", None)
        (created,), _ = dao.create.await_args
        assert created.video_id == "vid"
        assert created.content == "hello"

    async def test_video_lookup_failure_does_not_persist(self, svc, dao, video_client):
        err = VideoLookupError("video not found")
        video_client.get_video.side_effect = err

        with pytest.raises(VideoLookupError) as ei:
            await svc.CreateComment(
                comment_pb2.CreateCommentRequest(video_id="missing", content="x"), None
            )

        assert ei.value is err
        dao.create.assert_not_awaited()

    async def test_store_error_propagates(self, svc, dao):
        dao.create.side_effect = UnknownStoreError("insert failed")

        with pytest.raises(UnknownStoreError):
            await svc.CreateComment(
                comment_pb2.CreateCommentRequest(video_id="vid", content="x"), None
            )


class TestUpdateComment:
    @pytest.mark.parametrize("bad_id", MALFORMED_IDS)
    async def test_malformed_id_skips_storage(self, svc, dao, bad_id):
        with pytest.raises(InvalidUUIDException):
            await svc.UpdateComment(comment_pb2.UpdateCommentRequest(id=bad_id, content="x"), None)
        dao.update.assert_not_awaited()

    async def test_not_found_is_translated(self, svc, dao):
        dao.update.side_effect = CommentNotFoundError("gone")
        comment_id = uuid4()

        with pytest.raises(CommentNotFoundException) as ei:
            await svc.UpdateComment(
                comment_pb2.UpdateCommentRequest(id=str(comment_id), content="x"), None
            )
        assert ei.value.details == {"comment_id": str(comment_id)}

    async def test_unknown_error_passes_through(self, svc, dao):
        err = UnknownStoreError("boom")
        dao.update.side_effect = err

        with pytest.raises(UnknownStoreError) as ei:
            await svc.UpdateComment(
                comment_pb2.UpdateCommentRequest(id=str(uuid4()), content="x"), None
            )
        assert ei.value is err

    async def test_returns_updated_comment(self, svc, dao):
        comment_id = uuid4()

        async def _update(comment):
            comment.video_id = "vid"
            comment.updated_at = datetime(2024, 5, 1, tzinfo=timezone.utc)

        dao.update.side_effect = _update

        resp = await svc.UpdateComment(
            comment_pb2.UpdateCommentRequest(id=str(comment_id), content="edited"), None
        )

        (passed,), _ = dao.update.await_args
        assert passed.id == comment_id
        assert passed.content == "edited"
        assert resp.comment.id == str(comment_id)
        assert resp.comment.content == "edited"
        assert resp.comment.video_id == "vid"


class TestDeleteComment:
    @pytest.mark.parametrize("bad_id", MALFORMED_IDS)
    async def test_malformed_id_skips_storage(self, svc, dao, bad_id):
        with pytest.raises(InvalidUUIDException):
            await svc.DeleteComment(comment_pb2.DeleteCommentRequest(id=bad_id), None)
        dao.delete.assert_not_awaited()

    async def test_not_found_is_translated(self, svc, dao):
        dao.delete.side_effect = CommentNotFoundError("gone")

        with pytest.raises(CommentNotFoundException):
            await svc.DeleteComment(comment_pb2.DeleteCommentRequest(id=str(uuid4())), None)

    async def test_unknown_error_passes_through(self, svc, dao):
        dao.delete.side_effect = UnknownStoreError("boom")

        with pytest.raises(UnknownStoreError):
            await svc.DeleteComment(comment_pb2.DeleteCommentRequest(id=str(uuid4())), None)

    async def test_success(self, svc, dao):
        comment_id = uuid4()

        resp = await svc.DeleteComment(comment_pb2.DeleteCommentRequest(id=str(comment_id)), None)

        assert resp == comment_pb2.DeleteCommentResponse()
        dao.delete.assert_awaited_once_with(comment_id)
        assert isinstance(dao.delete.await_args.args[0], UUID)


class TestDeleteCommentByVideoID:
    async def test_success(self, svc, dao):
        resp = await svc.DeleteCommentByVideoID(
            comment_pb2.DeleteCommentByVideoIDRequest(video_id="vid"), None
        )
        assert resp == comment_pb2.DeleteCommentByVideoIDResponse()
        dao.delete_by_video_id.assert_awaited_once_with("vid")

    async def test_store_error_propagates(self, svc, dao):
        dao.delete_by_video_id.side_effect = UnknownStoreError("boom")

        with pytest.raises(UnknownStoreError):
            await svc.DeleteCommentByVideoID(
                comment_pb2.DeleteCommentByVideoIDRequest(video_id="vid"), None
            )
