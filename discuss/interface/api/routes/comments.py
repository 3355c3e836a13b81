"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from pydantic import BaseModel

from discuss.application.usecase.comment import (
    CommentRowResponse,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from discuss.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from discuss.domain.service import JWTService

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def _require_user(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


def _store_unavailable(e: PersistenceError) -> HTTPException:
    logfire.error("Comment store failure", error=str(e))
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Comment store unavailable",
    )


@router.get("/posts/{post_id}/comments", response_model=GetThreadResponse)
async def get_thread(
    post_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
) -> GetThreadResponse:
    """Get the comments of a post in display order.

    Each comment is followed by its replies, oldest first, with its depth.
    Replies whose parent is no longer present are listed as roots.

    Args:
        post_id: Post UUID
        get_thread_use_case: Get thread use case from DI

    Returns:
        Flattened thread with total comment count
    """
    try:
        return await get_thread_use_case.execute(GetThreadRequest(post_id=post_id))
    except PersistenceError as e:
        raise _store_unavailable(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/posts/{post_id}/comments/rows", response_model=ListCommentsResponse)
async def list_comment_rows(
    post_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
) -> ListCommentsResponse:
    """Get the flat comment rows of a post, author relation attached."""
    try:
        return await list_comments_use_case.execute(
            ListCommentsRequest(post_id=post_id)
        )
    except PersistenceError as e:
        raise _store_unavailable(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    body: str
    parent_id: str | None = None  # Parent comment ID for replies


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment body and optional parent
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Store-assigned comment id and creation time

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = _require_user(jwt_service, auth_token, "create comments")

    try:
        use_case_request = CreateCommentRequest(
            post_id=post_id,
            body=request.body,
            author_id=user_id,
            parent_id=request.parent_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        logfire.warn("Comment creation failed - parent not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise _store_unavailable(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/comments/{comment_id}", response_model=CommentRowResponse)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> CommentRowResponse:
    """Get a single comment row."""
    try:
        return await get_comment_use_case.execute(comment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise _store_unavailable(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Delete one of the caller's comments together with all replies to it.

    Raises:
        HTTPException: If not authenticated, not the author, or not found
    """
    user_id = _require_user(jwt_service, auth_token, "delete comments")

    try:
        await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise _store_unavailable(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
