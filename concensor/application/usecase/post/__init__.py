"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase
from .list_hot_posts import (
    HotPostItem,
    ListHotPostsRequest,
    ListHotPostsResponse,
    ListHotPostsUseCase,
)

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "HotPostItem",
    "ListHotPostsRequest",
    "ListHotPostsResponse",
    "ListHotPostsUseCase",
]
