"""Public blog router."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.dependencies import get_blog_service
from ..schemas.content import BlogListing, BlogPost
from ..services.content import BlogPostService
from ..services.filters import filter_posts, find_by_slug, published_only, split_featured
from .common import PROBLEM_RESPONSES, model_response, require, unwrap

router = APIRouter(prefix="/v1/blog", tags=["blog"], responses=PROBLEM_RESPONSES)


@router.get("", response_model=BlogListing)
async def list_posts(
    category: str = Query("", description="Category name; empty or 'All' returns every post"),
    posts: BlogPostService = Depends(get_blog_service),
) -> JSONResponse:
    """Published posts: the first featured one separately, then the rest."""
    rows = unwrap(await posts.fetch(), "list_posts")
    featured, rest = split_featured(filter_posts(published_only(rows), category))
    listing = BlogListing(
        featured=BlogPost.model_validate(featured) if featured is not None else None,
        posts=[BlogPost.model_validate(post) for post in rest],
    )
    return model_response(listing)


@router.get("/{slug}", response_model=BlogPost)
async def get_post(slug: str, posts: BlogPostService = Depends(get_blog_service)) -> JSONResponse:
    rows = unwrap(await posts.fetch(), "get_post")
    post = require(find_by_slug(published_only(rows), slug), "blog post", slug)
    return model_response(BlogPost.model_validate(post))
