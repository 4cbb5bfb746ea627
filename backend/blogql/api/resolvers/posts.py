import logging

from ariadne import MutationType, QueryType

from blogql.api.context import RequestContext
from blogql.api.inputs import PostInput, parse_input
from blogql.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

query = QueryType()
mutation = MutationType()

POST_NOT_FOUND_MESSAGE = "Post not found"


def get_post_or_404(context: RequestContext, post_id: int, field: str):
    post = context.posts.get_by_id(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND_MESSAGE, {field: "Post not exists"})
    return post


@query.field("posts")
def resolve_posts(_, info):
    context: RequestContext = info.context
    return context.posts.list()


@query.field("post")
def resolve_post(_, info, post_id):
    return get_post_or_404(info.context, post_id, "post")


@mutation.field("createPost")
def resolve_create_post(_, info, title, body, image):
    context: RequestContext = info.context
    claims = context.require_claims(
        "Unauthenticated", {"createPost": "Login first! to create new post"})
    data = parse_input(PostInput, title=title, body=body, image=image)

    author = context.users.get_by_id(claims.id)
    if author is None:
        raise AuthenticationError(
            "Account no longer exists", {"createPost": "Login again to create new post"})

    post = context.posts.create(
        title=data.title,
        body=data.body,
        image=data.image,
        author_id=author.id,
    )
    logger.info(f"Post {post.id} created by user {author.id}")
    return post


@mutation.field("updatePost")
def resolve_update_post(_, info, post_id, title, body, image):
    context: RequestContext = info.context
    claims = context.require_claims(
        "Unauthenticated", {"updatePost": "Login first! to update post"})

    post = get_post_or_404(context, post_id, "updatePost")
    if post.author_id != claims.id:
        raise AuthorizationError("Unauthorized", {
            "updatePost": "You are not the author of this post! You can't update this post"
        })
    data = parse_input(PostInput, title=title, body=body, image=image)

    # Full replace, not a merge
    post = context.posts.update(post, title=data.title, body=data.body, image=data.image)
    logger.info(f"Post {post.id} updated by user {claims.id}")
    return post


@mutation.field("removePost")
def resolve_remove_post(_, info, post_id):
    context: RequestContext = info.context
    claims = context.require_claims(
        "Unauthenticated", {"removePost": "Login first! to delete post"})

    post = get_post_or_404(context, post_id, "removePost")
    if post.author_id != claims.id:
        raise AuthorizationError("Unauthorized", {
            "removePost": "You are not the author of this post! You can't delete this post"
        })

    context.posts.delete(post)
    logger.info(f"Post {post_id} removed by user {claims.id}")
    return "Post removed successfully"
