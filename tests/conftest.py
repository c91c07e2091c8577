import pytest

from quotealign.models import PostReference


@pytest.fixture
def post():
    return PostReference(post_id=42, user_id=7, author="alice", time=1700000000)


@pytest.fixture
def wrapper():
    """A phpBB-style quote wrapper, as the rendering layer would supply it."""

    def _wrap(content: str, post: PostReference) -> str:
        return (
            f'[quote="{post.author}" post_id={post.post_id} time={post.time} user_id={post.user_id}]'
            f"{content}[/quote]"
        )

    return _wrap


@pytest.fixture
def rich_post():
    """Rich source of a post mixing BBCode and markdown."""
    return (
        "## Release notes\n"
        "We shipped [b]partial quoting[/b] today.\n"
        "- faster [i]matching[/i]\n"
        "- see [the docs](https://example.com/docs) for details\n"
    )
