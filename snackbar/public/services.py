"""
Public View Services

Assembles the data for the public pages. Each read falls back to an empty
value when storage fails so the page still renders.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def _read_or_default(repo, label, read, default):
    try:
        result = read()
    except SQLAlchemyError:
        logger.exception('Public read %r failed; rendering with an empty value', label)
        repo.rollback()
        return default
    return default if result is None else result


def _config(repo):
    config = _read_or_default(repo, 'business_config', repo.get_business_config, None)
    return config.to_dict() if config is not None else {}


def home_view(repo, gallery_limit=6, posts_limit=3):
    """Config, available menu, latest gallery photos and latest posts."""
    return {
        'config': _config(repo),
        'menu_items': _read_or_default(repo, 'menu_items', repo.list_available_menu_items, []),
        'gallery': _read_or_default(repo, 'gallery', lambda: repo.list_recent_gallery(gallery_limit), []),
        'posts': _read_or_default(repo, 'posts', lambda: repo.list_published_posts(posts_limit), []),
    }


def blog_view(repo):
    return {
        'posts': _read_or_default(repo, 'posts', repo.list_published_posts, []),
        'config': _config(repo),
    }


def blog_post_view(repo, post_id):
    """``post`` is None when the id is missing or the post is unpublished."""
    return {
        'post': _read_or_default(repo, 'post', lambda: repo.get_published_post(post_id), None),
        'config': _config(repo),
    }
