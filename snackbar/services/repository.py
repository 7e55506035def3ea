"""
Content Repository

All reads and writes of site content go through ``ContentRepository``.
One instance is built per application and handed to the views; tests
build their own against an isolated database.
"""

import logging
from collections import namedtuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from snackbar.models import (
    BusinessConfig, BUSINESS_CONFIG_ID, EDITABLE_FIELDS,
    MenuItem, BlogPost, GalleryItem, ContactMessage, User,
)

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'content_repository'

# Outcome of a write that must not raise across the HTTP boundary
WriteResult = namedtuple('WriteResult', ['success', 'record', 'error'])


def get_repository():
    """Return the repository bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]


class ContentRepository:
    """CRUD accessors over the content tables."""

    def __init__(self, session):
        self.session = session

    def rollback(self):
        """Discard the failed transaction so later reads can run."""
        self.session.rollback()

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    # ------------------------------------------------------------------
    # Business configuration (singleton row)
    # ------------------------------------------------------------------

    def get_business_config(self):
        return self.session.get(BusinessConfig, BUSINESS_CONFIG_ID)

    def update_business_config(self, fields):
        """Overwrite every editable field of the singleton row.

        Keys missing from ``fields`` are stored as NULL. Values are not
        validated. Returns False when the row does not exist; a second
        row is never inserted.
        """
        config = self.get_business_config()
        if config is None:
            logger.warning('business_config row %s is missing; update skipped', BUSINESS_CONFIG_ID)
            return False
        for field in EDITABLE_FIELDS:
            setattr(config, field, fields.get(field))
        self._commit()
        return True

    # ------------------------------------------------------------------
    # Menu
    # ------------------------------------------------------------------

    def list_available_menu_items(self):
        return (self.session.query(MenuItem)
                .filter(MenuItem.available.is_(True))
                .order_by(MenuItem.category.asc(), MenuItem.name.asc())
                .all())

    def list_menu_items(self):
        return (self.session.query(MenuItem)
                .order_by(MenuItem.category.asc(), MenuItem.name.asc())
                .all())

    def get_menu_item(self, item_id):
        return self.session.get(MenuItem, item_id)

    def add_menu_item(self, category, name, description=None, price=0.0, image=None, available=True):
        item = MenuItem(category=category, name=name, description=description,
                        price=price, image=image, available=available)
        self.session.add(item)
        self._commit()
        return item

    def update_menu_item(self, item_id, **fields):
        item = self.get_menu_item(item_id)
        if item is None:
            return None
        for key in ('category', 'name', 'description', 'price', 'image', 'available'):
            if key in fields:
                setattr(item, key, fields[key])
        self._commit()
        return item

    def toggle_menu_item(self, item_id):
        item = self.get_menu_item(item_id)
        if item is None:
            return None
        item.available = not item.available
        self._commit()
        return item

    def delete_menu_item(self, item_id):
        item = self.get_menu_item(item_id)
        if item is None:
            return False
        self.session.delete(item)
        self._commit()
        return True

    # ------------------------------------------------------------------
    # Blog
    # ------------------------------------------------------------------

    def list_published_posts(self, limit=None):
        query = (self.session.query(BlogPost)
                 .filter(BlogPost.published.is_(True))
                 .order_by(BlogPost.created_at.desc(), BlogPost.id.desc()))
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_published_post(self, post_id):
        """Return the post if it exists and is published, else None."""
        return (self.session.query(BlogPost)
                .filter(BlogPost.id == post_id, BlogPost.published.is_(True))
                .first())

    def list_posts(self):
        return (self.session.query(BlogPost)
                .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
                .all())

    def get_post(self, post_id):
        return self.session.get(BlogPost, post_id)

    def add_post(self, title, content, image=None, published=True):
        post = BlogPost(title=title, content=content, image=image, published=published)
        self.session.add(post)
        self._commit()
        return post

    def set_post_published(self, post_id, published):
        post = self.get_post(post_id)
        if post is None:
            return None
        post.published = published
        self._commit()
        return post

    def delete_post(self, post_id):
        post = self.get_post(post_id)
        if post is None:
            return False
        self.session.delete(post)
        self._commit()
        return True

    # ------------------------------------------------------------------
    # Gallery
    # ------------------------------------------------------------------

    def list_recent_gallery(self, limit):
        return (self.session.query(GalleryItem)
                .order_by(GalleryItem.created_at.desc(), GalleryItem.id.desc())
                .limit(limit)
                .all())

    def list_gallery(self):
        return (self.session.query(GalleryItem)
                .order_by(GalleryItem.created_at.desc(), GalleryItem.id.desc())
                .all())

    def add_gallery_item(self, image, caption=None):
        item = GalleryItem(image=image, caption=caption)
        self.session.add(item)
        self._commit()
        return item

    def delete_gallery_item(self, item_id):
        item = self.session.get(GalleryItem, item_id)
        if item is None:
            return False
        self.session.delete(item)
        self._commit()
        return True

    # ------------------------------------------------------------------
    # Contact messages
    # ------------------------------------------------------------------

    def insert_contact_message(self, name, email, phone, message):
        """Store a contact form submission as given.

        Storage errors are reported in the returned ``WriteResult``
        instead of being raised.
        """
        record = ContactMessage(name=name, email=email, phone=phone, message=message)
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception('Could not store contact message')
            return WriteResult(False, None, str(e))
        return WriteResult(True, record, None)

    def list_contact_messages(self):
        return (self.session.query(ContactMessage)
                .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
                .all())

    def mark_message_read(self, message_id):
        record = self.session.get(ContactMessage, message_id)
        if record is None:
            return None
        record.read = True
        self._commit()
        return record

    def count_unread_messages(self):
        return self.session.query(ContactMessage).filter(ContactMessage.read.is_(False)).count()

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def content_counts(self):
        return {
            'users': self.session.query(User).count(),
            'menu_items': self.session.query(MenuItem).count(),
            'posts': self.session.query(BlogPost).count(),
            'gallery': self.session.query(GalleryItem).count(),
            'messages': self.session.query(ContactMessage).count(),
            'unread_messages': self.count_unread_messages(),
        }
