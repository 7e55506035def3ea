"""
Models Package

Exports all models for easy importing.
"""

from snackbar.models.user import User
from snackbar.models.business import BusinessConfig, BUSINESS_CONFIG_ID, EDITABLE_FIELDS
from snackbar.models.menu import MenuItem
from snackbar.models.content import BlogPost, GalleryItem, ContactMessage

__all__ = [
    'User',
    'BusinessConfig',
    'BUSINESS_CONFIG_ID',
    'EDITABLE_FIELDS',
    'MenuItem',
    'BlogPost',
    'GalleryItem',
    'ContactMessage',
]
