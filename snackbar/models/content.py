"""
Blog, Gallery and Contact Models
"""

from datetime import datetime

from snackbar.extensions import db


class BlogPost(db.Model):
    """Blog post; only published posts reach the public site"""
    __tablename__ = 'blog_posts'
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200))
    content = db.Column(db.Text)
    image = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    published = db.Column(db.Boolean, nullable=False, default=True)
    
    def __repr__(self):
        return f'<BlogPost {self.id} {self.title!r}>'


class GalleryItem(db.Model):
    """Photo shown in the gallery section"""
    __tablename__ = 'gallery'
    
    id = db.Column(db.Integer, primary_key=True)
    image = db.Column(db.String(255))
    caption = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    
    def __repr__(self):
        return f'<GalleryItem {self.image}>'


class ContactMessage(db.Model):
    """Message submitted through the public contact form"""
    __tablename__ = 'contact_messages'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    message = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    read = db.Column(db.Boolean, nullable=False, default=False)
    
    def __repr__(self):
        return f'<ContactMessage from {self.email}>'
