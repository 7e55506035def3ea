"""
User Model
"""

from snackbar.extensions import db


class User(db.Model):
    """Admin account. ``password`` always holds a salted hash."""
    __tablename__ = 'users'
    
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='admin')
    
    def __repr__(self):
        return f'<User {self.username}>'
