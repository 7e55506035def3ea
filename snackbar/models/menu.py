"""
Menu Item Model
"""

from snackbar.extensions import db


class MenuItem(db.Model):
    """A dish or drink on the public menu"""
    __tablename__ = 'menu_items'
    __table_args__ = (
        db.UniqueConstraint('category', 'name', name='uq_menu_items_category_name'),
        db.CheckConstraint('price >= 0', name='ck_menu_items_price_non_negative'),
    )
    
    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(80), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.String(255))
    price = db.Column(db.Float, nullable=False, default=0.0)
    image = db.Column(db.String(255))
    available = db.Column(db.Boolean, nullable=False, default=True)
    
    def __repr__(self):
        return f'<MenuItem {self.category}/{self.name} {self.price}>'
