"""
Business Configuration Model
"""

from snackbar.extensions import db

# The single business_config row always has this id
BUSINESS_CONFIG_ID = 1

EDITABLE_FIELDS = (
    'name', 'phone', 'email', 'address', 'hours',
    'whatsapp', 'facebook', 'instagram', 'twitter',
)


class BusinessConfig(db.Model):
    """Contact details and social links shown on every public page"""
    __tablename__ = 'business_config'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    email = db.Column(db.String(120))
    address = db.Column(db.String(255))
    hours = db.Column(db.Text)
    whatsapp = db.Column(db.String(40))
    facebook = db.Column(db.String(255))
    instagram = db.Column(db.String(255))
    twitter = db.Column(db.String(255))
    
    def to_dict(self):
        data = {field: getattr(self, field) for field in EDITABLE_FIELDS}
        data['id'] = self.id
        return data
    
    def __repr__(self):
        return f'<BusinessConfig {self.name}>'
