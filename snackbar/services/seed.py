"""
Schema Initializer

Creates the tables and inserts the default rows. Safe to run on every
boot: existing rows are detected by natural key and left alone.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from snackbar.extensions import db
from snackbar.models import User, BusinessConfig, BUSINESS_CONFIG_ID, MenuItem
from snackbar.services.auth import hash_password

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_CONFIG = {
    'name': 'La Quinta Snack Bar',
    'phone': '+1 (555) 123-4567',
    'email': 'info@laquintasnackbar.com',
    'address': 'Calle Principal #123, Centro, Ciudad',
    'hours': 'Lun-Vie: 7:00 AM - 9:00 PM<br>Sáb-Dom: 8:00 AM - 10:00 PM',
    'whatsapp': '+15551234567',
}

DEFAULT_MENU_ITEMS = [
    ('Comidas Principales', 'Hamburguesa Clásica', 'Carne, lechuga, tomate, cebolla', 8.50),
    ('Comidas Principales', 'Hamburguesa Especial', 'Carne, queso, bacon, vegetales', 12.00),
    ('Comidas Principales', 'Sandwich de Pollo', 'Pollo a la parrilla, vegetales frescos', 9.00),
    ('Bebidas', 'Café Americano', 'Café recién molido', 2.50),
    ('Bebidas', 'Jugo Natural', 'Jugos de frutas frescas', 4.00),
    ('Snacks', 'Papas Fritas', 'Papas crujientes con sal', 3.50),
]


def initialize_schema():
    """Create every table that does not exist yet.

    Errors propagate: without tables the site cannot serve.
    """
    db.create_all()


def _insert_if_absent(exists, build, label):
    """Insert ``build()`` unless ``exists()`` finds the row.

    Returns True if a row was created. A unique-constraint conflict from
    a concurrent seeder counts as "already there".
    """
    try:
        if exists():
            return False
        db.session.add(build())
        db.session.commit()
        logger.info('Created default %s', label)
        return True
    except IntegrityError:
        db.session.rollback()
        logger.debug('Default %s already present', label)
        return False
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not create default %s', label)
        return False


def seed_defaults(admin_username, admin_password):
    """Insert the admin user, the business config row and the default menu."""
    _insert_if_absent(
        lambda: User.query.filter_by(username=admin_username).first() is not None,
        lambda: User(username=admin_username, password=hash_password(admin_password), role='admin'),
        f'admin user {admin_username!r}',
    )
    
    _insert_if_absent(
        lambda: db.session.get(BusinessConfig, BUSINESS_CONFIG_ID) is not None,
        lambda: BusinessConfig(id=BUSINESS_CONFIG_ID, **DEFAULT_BUSINESS_CONFIG),
        'business config',
    )
    
    for category, name, description, price in DEFAULT_MENU_ITEMS:
        _insert_if_absent(
            lambda c=category, n=name: MenuItem.query.filter_by(category=c, name=n).first() is not None,
            lambda c=category, n=name, d=description, p=price: MenuItem(category=c, name=n, description=d, price=p),
            f'menu item {category}/{name}',
        )


def initialize_database(app):
    """Create the schema and seed default rows for ``app``."""
    with app.app_context():
        initialize_schema()
        seed_defaults(app.config['ADMIN_USERNAME'], app.config['ADMIN_PASSWORD'])
