import pytest

from snackbar import create_app
from snackbar.config import TestConfig
from snackbar.extensions import db
from snackbar.services.repository import get_repository


@pytest.fixture()
def app(tmp_path):
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    return create_app(_Config)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def app_context(app):
    with app.app_context():
        yield
        db.session.remove()


@pytest.fixture()
def repo(app_context):
    return get_repository()


@pytest.fixture()
def admin_client(client):
    r = client.post('/admin/login', data={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 302
    return client
