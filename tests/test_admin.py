import io
import os

import pytest
from sqlalchemy.exc import OperationalError

from snackbar.admin.decorators import SESSION_TOKEN_KEY, get_session_manager
from snackbar.extensions import db
from snackbar.models import BusinessConfig, BlogPost, GalleryItem, MenuItem, ContactMessage
from snackbar.services.repository import get_repository

PROTECTED_PAGES = ['/admin', '/admin/config', '/admin/menu', '/admin/blog',
                   '/admin/gallery', '/admin/messages']


@pytest.mark.parametrize('path', PROTECTED_PAGES)
def test_admin_pages_redirect_to_login(client, path):
    r = client.get(path)
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/login')


def test_protected_mutation_redirects_without_touching_data(app, client):
    r = client.post('/admin/config', data={'name': 'Hacked'})
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/login')
    with app.app_context():
        assert get_repository().get_business_config().name == 'La Quinta Snack Bar'


def test_login_page_renders(client):
    r = client.get('/admin/login')
    assert r.status_code == 200
    assert 'name="password"' in r.get_data(as_text=True)


@pytest.mark.parametrize('username,password', [('admin', 'wrong'), ('nouser', 'admin123')])
def test_failed_login_shows_one_generic_error(client, username, password):
    r = client.post('/admin/login', data={'username': username, 'password': password})
    assert r.status_code == 200
    assert 'Usuario o contraseña incorrectos' in r.get_data(as_text=True)
    with client.session_transaction() as sess:
        assert SESSION_TOKEN_KEY not in sess


def test_login_then_dashboard(client):
    r = client.post('/admin/login', data={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin')

    r = client.get('/admin')
    assert r.status_code == 200
    assert 'Bienvenido, admin' in r.get_data(as_text=True)

    # already signed in
    r = client.get('/admin/login')
    assert r.status_code == 302


def test_session_cookie_is_not_secure_only(client):
    r = client.post('/admin/login', data={'username': 'admin', 'password': 'admin123'})
    cookie = r.headers.get('Set-Cookie', '')
    assert 'session=' in cookie
    assert 'Secure' not in cookie


def test_logout_destroys_server_side_session(app, admin_client):
    with admin_client.session_transaction() as sess:
        token = sess[SESSION_TOKEN_KEY]

    r = admin_client.get('/admin/logout')
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/login')
    assert admin_client.get('/admin').status_code == 302

    # replaying the old token does not bring the session back
    with admin_client.session_transaction() as sess:
        sess[SESSION_TOKEN_KEY] = token
    r = admin_client.get('/admin')
    assert r.status_code == 302
    with app.app_context():
        assert get_session_manager().current_user(token) is None

    # logging out again is harmless
    assert admin_client.get('/admin/logout').status_code == 302


def test_relogin_issues_a_new_token(admin_client):
    with admin_client.session_transaction() as sess:
        first = sess[SESSION_TOKEN_KEY]
    admin_client.post('/admin/login', data={'username': 'admin', 'password': 'admin123'})
    with admin_client.session_transaction() as sess:
        second = sess[SESSION_TOKEN_KEY]
    assert first != second


def test_config_editor_overwrites_every_field(app, admin_client):
    r = admin_client.get('/admin/config')
    assert r.status_code == 200
    assert 'La Quinta Snack Bar' in r.get_data(as_text=True)

    r = admin_client.post('/admin/config', data={'name': 'X', 'phone': 'call us', 'email': 'nope'})
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/config')

    with app.app_context():
        config = get_repository().get_business_config()
        assert (config.name, config.phone, config.email) == ('X', 'call us', 'nope')
        assert config.address is None
        assert BusinessConfig.query.count() == 1


def test_menu_admin(app, admin_client):
    r = admin_client.post('/admin/menu', data={
        'category': 'Snacks', 'name': 'Nachos', 'description': 'Con queso', 'price': '5.25',
        'image': (io.BytesIO(b'fake-jpeg'), 'nachos.jpg'),
    }, content_type='multipart/form-data')
    assert r.status_code == 302

    with app.app_context():
        item = MenuItem.query.filter_by(name='Nachos').one()
        assert item.price == 5.25
        assert item.image.startswith('uploads/') and item.image.endswith('-nachos.jpg')
        item_id = item.id

    admin_client.post(f'/admin/menu/{item_id}/edit', data={
        'category': 'Snacks', 'name': 'Nachos', 'description': 'Grandes', 'price': '6'})
    admin_client.post(f'/admin/menu/{item_id}/toggle')
    with app.app_context():
        item = db.session.get(MenuItem, item_id)
        assert item.description == 'Grandes'
        assert item.price == 6.0
        assert item.image.endswith('-nachos.jpg')
        assert item.available is False

    assert 'Nachos' in admin_client.get('/admin/menu').get_data(as_text=True)
    admin_client.post(f'/admin/menu/{item_id}/delete')
    with app.app_context():
        assert db.session.get(MenuItem, item_id) is None


def test_menu_admin_rejects_non_numeric_price(app, admin_client):
    r = admin_client.post('/admin/menu', data={'category': 'Snacks', 'name': 'Raro', 'price': 'gratis'})
    assert r.status_code == 302
    with app.app_context():
        assert MenuItem.query.filter_by(name='Raro').first() is None


def test_unknown_ids_redirect_back_to_listing(admin_client):
    for path, listing in [('/admin/menu/999/toggle', '/admin/menu'),
                          ('/admin/menu/999/delete', '/admin/menu'),
                          ('/admin/blog/999/toggle', '/admin/blog'),
                          ('/admin/blog/999/delete', '/admin/blog'),
                          ('/admin/gallery/999/delete', '/admin/gallery'),
                          ('/admin/messages/999/read', '/admin/messages')]:
        r = admin_client.post(path)
        assert r.status_code == 302
        assert r.headers['Location'].endswith(listing)


def test_blog_admin(app, admin_client):
    admin_client.post('/admin/blog', data={'title': 'Borrador', 'content': 'x', 'published': '0'})
    with app.app_context():
        post = BlogPost.query.filter_by(title='Borrador').one()
        assert post.published is False
        post_id = post.id

    assert 'Borrador' in admin_client.get('/admin/blog').get_data(as_text=True)
    assert admin_client.get(f'/blog/{post_id}').status_code == 302

    admin_client.post(f'/admin/blog/{post_id}/toggle')
    assert admin_client.get(f'/blog/{post_id}').status_code == 200

    admin_client.post(f'/admin/blog/{post_id}/delete')
    with app.app_context():
        assert BlogPost.query.count() == 0


def test_gallery_admin(app, admin_client):
    r = admin_client.post('/admin/gallery', data={'caption': 'Sin foto'})
    assert r.status_code == 302
    with app.app_context():
        assert GalleryItem.query.count() == 0

    admin_client.post('/admin/gallery', data={
        'caption': 'Terraza', 'image': (io.BytesIO(b'png'), 'terraza.png'),
    }, content_type='multipart/form-data')
    with app.app_context():
        item = GalleryItem.query.one()
        assert item.caption == 'Terraza'
        item_id = item.id

    assert 'Terraza' in admin_client.get('/').get_data(as_text=True)
    admin_client.post(f'/admin/gallery/{item_id}/delete')
    with app.app_context():
        assert GalleryItem.query.count() == 0


def test_messages_admin(app, admin_client):
    admin_client.post('/contact', data={'name': 'Ana', 'email': 'ana@example.com', 'message': 'Hola'})
    r = admin_client.get('/admin/messages')
    assert 'Hola' in r.get_data(as_text=True)
    assert 'Mensajes sin leer: 1' in admin_client.get('/admin').get_data(as_text=True)

    with app.app_context():
        message_id = ContactMessage.query.one().id
    admin_client.post(f'/admin/messages/{message_id}/read')
    with app.app_context():
        assert ContactMessage.query.one().read is True


@pytest.mark.parametrize('path,method', [
    ('/admin/menu', 'list_menu_items'),
    ('/admin/blog', 'list_posts'),
    ('/admin/gallery', 'list_gallery'),
    ('/admin/messages', 'list_contact_messages'),
])
def test_listing_pages_render_empty_when_storage_fails(app, admin_client, monkeypatch, path, method):
    def broken():
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    with app.app_context():
        monkeypatch.setattr(get_repository(), method, broken)
    r = admin_client.get(path)
    assert r.status_code == 200
    assert 'No se pudieron cargar los datos.' in r.get_data(as_text=True)


def _uploaded_files(app):
    return os.listdir(app.config['UPLOAD_FOLDER'])


def test_failed_menu_insert_removes_its_upload(app, admin_client, monkeypatch):
    def broken(**fields):
        raise OperationalError('INSERT', {}, Exception('disk full'))

    with app.app_context():
        monkeypatch.setattr(get_repository(), 'add_menu_item', broken)
    r = admin_client.post('/admin/menu', data={
        'category': 'Snacks', 'name': 'Nachos', 'price': '5',
        'image': (io.BytesIO(b'fake-jpeg'), 'nachos.jpg'),
    }, content_type='multipart/form-data')
    assert r.status_code == 302
    assert _uploaded_files(app) == []


def test_failed_post_insert_removes_its_upload(app, admin_client, monkeypatch):
    def broken(**fields):
        raise OperationalError('INSERT', {}, Exception('disk full'))

    with app.app_context():
        monkeypatch.setattr(get_repository(), 'add_post', broken)
    admin_client.post('/admin/blog', data={
        'title': 'Hola', 'content': 'x', 'image': (io.BytesIO(b'png'), 'portada.png'),
    }, content_type='multipart/form-data')
    assert _uploaded_files(app) == []


def test_editing_unknown_menu_item_keeps_no_upload(app, admin_client):
    admin_client.post('/admin/menu/999/edit', data={
        'category': 'Snacks', 'name': 'Nada', 'price': '1',
        'image': (io.BytesIO(b'png'), 'nada.png'),
    }, content_type='multipart/form-data')
    assert _uploaded_files(app) == []
