"""
Admin Routes

Login, logout, dashboard and the content editors. Every editor view is
behind ``admin_required`` and receives the request's ``SessionContext``.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, session, current_app
from sqlalchemy.exc import SQLAlchemyError

from snackbar.admin import admin_bp
from snackbar.admin.decorators import (
    admin_required, current_token, get_session_manager, SESSION_TOKEN_KEY,
)
from snackbar.extensions import db
from snackbar.models import EDITABLE_FIELDS
from snackbar.services.auth import AuthFailure, CredentialStore
from snackbar.services.repository import get_repository
from snackbar.services.uploads import EXTENSION_KEY as UPLOADS_EXTENSION_KEY

logger = logging.getLogger(__name__)

LOGIN_ERROR = 'Usuario o contraseña incorrectos'


def _upload_store():
    return current_app.extensions[UPLOADS_EXTENSION_KEY]


def _list_or_empty(label, read):
    """Listing for an admin page; empty when storage fails."""
    try:
        return read()
    except SQLAlchemyError:
        logger.exception('Could not load %s', label)
        get_repository().rollback()
        flash('No se pudieron cargar los datos.', 'danger')
        return []


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------

@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login form; a valid login starts a server-side session."""
    sessions = get_session_manager()
    if request.method == 'GET':
        if sessions.current_user(current_token()) is not None:
            return redirect(url_for('admin.dashboard'))
        return render_template('admin/login.html')

    username = request.form.get('username', '')
    password = request.form.get('password', '')
    try:
        user = CredentialStore(db.session).verify(username, password)
    except AuthFailure:
        return render_template('admin/login.html', error=LOGIN_ERROR)

    # Never reuse a token that existed before the login
    sessions.logout(current_token())
    session.clear()
    session[SESSION_TOKEN_KEY] = sessions.login(user)
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/logout')
def logout():
    """Destroys the server-side session and clears the cookie."""
    get_session_manager().logout(current_token())
    session.clear()
    return redirect(url_for('admin.login'))


# -----------------------------------------------------------------------------
# Dashboard and business configuration
# -----------------------------------------------------------------------------

@admin_bp.route('/')
@admin_bp.route('')
@admin_required
def dashboard(ctx):
    try:
        counts = get_repository().content_counts()
    except SQLAlchemyError:
        logger.exception('Could not load dashboard counts')
        counts = {}
    return render_template('admin/dashboard.html', user=ctx.user, counts=counts)


@admin_bp.route('/config', methods=['GET', 'POST'])
@admin_required
def config(ctx):
    """Business configuration editor. POST overwrites every field."""
    repo = get_repository()
    if request.method == 'POST':
        fields = {field: request.form.get(field) for field in EDITABLE_FIELDS}
        try:
            repo.update_business_config(fields)
            logger.info('Business config updated by %s', ctx.user.username)
        except SQLAlchemyError:
            logger.exception('Could not update business config')
            flash('No se pudo guardar la configuración.', 'danger')
        return redirect(url_for('admin.config'))

    try:
        business = repo.get_business_config()
    except SQLAlchemyError:
        logger.exception('Could not load business config')
        business = None
    return render_template('admin/config.html',
                           config=business.to_dict() if business is not None else {},
                           user=ctx.user)


# -----------------------------------------------------------------------------
# Menu
# -----------------------------------------------------------------------------

def _menu_fields_from_form():
    """Raises ValueError when the price is not a number."""
    return {
        'category': request.form.get('category', '').strip(),
        'name': request.form.get('name', '').strip(),
        'description': request.form.get('description', '').strip(),
        'price': float(request.form.get('price') or 0),
        'available': request.form.get('available', '1') not in ('0', 'false', 'off', ''),
    }


@admin_bp.route('/menu', methods=['GET', 'POST'])
@admin_required
def menu(ctx):
    """List every menu item, or add one."""
    repo = get_repository()
    if request.method == 'POST':
        try:
            fields = _menu_fields_from_form()
        except ValueError:
            flash('El precio debe ser un número.', 'danger')
            return redirect(url_for('admin.menu'))
        fields['image'] = _upload_store().save_file(request.files.get('image'))
        try:
            item = repo.add_menu_item(**fields)
            flash(f'"{item.name}" agregado al menú.', 'success')
        except SQLAlchemyError:
            _upload_store().delete(fields['image'])
            logger.exception('Could not add menu item')
            flash('No se pudo agregar el elemento.', 'danger')
        return redirect(url_for('admin.menu'))

    items = _list_or_empty('menu items', repo.list_menu_items)
    return render_template('admin/menu.html', items=items, user=ctx.user)


@admin_bp.route('/menu/<int:item_id>/edit', methods=['POST'])
@admin_required
def edit_menu_item(ctx, item_id):
    try:
        fields = _menu_fields_from_form()
    except ValueError:
        flash('El precio debe ser un número.', 'danger')
        return redirect(url_for('admin.menu'))
    image = _upload_store().save_file(request.files.get('image'))
    if image:
        fields['image'] = image
    try:
        item = get_repository().update_menu_item(item_id, **fields)
    except SQLAlchemyError:
        _upload_store().delete(image)
        logger.exception('Could not update menu item %s', item_id)
        flash('No se pudo actualizar el elemento.', 'danger')
        return redirect(url_for('admin.menu'))
    if item is None:
        _upload_store().delete(image)
        flash('Elemento no encontrado.', 'warning')
    else:
        flash(f'"{item.name}" actualizado.', 'success')
    return redirect(url_for('admin.menu'))


@admin_bp.route('/menu/<int:item_id>/toggle', methods=['POST'])
@admin_required
def toggle_menu_item(ctx, item_id):
    try:
        item = get_repository().toggle_menu_item(item_id)
    except SQLAlchemyError:
        logger.exception('Could not toggle menu item %s', item_id)
        flash('No se pudo actualizar el elemento.', 'danger')
        return redirect(url_for('admin.menu'))
    if item is None:
        flash('Elemento no encontrado.', 'warning')
    return redirect(url_for('admin.menu'))


@admin_bp.route('/menu/<int:item_id>/delete', methods=['POST'])
@admin_required
def delete_menu_item(ctx, item_id):
    try:
        deleted = get_repository().delete_menu_item(item_id)
    except SQLAlchemyError:
        logger.exception('Could not delete menu item %s', item_id)
        flash('No se pudo eliminar el elemento.', 'danger')
        return redirect(url_for('admin.menu'))
    flash('Elemento eliminado.' if deleted else 'Elemento no encontrado.',
          'success' if deleted else 'warning')
    return redirect(url_for('admin.menu'))


# -----------------------------------------------------------------------------
# Blog
# -----------------------------------------------------------------------------

@admin_bp.route('/blog', methods=['GET', 'POST'])
@admin_required
def blog(ctx):
    """All posts (published or not), or create a new one."""
    repo = get_repository()
    if request.method == 'POST':
        image = _upload_store().save_file(request.files.get('image'))
        try:
            repo.add_post(title=request.form.get('title'),
                          content=request.form.get('content'),
                          image=image,
                          published=request.form.get('published', '1') not in ('0', 'false', 'off', ''))
            flash('Publicación creada.', 'success')
        except SQLAlchemyError:
            _upload_store().delete(image)
            logger.exception('Could not create blog post')
            flash('No se pudo crear la publicación.', 'danger')
        return redirect(url_for('admin.blog'))

    posts = _list_or_empty('blog posts', repo.list_posts)
    return render_template('admin/blog.html', posts=posts, user=ctx.user)


@admin_bp.route('/blog/<int:post_id>/toggle', methods=['POST'])
@admin_required
def toggle_post(ctx, post_id):
    repo = get_repository()
    try:
        post = repo.get_post(post_id)
        if post is not None:
            repo.set_post_published(post_id, not post.published)
    except SQLAlchemyError:
        logger.exception('Could not toggle blog post %s', post_id)
        flash('No se pudo actualizar la publicación.', 'danger')
        return redirect(url_for('admin.blog'))
    if post is None:
        flash('Publicación no encontrada.', 'warning')
    return redirect(url_for('admin.blog'))


@admin_bp.route('/blog/<int:post_id>/delete', methods=['POST'])
@admin_required
def delete_post(ctx, post_id):
    try:
        deleted = get_repository().delete_post(post_id)
    except SQLAlchemyError:
        logger.exception('Could not delete blog post %s', post_id)
        flash('No se pudo eliminar la publicación.', 'danger')
        return redirect(url_for('admin.blog'))
    flash('Publicación eliminada.' if deleted else 'Publicación no encontrada.',
          'success' if deleted else 'warning')
    return redirect(url_for('admin.blog'))


# -----------------------------------------------------------------------------
# Gallery
# -----------------------------------------------------------------------------

@admin_bp.route('/gallery', methods=['GET', 'POST'])
@admin_required
def gallery(ctx):
    repo = get_repository()
    if request.method == 'POST':
        image = _upload_store().save_file(request.files.get('image'))
        if image is None:
            flash('Selecciona una imagen.', 'danger')
            return redirect(url_for('admin.gallery'))
        try:
            repo.add_gallery_item(image, request.form.get('caption'))
            flash('Imagen agregada a la galería.', 'success')
        except SQLAlchemyError:
            _upload_store().delete(image)
            logger.exception('Could not add gallery item')
            flash('No se pudo agregar la imagen.', 'danger')
        return redirect(url_for('admin.gallery'))

    items = _list_or_empty('gallery', repo.list_gallery)
    return render_template('admin/gallery.html', items=items, user=ctx.user)


@admin_bp.route('/gallery/<int:item_id>/delete', methods=['POST'])
@admin_required
def delete_gallery_item(ctx, item_id):
    try:
        deleted = get_repository().delete_gallery_item(item_id)
    except SQLAlchemyError:
        logger.exception('Could not delete gallery item %s', item_id)
        flash('No se pudo eliminar la imagen.', 'danger')
        return redirect(url_for('admin.gallery'))
    flash('Imagen eliminada.' if deleted else 'Imagen no encontrada.',
          'success' if deleted else 'warning')
    return redirect(url_for('admin.gallery'))


# -----------------------------------------------------------------------------
# Contact messages
# -----------------------------------------------------------------------------

@admin_bp.route('/messages')
@admin_required
def messages(ctx):
    messages = _list_or_empty('contact messages', get_repository().list_contact_messages)
    return render_template('admin/messages.html', messages=messages, user=ctx.user)


@admin_bp.route('/messages/<int:message_id>/read', methods=['POST'])
@admin_required
def mark_message_read(ctx, message_id):
    try:
        record = get_repository().mark_message_read(message_id)
    except SQLAlchemyError:
        logger.exception('Could not mark message %s as read', message_id)
        flash('No se pudo actualizar el mensaje.', 'danger')
        return redirect(url_for('admin.messages'))
    if record is None:
        flash('Mensaje no encontrado.', 'warning')
    return redirect(url_for('admin.messages'))
