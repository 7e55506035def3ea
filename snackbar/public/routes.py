"""
Public Routes

Home page, blog and the contact form endpoint.
"""

from flask import current_app, jsonify, redirect, render_template, request, url_for

from snackbar.public import public_bp
from snackbar.public.services import home_view, blog_view, blog_post_view
from snackbar.services.repository import get_repository

# SQLite INTEGER is a signed 64-bit value
MIN_ROW_ID = -2 ** 63
MAX_ROW_ID = 2 ** 63 - 1


@public_bp.route('/')
def index():
    """Home page with business info, menu, gallery and latest posts"""
    view = home_view(get_repository(),
                     gallery_limit=current_app.config['HOME_GALLERY_LIMIT'],
                     posts_limit=current_app.config['HOME_POSTS_LIMIT'])
    return render_template('index.html', **view)


@public_bp.route('/blog')
def blog():
    return render_template('blog.html', **blog_view(get_repository()))


@public_bp.route('/blog/<post_id>')
def blog_post(post_id):
    """Single published post; anything else goes back to the blog index."""
    try:
        post_id = int(post_id)
    except ValueError:
        return redirect(url_for('public.blog'))
    if not MIN_ROW_ID <= post_id <= MAX_ROW_ID:
        return redirect(url_for('public.blog'))
    view = blog_post_view(get_repository(), post_id)
    if view['post'] is None:
        return redirect(url_for('public.blog'))
    return render_template('blog_post.html', **view)


@public_bp.route('/contact', methods=['POST'])
def contact():
    """Store a contact form submission and answer with a JSON flag."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    result = get_repository().insert_contact_message(
        data.get('name'), data.get('email'), data.get('phone'), data.get('message'))
    if not result.success:
        return jsonify(success=False, message='Error al enviar mensaje')
    return jsonify(success=True, message='Mensaje enviado correctamente')
