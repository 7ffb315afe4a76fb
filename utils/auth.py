from functools import wraps

from flask import current_app, g, jsonify, session

from routes.layout import render_page

MANAGER_ROLES = ('manager', 'admin')
STYLIST_ROLES = ('stylist', 'manager', 'admin')

UNAUTHORIZED_TEMPLATE = '''
<main class="container">
  <section class="card">
    <h1>Access denied</h1>
    <p>You do not have access to this page. Please log in with the correct role.</p>
    <a class="btn" href="{{ url_for('auth_routes.login_page') }}">Back to login</a>
  </section>
</main>
'''


def get_session_store():
    return current_app.extensions['session_store_factory'](session)


def get_client():
    return current_app.extensions['supabase_client']


def get_boards():
    return current_app.extensions['task_boards']


def home_path_for(user):
    return '/stylist' if user.role == 'stylist' else '/manager'


def role_required(*roles):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_session_store().load()
            if user is None or user.role not in roles:
                return render_page(UNAUTHORIZED_TEMPLATE, title='Access denied'), 403
            g.user = user
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def api_role_required(*roles):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_session_store().load()
            if user is None or user.role not in roles:
                return jsonify({'success': False, 'message': 'Access denied'}), 403
            g.user = user
            return f(*args, **kwargs)
        return decorated_function
    return decorator
