import logging
import re

from flask import Blueprint, redirect, request, url_for

from models.errors import SalonApiError, http_status
from models.staff import list_active_staff, pin_login
from routes.layout import render_page
from utils.auth import get_boards, get_client, get_session_store, home_path_for

logger = logging.getLogger(__name__)

bp = Blueprint('auth_routes', __name__)

PIN_PATTERN = re.compile(r'^[0-9]{4}$')

LOGIN_TEMPLATE = '''
<main class="container">
  <section class="card">
    <h1>RLH Cleaning + SOC</h1>
    <p class="muted">Sign in with your name and 4-digit PIN.</p>
    {% if active_session %}
    <a class="btn ghost" href="{{ continue_path }}">Continue as {{ active_session.full_name }}</a>
    {% endif %}
    <form class="stack" method="post" action="{{ url_for('auth_routes.login_action') }}">
      <label>
        Staff name
        <select name="full_name" required>
          {% for member in staff %}
          <option value="{{ member.full_name }}" {% if member.full_name == selected_name %}selected{% endif %}>{{ member.full_name }}</option>
          {% endfor %}
        </select>
      </label>
      <label>
        PIN
        <input type="password" name="pin" inputmode="numeric" pattern="[0-9]{4}" maxlength="4" placeholder="1234" required>
      </label>
      <button type="submit">Sign in</button>
    </form>
    {% if message %}<p class="message">{{ message }}</p>{% endif %}
  </section>
</main>
'''


def _render_login(message='', selected_name='', status=200):
    staff = []
    try:
        staff = list_active_staff(get_client())
    except SalonApiError as e:
        message = message or str(e) or 'Failed to load active staff'

    active_session = get_session_store().load()
    if not selected_name and staff:
        selected_name = staff[0].full_name

    page = render_page(
        LOGIN_TEMPLATE,
        title='Sign in',
        staff=staff,
        selected_name=selected_name,
        active_session=active_session,
        continue_path=home_path_for(active_session) if active_session else '',
        message=message
    )
    return page, status


@bp.route('/')
def index():
    return redirect(url_for('auth_routes.login_page'))


@bp.route('/login', methods=['GET'])
def login_page():
    return _render_login()


@bp.route('/login', methods=['POST'])
def login_action():
    full_name = request.form.get('full_name', '').strip()
    pin = request.form.get('pin', '').strip()

    if not full_name or not PIN_PATTERN.match(pin):
        return _render_login('Enter your name and a 4-digit PIN', full_name, 400)

    try:
        user = pin_login(get_client(), full_name, pin)
    except SalonApiError as e:
        return _render_login(str(e) or 'Login failed', full_name, http_status(e))

    get_session_store().save(user)
    logger.info('Signed in: %s (%s)', user.full_name, user.role)
    return redirect(home_path_for(user))


@bp.route('/logout', methods=['GET', 'POST'])
def logout():
    store = get_session_store()
    user = store.load()
    if user is not None:
        get_boards().discard(user.id)
    store.clear()
    return redirect(url_for('auth_routes.login_page'))
