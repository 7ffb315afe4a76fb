from datetime import date

from flask import Blueprint, current_app, g, request

from models.errors import SalonApiError, http_status
from models.staff import create_assignment_with_station, list_active_staff, list_duty_checklists
from models.tasks import today_iso_date
from routes.layout import render_page
from utils.auth import MANAGER_ROLES, get_client, role_required

bp = Blueprint('manager_routes', __name__)

MANAGER_TEMPLATE = '''
<main class="container">
  <section class="card wide">
    <header class="header">
      <div>
        <h1>Manager tools</h1>
        <p class="muted">Week basis: Sunday through Saturday.</p>
      </div>
      <a class="btn ghost" href="{{ url_for('auth_routes.logout') }}">Log out</a>
    </header>

    <h2>Assign Duty</h2>
    <form class="stack" method="post" action="{{ url_for('manager_routes.assign') }}">
      <label>
        Date
        <input type="date" name="date" value="{{ selected_date }}" required>
      </label>
      <label>
        Stylist
        <select name="stylist_id" required>
          {% for member in stylists %}
          <option value="{{ member.id }}" {% if member.id == selected_stylist_id %}selected{% endif %}>{{ member.full_name }} ({{ member.role }})</option>
          {% endfor %}
        </select>
      </label>
      <label>
        Duty checklist
        <select name="checklist_id" required>
          {% for checklist in checklists %}
          <option value="{{ checklist.id }}" {% if checklist.id|string == selected_checklist_id %}selected{% endif %}>{{ checklist.name }}</option>
          {% endfor %}
        </select>
      </label>
      <button type="submit">Assign duty checklist</button>
    </form>
    {% if status %}<p class="message">{{ status }}</p>{% endif %}
  </section>
</main>
'''


def _render_manager(status='', selected_date=None, selected_stylist_id='', selected_checklist_id='',
                    assigned=False, code=200):
    client = get_client()
    stylists = []
    checklists = []
    try:
        stylists = [m for m in list_active_staff(client) if m.role != 'admin']
        checklists = list_duty_checklists(client)
    except SalonApiError as e:
        status = status or str(e) or 'Failed to load assignment data'

    if assigned:
        stylist_name = next((m.full_name for m in stylists if m.id == selected_stylist_id), 'stylist')
        status = f'Assigned duty checklist (+station) to {stylist_name} on {selected_date}.'

    page = render_page(
        MANAGER_TEMPLATE,
        title='Manager tools',
        stylists=stylists,
        checklists=checklists,
        selected_date=selected_date or today_iso_date(tz=current_app.extensions['settings'].salon_timezone),
        selected_stylist_id=selected_stylist_id,
        selected_checklist_id=selected_checklist_id,
        status=status
    )
    return page, code


def _valid_date(value):
    try:
        date.fromisoformat(value)
    except (TypeError, ValueError):
        return False
    return True


@bp.route('/manager')
@role_required(*MANAGER_ROLES)
def manager():
    return _render_manager()


@bp.route('/manager/assign', methods=['POST'])
@role_required(*MANAGER_ROLES)
def assign():
    stylist_id = request.form.get('stylist_id', '').strip()
    checklist_id = request.form.get('checklist_id', '').strip()
    assignment_date = request.form.get('date', '').strip()
    form = dict(selected_date=assignment_date or None, selected_stylist_id=stylist_id,
                selected_checklist_id=checklist_id)

    if not stylist_id or not checklist_id.isdigit() or not _valid_date(assignment_date):
        return _render_manager('Choose a date, a stylist and a duty checklist', code=400, **form)

    try:
        create_assignment_with_station(get_client(), stylist_id, assignment_date, int(checklist_id), g.user.id)
    except SalonApiError as e:
        return _render_manager(str(e) or 'Failed to assign duty checklist', code=http_status(e), **form)

    return _render_manager(assigned=True, **form)
