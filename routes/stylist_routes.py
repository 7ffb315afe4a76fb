from flask import Blueprint, g

from routes.layout import render_page
from utils.auth import STYLIST_ROLES, get_boards, role_required

bp = Blueprint('stylist_routes', __name__)

STYLIST_TEMPLATE = '''
<main class="container">
  <section class="card">
    <header class="header">
      <h1>Stylist dashboard</h1>
      <a class="btn ghost" href="{{ url_for('auth_routes.logout') }}">Log out</a>
    </header>

    {% if message and not board.assignment_id %}
    <p class="message">{{ message }}</p>
    {% elif not board.assignment_id %}
    <p>No assignment yet.</p>
    {% elif not grouped %}
    <p class="muted">No checklist tasks found for today.</p>
    {% else %}
    <div class="stack">
      <p class="muted">{{ stylist_name }}, tap each task when complete.</p>
      {% for checklist_name, sections in grouped.items() %}
      <section class="task-group">
        <h2>{{ checklist_name }}</h2>
        {% for section_name, section_tasks in sections.items() %}
        <div class="task-section">
          <h3>{{ section_name }}</h3>
          <div class="task-list">
            {% for task in section_tasks %}
            <label class="task-row {% if task.done %}is-done{% endif %}">
              <input class="task-checkbox" type="checkbox" data-completion-id="{{ task.completion_id }}"
                     {% if task.done %}checked{% endif %} {% if board.is_pending(task.completion_id) %}disabled{% endif %}>
              <span>{{ task.task_name }}</span>
            </label>
            {% endfor %}
          </div>
        </div>
        {% endfor %}
      </section>
      {% endfor %}
      <p class="message" id="message" {% if not message %}hidden{% endif %}>{{ message }}</p>
    </div>
    {% endif %}
  </section>
</main>
<script>
    function showMessage(msg) {
        const el = document.getElementById('message');
        if (!el) return;
        el.textContent = msg;
        el.hidden = !msg;
    }

    async function toggleTask(checkbox) {
        const completed = checkbox.checked;
        const row = checkbox.closest('.task-row');
        showMessage('');
        checkbox.disabled = true;
        row.classList.toggle('is-done', completed);

        try {
            const response = await fetch('/api/completions/' + checkbox.dataset.completionId, {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify({completed})
            });
            const result = await response.json();
            if (!result.success) {
                checkbox.checked = 'completed_at' in result ? Boolean(result.completed_at) : !completed;
                row.classList.toggle('is-done', checkbox.checked);
                showMessage(result.message || 'Failed to save task status');
            }
        } catch (error) {
            checkbox.checked = !completed;
            row.classList.toggle('is-done', checkbox.checked);
            showMessage('Failed to save task status');
        } finally {
            checkbox.disabled = false;
        }
    }

    document.querySelectorAll('.task-checkbox').forEach((checkbox) => {
        checkbox.addEventListener('change', () => toggleTask(checkbox));
    });
</script>
'''


@bp.route('/stylist')
@role_required(*STYLIST_ROLES)
def stylist():
    board = get_boards().get(g.user.id)
    board.load()
    return render_page(
        STYLIST_TEMPLATE,
        title='Stylist dashboard',
        board=board,
        grouped=board.grouped(),
        message=board.message,
        stylist_name=g.user.full_name
    )
