from flask import Blueprint, current_app, g, jsonify, request

from models.errors import SalonApiError, http_status
from utils.auth import STYLIST_ROLES, api_role_required, get_boards

bp = Blueprint('api_routes', __name__)


@bp.route('/api/today')
@api_role_required(*STYLIST_ROLES)
def today():
    board = get_boards().get(g.user.id)
    if not board.load():
        return jsonify({'success': False, 'message': board.message}), 502
    return jsonify({
        'success': True,
        'assignment_id': board.assignment_id,
        'tasks': [task.to_dict() for task in board.snapshot()]
    })


@bp.route('/api/completions/<int:completion_id>', methods=['POST'])
@api_role_required(*STYLIST_ROLES)
def set_completion(completion_id):
    data = request.get_json(silent=True) or {}
    completed = data.get('completed')
    if not isinstance(completed, bool):
        return jsonify({'success': False, 'message': '"completed" must be true or false'}), 400

    board = get_boards().get(g.user.id)
    if not board.loaded:
        board.load()
    try:
        result = board.toggle(completion_id, completed)
    except SalonApiError as e:
        return jsonify({'success': False, 'completion_id': completion_id, 'message': str(e)}), http_status(e)

    body = {
        'success': result.saved,
        'completion_id': completion_id,
        'completed_at': result.completed_at,
        'message': '' if result.saved else board.message
    }
    return jsonify(body), 200 if result.saved else 502


@bp.route('/health_check')
def health_check():
    return jsonify({
        'status': 'ok',
        'supabase_configured': current_app.extensions['settings'].supabase_configured
    })
