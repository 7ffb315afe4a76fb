# app.py - salon duty checklist (staff PIN login, manager assignments, stylist tasks)
import logging

from flask import Flask
from flask_cors import CORS

from config import Settings
from models.supabase_client import SupabaseClient
from models.task_board import TaskBoardRegistry
from routes import api_routes, auth_routes, manager_routes, stylist_routes
from utils.session_store import SessionStore

logger = logging.getLogger(__name__)


def create_app(settings=None, client=None, session_store_factory=None):
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if not settings.supabase_configured:
        logger.warning('Missing Supabase env vars: SUPABASE_URL / SUPABASE_KEY')

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    client = client or SupabaseClient(settings.supabase_url, settings.supabase_key, timeout=settings.request_timeout)
    app.extensions['settings'] = settings
    app.extensions['supabase_client'] = client
    app.extensions['task_boards'] = TaskBoardRegistry(
        client, tz=settings.salon_timezone, max_boards=settings.max_boards
    )
    app.extensions['session_store_factory'] = session_store_factory or SessionStore

    app.register_blueprint(auth_routes.bp)
    app.register_blueprint(manager_routes.bp)
    app.register_blueprint(stylist_routes.bp)
    app.register_blueprint(api_routes.bp)

    return app


if __name__ == '__main__':
    settings = Settings.from_env()
    app = create_app(settings)
    logger.info('Starting on http://localhost:%s', settings.port)
    app.run(host='0.0.0.0', port=settings.port, debug=settings.debug)
