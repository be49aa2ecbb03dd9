from flask import Blueprint, current_app, jsonify
from ..handlers.dashboard import get_dashboard_stats
from ..serializers import to_jsonable

main_bp = Blueprint('main', __name__)

@main_bp.get('/')
def dashboard():
    stats = get_dashboard_stats()
    return jsonify({'app': current_app.config['APP_NAME'], 'stats': to_jsonable(stats)})
