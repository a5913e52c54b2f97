# number_server/routes_core.py
# Blueprint: /fetch

from flask import Blueprint, request, jsonify, current_app

core_bp = Blueprint('core', __name__)

STORE_KEY = 'number_store'


def get_store():
    return current_app.extensions[STORE_KEY]


@core_bp.route('/fetch', methods=['GET'])
def fetch():
    # Malformed n is not an error; the store falls back to its default page size
    result = get_store().take_next_page(request.args.get('n'))
    return jsonify({"numbers": result.numbers, "message": result.message, "count": result.count})
