# number_server/__init__.py
# Application factory, creates the Flask app around a NumberStore

import logging

from flask import Flask

from number_server.routes_core import core_bp, STORE_KEY


def create_app(store):
    """Create the Flask application serving pages from `store`."""
    app = Flask(__name__)
    app.json.sort_keys = False

    # The store is owned by the app, handlers reach it through current_app
    app.extensions[STORE_KEY] = store

    app.register_blueprint(core_bp)
    logging.debug(f"App created with {store.total} number(s)")

    return app
