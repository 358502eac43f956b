"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask, current_app, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import DEFAULT_SUGGESTION_LIMIT
from .errors import StoreError
from .extensions import csrf
from .store import get_store
from .user.services import get_user


def _init_firebase(app):
    """Initialize the Firebase Admin SDK from the best credentials available."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        cred = credentials.ApplicationDefault()
        project_id = os.environ.get("FIREBASE_PROJECT_ID")

    if firebase_admin._apps:
        app.logger.info("Firebase app already initialized.")
        return

    options = {"projectId": project_id} if project_id else None
    firebase_admin.initialize_app(cred, options)


def create_app(test_config=None):
    """Create and configure an instance of the Flask application.

    Tests pass ``STORE`` in ``test_config`` to run every route against their
    own relationship store.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        SUGGESTION_LIMIT=int(
            os.environ.get("SUGGESTION_LIMIT") or DEFAULT_SUGGESTION_LIMIT
        ),
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        _init_firebase(app)

    store = app.config.pop("STORE", None)
    if store is not None:
        app.extensions["huddle.store"] = store

    # Initialize extensions
    csrf.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import friend as friend_bp

    app.register_blueprint(friend_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import chat as chat_bp

    app.register_blueprint(chat_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.before_request
    def load_logged_in_user():
        """If a user_id is in the session, load the user and store it in g."""
        user_id = session.get("user_id")
        g.user = None
        if user_id is None:
            return

        try:
            user = get_user(get_store(), user_id)
        except StoreError as e:
            current_app.logger.error(f"Error loading user from session: {e}")
            session.clear()
            raise

        if user is None:
            # User ID in session but no user in the store. Clear the session.
            session.clear()
            current_app.logger.warning(
                f"User {user_id} in session but not found in Firestore."
            )
            return
        g.user = {**user.to_summary(), "uid": user_id}

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
