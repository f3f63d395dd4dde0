import os
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')


def create_app(test_config=None):
    app = Flask(__name__)

    test_config = test_config or {}
    is_production = os.getenv('FLASK_ENV') == 'production'

    # Token signing secret, no insecure fallback
    secret_key = test_config.get('SECRET_KEY') or os.getenv('SECRET_KEY')
    if not secret_key:
        raise RuntimeError('SECRET_KEY environment variable is required')
    app.config['SECRET_KEY'] = secret_key

    # Database configuration
    database_url = test_config.get('SQLALCHEMY_DATABASE_URI') or os.getenv('DATABASE_URL')
    if not database_url:
        raise RuntimeError('DATABASE_URL environment variable is required')

    # Hosted Postgres providers hand out postgres:// URLs
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)

    if is_production and not database_url.startswith('postgresql'):
        raise RuntimeError(
            'PostgreSQL is required in production. '
            'DATABASE_URL must start with postgresql://'
        )

    app.config['SQLALCHEMY_DATABASE_URI'] = database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    app.config['BCRYPT_LOG_ROUNDS'] = int(os.getenv('BCRYPT_LOG_ROUNDS', 12))
    app.config['JWT_EXPIRES_IN'] = int(os.getenv('JWT_EXPIRES_IN', 86400))
    app.config['AUDIT_LOG_FILE'] = os.getenv('AUDIT_LOG_FILE')

    # Request size limit (1 MB)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024

    app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    from healthmon.store import RecordStore
    app.extensions['record_store'] = RecordStore(db)

    # The mobile client is served from arbitrary origins
    CORS(app, send_wildcard=True)

    # Setup audit logging
    from healthmon.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    # Register blueprints
    from healthmon.routes.auth import auth_bp
    from healthmon.routes.users import users_bp
    from healthmon.routes.readings import readings_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(readings_bp)

    @app.route('/')
    def index():
        return {'message': 'welcome to health monitoring app API'}, 200

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    @app.cli.command('db-version')
    def db_version():
        """Print the version string reported by the database server."""
        print(app.extensions['record_store'].database_version())

    return app
