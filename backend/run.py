"""
Flask development server entry point.
"""
import os
import logging
from healthmon import create_app

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger('healthmon')

app = create_app()

if __name__ == '__main__':
    host = os.getenv('HOST', '0.0.0.0')
    port = int(os.getenv('PORT', 3000))
    is_production = os.getenv('FLASK_ENV') == 'production'
    debug = not is_production

    with app.app_context():
        logger.info('Database version: %s', app.extensions['record_store'].database_version())

    logger.info('App is listening on port %s', port)
    app.run(
        host=host,
        port=port,
        debug=debug
    )
