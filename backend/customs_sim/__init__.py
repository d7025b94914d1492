"""
Flask Application Factory
Creates and configures the customs declaration validation API with CORS and blueprints
"""
import logging
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv
import os

__version__ = '1.0.0'


def create_app(test_config=None):
    load_dotenv()

    # Configure logging
    log_level = logging.DEBUG if os.environ.get('FLASK_DEBUG', '').lower() == 'true' else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger('customsim')

    # Suppress noisy werkzeug access logs
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    app = Flask(__name__)

    from customs_sim.config import config
    from customs_sim.services.rule_tables import get_rule_tables

    app.config['MAX_CONTENT_LENGTH'] = config.MAX_CONTENT_LENGTH
    if test_config:
        app.config.update(test_config)

    logger.info(f"Rule tables: {config.rules_file()} ({'custom' if config.is_custom_rules() else 'packaged'})")

    # CORS only needed in development (when the form frontend runs separately)
    if os.environ.get('FLASK_ENV', 'development') == 'development':
        CORS(app, resources={
            r"/api/*": {
                "origins": "*",
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization"]
            }
        })
        logger.info("CORS enabled for development")

    # Request logging - only log errors and non-status endpoints at debug level
    @app.before_request
    def log_request():
        if request.path.startswith('/api') and request.path != '/api/status':
            logger.debug(f"→ {request.method} {request.path}")

    @app.after_request
    def log_response(response):
        if request.path.startswith('/api') and request.path != '/api/status':
            if response.status_code >= 400:
                logger.warning(f"← {request.method} {request.path} [{response.status_code}]")
            else:
                logger.debug(f"← {request.method} {request.path} [{response.status_code}]")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'healthy',
            'service': 'Customs Declaration Validation API',
            'version': __version__
        })

    @app.route('/api/status', methods=['GET'])
    def api_status():
        """Return configuration status for frontend"""
        try:
            tables = get_rule_tables()
        except RuntimeError as e:
            return jsonify({'rulesLoaded': False, 'error': str(e)}), 503
        return jsonify({
            'rulesLoaded': True,
            'customRules': config.is_custom_rules(),
            'tables': {
                'transportModes': len(tables.transport_modes),
                'supervisionModes': len(tables.supervision_modes),
                'currencies': len(tables.currencies),
                'goodsCategories': len(tables.category_rules)
            }
        })

    from customs_sim.routes import declarations, customs

    app.register_blueprint(declarations.bp)
    app.register_blueprint(customs.bp)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({'error': 'Request too large'}), 413

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({'error': 'Internal server error'}), 500

    return app
