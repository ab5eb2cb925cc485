"""
Redline - Main Flask Application
Compare two versions of a document and review the tracked changes
"""
from flask import Flask, jsonify, g

from config_logging import get_config, get_logger, StructuredLogger, APP_NAME, VERSION
from redline import redline_blueprint

logger = get_logger('app')


def create_app(config=None):
    """Build the Flask app with the redline API mounted at /api/redline."""
    config = config or get_config()
    ok, errors = config.validate()
    if not ok:
        for error in errors:
            logger.warning(f"Configuration problem: {error}")

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = config.max_content_length
    app.register_blueprint(redline_blueprint, url_prefix='/api/redline')

    @app.before_request
    def assign_correlation_id():
        g.correlation_id = StructuredLogger.new_correlation_id()

    @app.errorhandler(413)
    def file_too_large(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'FILE_TOO_LARGE',
                'message': f'Upload exceeds {config.max_content_length // (1024 * 1024)} MB',
                'correlation_id': getattr(g, 'correlation_id', 'unknown')
            }
        }), 413

    @app.route('/api/health')
    def health():
        return jsonify({
            'status': 'ok',
            'app': APP_NAME,
            'version': VERSION,
            'summaries_enabled': bool(config.gemini_api_key)
        })

    return app


app = create_app()


if __name__ == '__main__':
    config = get_config()
    print("=" * 60)
    print(f"  {APP_NAME} {VERSION}")
    print(f"  Starting server at http://{config.host}:{config.port}")
    print("=" * 60)
    app.run(host=config.host, port=config.port, debug=config.debug)
