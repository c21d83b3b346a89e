import os
from saveit.main import create_app
import argparse


# Create the Flask application at module level
# This is required for gunicorn to find the app object
app = create_app()

if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description='Run the SaveIt API server')
    parser.add_argument('--port', type=int, default=5000,
                        help='Port to run the application on')
    args = parser.parse_args()

    # Debug mode should be controlled by FLASK_ENV, not hardcoded
    debug_mode = os.environ.get('FLASK_ENV', 'development') == 'development'
    app.run(host='0.0.0.0', port=args.port, debug=debug_mode)
