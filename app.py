"""
La Quinta Snack Bar
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the snackbar package.
"""

import logging
import os

from snackbar import create_app
from snackbar.config import Config

logging.basicConfig(level=Config.LOG_LEVEL,
                    format='%(asctime)s %(levelname)s %(name)s: %(message)s')

# Create the Flask application using the factory
app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=int(os.environ.get('PORT', 3000)))
