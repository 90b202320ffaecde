#!/usr/bin/env python3
import sys
import os

# Add src to path so orasim package can be found
current_dir = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(current_dir, 'src')
sys.path.insert(0, src_dir)

from orasim.logging_utils import configure_logging
from orasim.server.main import create_app

if __name__ == "__main__":
    app = create_app()
    configure_logging(app.config['LOG_LEVEL'])
    host, port = app.config['HOST'], app.config['PORT']
    print(f"Starting Oracle Database Simulator API on http://{host}:{port}")
    app.run(debug=app.config['DEBUG'], host=host, port=port)
