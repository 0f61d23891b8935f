"""WSGI entry point for the standalone mock pizza backend."""

import os
from urllib.parse import urlsplit

from pizza_mock import create_app

app = create_app(config_name=os.getenv("FLASK_ENV", "development"))

if __name__ == "__main__":
    app.run(port=urlsplit(app.config["MOCK_API_URL"]).port or 3000)
