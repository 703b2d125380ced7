# sushi_api/wsgi.py
import os

import eventlet

# ✅ PRECISA vir antes de qualquer outro import
eventlet.monkey_patch()

from sushi_api.container import SERVICES_KEY  # noqa: E402
from sushi_api.main import create_app  # noqa: E402

app = create_app()
socketio = app.extensions[SERVICES_KEY].socketio

if __name__ == "__main__":
    # em produção: gunicorn -k eventlet -w 1 sushi_api.wsgi:app
    socketio.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3000")), debug=app.config["DEBUG"])
