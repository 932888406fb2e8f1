import signal
import sys

from spill import create_app, close_store

app = create_app()


def _terminate(signum, frame):
    # Unwind through the finally block below so the store is closed
    sys.exit(0)


if __name__ == '__main__':
    signal.signal(signal.SIGTERM, _terminate)
    app.logger.info(f"[success] Server starting on port {app.config['PORT']}")
    try:
        app.run(port=app.config['PORT'])
    finally:
        app.logger.info('Shutting down server...')
        close_store(app)
