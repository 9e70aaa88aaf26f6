"""
Run the API server: `python -m event_tracker`.

Listens on 0.0.0.0:8080. Settings are validated on import, so a bad
DATABASE_URL aborts before the socket is bound.
"""

import logging

import uvicorn

from event_tracker.config import LISTEN_HOST, LISTEN_PORT, settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from event_tracker.main import app

    logging.getLogger(__name__).info(f"Listening on http://{LISTEN_HOST}:{LISTEN_PORT}")
    uvicorn.run(app, host=LISTEN_HOST, port=LISTEN_PORT, log_config=None)


if __name__ == "__main__":
    main()
