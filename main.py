"""WSGI entrypoint for the recipe API.

Containerized deployments serve the ``app`` object below with Gunicorn. The
sample-recipe seed runs when this module is imported, so start Gunicorn with
``--preload`` (``gunicorn --preload -w 4 main:app``): the module is then
imported once in the master process and the seed runs exactly once before
workers fork. Alternatively set ``SEED_ON_STARTUP=false`` and seed explicitly
with ``flask --app main seed``. Running ``python main.py`` starts the Flask
development server on ``PORT`` for local work.
"""

import logging

from dotenv import load_dotenv

from app import create_app
from app.config import Settings
from app.seed import seed_if_empty

load_dotenv()

settings = Settings.from_env()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app(settings=settings)

if settings.seed_on_startup:
    seed_if_empty(app.config["RECIPE_STORAGE"], settings.seed_url)


__all__ = ["app"]


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port)
