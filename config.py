import os

from dotenv import load_dotenv

from services.config_schema import from_env

load_dotenv()


def load_config(environ=None):
    """Return the validated configuration built from ``DEBA_*`` variables.

    Reads ``os.environ`` (already merged with any ``.env`` file) unless an
    explicit mapping is given.
    """
    return from_env(os.environ if environ is None else environ)
