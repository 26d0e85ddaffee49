from .settings import Settings
from .logging_setup import setup_logging
