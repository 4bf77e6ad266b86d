# repoask/__init__.py

__version__ = "0.1.0"

# e.g., for `python -m repoask`
from .cli import main
