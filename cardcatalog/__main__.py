"""Allow running the API with ``python -m cardcatalog``."""

from .main import main

main()
