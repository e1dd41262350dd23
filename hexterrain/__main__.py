"""Allow ``python -m hexterrain``."""
from .cli import main

raise SystemExit(main())
