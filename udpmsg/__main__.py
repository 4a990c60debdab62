"""Allow ``python -m udpmsg``."""

from .client import main

main()
