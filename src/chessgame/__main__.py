"""Allow ``python -m chessgame``."""

from chessgame.app import main

main()
