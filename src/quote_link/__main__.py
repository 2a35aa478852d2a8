"""
Entry point for running quote_link as a module.

Allows running the quote link server via:
    python -m quote_link
"""

from quote_link.server import main

if __name__ == "__main__":
    main()
