"""Allow ``python -m fpipe``."""

from .cli.main import main

if __name__ == "__main__":
    main()
