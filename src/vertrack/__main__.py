"""Allow ``python -m vertrack``."""

from vertrack.main import main

if __name__ == "__main__":
    main()
