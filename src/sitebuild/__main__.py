"""Allow running as ``python -m sitebuild``."""

from sitebuild.cli import main

if __name__ == "__main__":
    main()
