import sys

from pathtracer.cli import main

# Worker processes may re-import the main module; only the parent renders.
if __name__ == "__main__":
    sys.exit(main())
