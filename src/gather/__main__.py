import sys

from gather.cli import main

if __name__ == "__main__":
    sys.exit(main())
