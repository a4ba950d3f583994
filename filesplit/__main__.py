import sys

from filesplit.cli import main

if __name__ == "__main__":
    sys.exit(main())
