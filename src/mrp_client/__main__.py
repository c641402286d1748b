"""Allow ``python -m mrp_client``."""

import sys

from mrp_client.main import main

if __name__ == "__main__":
    sys.exit(main())
