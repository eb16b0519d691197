"""Allow ``python -m envcrypto``."""

import sys

from envcrypto.cli import main

sys.exit(main())
