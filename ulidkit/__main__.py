import sys

from ulidkit.cli import main

sys.exit(main())
