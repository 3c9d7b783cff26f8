import sys

from pokesync.cli import main

sys.exit(main())
