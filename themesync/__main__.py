import sys

from themesync.cli import main

sys.exit(main())
