import sys

from senate_roster.cli import main

sys.exit(main())
