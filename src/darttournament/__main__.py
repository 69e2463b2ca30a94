import sys

from darttournament.cli import main

sys.exit(main())
