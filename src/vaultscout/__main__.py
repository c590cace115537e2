import sys

from vaultscout.cli import main

sys.exit(main())
