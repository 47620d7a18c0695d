import sys

from chartlab.cli import main

sys.exit(main())
