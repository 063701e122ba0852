import sys

from amount_engine.cli import main

sys.exit(main())
