import sys

from magicsniff.cli import main

sys.exit(main())
