import sys

from notedex.cli import main

sys.exit(main())
