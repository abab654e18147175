import sys

from duru.cli import main

sys.exit(main())
