import sys

from airfoil_definitions.cli import main

sys.exit(main())
