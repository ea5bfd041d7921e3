import sys

from vipbalance.cli import main

sys.exit(main())
