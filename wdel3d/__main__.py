import sys

from wdel3d.cli import main

sys.exit(main())
