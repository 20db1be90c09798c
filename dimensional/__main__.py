import sys

from dimensional.cli import main

sys.exit(main())
