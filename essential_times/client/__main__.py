import sys

from essential_times.client.cli import main

sys.exit(main())
