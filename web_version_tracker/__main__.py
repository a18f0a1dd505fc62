import sys

from web_version_tracker.cli import main


sys.exit(main())
