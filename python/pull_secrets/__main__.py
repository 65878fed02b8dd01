import sys

from pull_secrets.cli import main

sys.exit(main())
