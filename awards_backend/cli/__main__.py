import sys

from awards_backend.cli import main

sys.exit(main())
