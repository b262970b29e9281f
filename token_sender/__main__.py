import sys

from token_sender.cli import main

sys.exit(main())
