import sys

from rgsclient.cli import main

sys.exit(main())
