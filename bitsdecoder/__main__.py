import sys

from bitsdecoder.cli import main

sys.exit(main())
