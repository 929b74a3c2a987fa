"""Allow ``python -m codec_tester``."""

import sys

from codec_tester.cli.main import main

sys.exit(main())
