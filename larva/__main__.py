# SPDX-License-Identifier: MIT
"""Allow `python -m larva`."""

import sys

from larva.cli import main

sys.exit(main())
