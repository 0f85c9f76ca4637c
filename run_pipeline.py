"""Convenience shim to run the release scanner from a source checkout."""

from __future__ import annotations

import sys

from eyespy.pipeline.runner import main


if __name__ == "__main__":
    sys.exit(main())
