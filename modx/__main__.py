"""Module entry point for the modx CLI."""

from .main import main

raise SystemExit(main())
